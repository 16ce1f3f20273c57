from datetime import datetime
from decimal import Decimal

import pytest

from app.domain.models import DateRangeFilter
from app.infrastructure.db.models import OrderModel, ProductModel, UserModel
from app.infrastructure.db.repositories.dashboard_repository import DashboardRepository
from app.infrastructure.db.repositories.order_repository import OrderRepository
from app.infrastructure.db.repositories.product_repository import ProductRepository
from app.infrastructure.db.repositories.user_repository import UserRepository


async def _seed(db_session):
    course = ProductModel(name="Course", price_in_cents=5000, is_available_for_purchase=True)
    ebook = ProductModel(name="Ebook", price_in_cents=1000, is_available_for_purchase=True)
    retired = ProductModel(name="Retired", price_in_cents=700, is_available_for_purchase=False)
    alice = UserModel(email="alice@example.com", created_at=datetime(2024, 1, 5, 9, 0))
    bob = UserModel(email="bob@example.com", created_at=datetime(2024, 1, 7, 21, 0))
    db_session.add_all([course, ebook, retired, alice, bob])
    await db_session.flush()

    db_session.add_all([
        OrderModel(price_paid_in_cents=500, user=alice, product=course, created_at=datetime(2024, 1, 5, 10, 0)),
        OrderModel(price_paid_in_cents=300, user=alice, product=course, created_at=datetime(2024, 1, 5, 23, 59)),
        OrderModel(price_paid_in_cents=1000, user=bob, product=ebook, created_at=datetime(2024, 1, 7, 8, 0)),
        OrderModel(price_paid_in_cents=2500, user=bob, product=course, created_at=datetime(2024, 2, 1, 8, 0)),
    ])
    await db_session.commit()


JANUARY_5_TO_7 = DateRangeFilter(
    after=datetime(2024, 1, 5),
    before=datetime(2024, 1, 7, 23, 59, 59),
)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_aggregate_respects_filter(db_session):
    await _seed(db_session)
    repo = OrderRepository(db_session)

    in_range = await repo.get_aggregate(JANUARY_5_TO_7)
    all_time = await repo.get_aggregate(None)

    assert in_range.total_revenue_minor_units == 1800
    assert in_range.count == 3
    assert all_time.total_revenue_minor_units == 4300
    assert all_time.count == 4


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_aggregate_empty_table(db_session):
    aggregate = await OrderRepository(db_session).get_aggregate(None)

    assert aggregate.total_revenue_minor_units == 0
    assert aggregate.count == 0
    assert aggregate.total_revenue == Decimal("0")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_records_ordered_and_inclusive(db_session):
    await _seed(db_session)

    records = await OrderRepository(db_session).list_records(
        DateRangeFilter(after=datetime(2024, 1, 5, 10, 0), before=datetime(2024, 1, 7, 8, 0))
    )

    assert [r.value for r in records] == [Decimal(500), Decimal(300), Decimal(1000)]
    assert records == sorted(records, key=lambda r: r.timestamp)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_revenue_by_product_includes_products_without_orders(db_session):
    await _seed(db_session)

    rows = await OrderRepository(db_session).get_revenue_by_product(JANUARY_5_TO_7)

    revenue = {row.name: row.revenue for row in rows}
    assert revenue == {
        "Course": Decimal(800),
        "Ebook": Decimal(1000),
        "Retired": Decimal(0),
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_user_repository(db_session):
    await _seed(db_session)
    repo = UserRepository(db_session)

    assert await repo.count() == 2
    records = await repo.list_records(DateRangeFilter(after=datetime(2024, 1, 6)))
    assert [r.timestamp for r in records] == [datetime(2024, 1, 7, 21, 0)]
    assert records[0].value == Decimal("1")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_product_counts_by_availability(db_session):
    await _seed(db_session)
    repo = ProductRepository(db_session)

    assert await repo.count_by_availability(True) == 2
    assert await repo.count_by_availability(False) == 1


@pytest.mark.asyncio
@pytest.mark.integration
async def test_dashboard_repository_uses_own_sessions(db_session, session_factory):
    await _seed(db_session)
    repo = DashboardRepository(session_factory)

    aggregate = await repo.fetch_order_aggregate(JANUARY_5_TO_7)
    users = await repo.fetch_user_records(None)

    assert aggregate.count == 3
    assert len(users) == 2
