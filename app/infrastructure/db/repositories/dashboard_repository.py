"""
Dashboard Repository
DashboardDataSource backed by SQLAlchemy.

Every fetch opens its own session: the summary builder issues these
queries concurrently and an AsyncSession is not safe to share across tasks.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import List, Optional

from app.infrastructure.db.repositories.order_repository import OrderRepository
from app.infrastructure.db.repositories.product_repository import ProductRepository
from app.infrastructure.db.repositories.user_repository import UserRepository
from app.domain.models import DateRangeFilter, OrderAggregate, ProductRevenue, RawRecord


class DashboardRepository:
    """Read-only data source for the summary builder"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize with a session factory"""
        self.session_factory = session_factory

    async def fetch_order_aggregate(self, range_filter: Optional[DateRangeFilter]) -> OrderAggregate:
        async with self.session_factory() as session:
            return await OrderRepository(session).get_aggregate(range_filter)

    async def fetch_order_records(self, range_filter: Optional[DateRangeFilter]) -> List[RawRecord]:
        async with self.session_factory() as session:
            return await OrderRepository(session).list_records(range_filter)

    async def fetch_user_count(self) -> int:
        async with self.session_factory() as session:
            return await UserRepository(session).count()

    async def fetch_user_records(self, range_filter: Optional[DateRangeFilter]) -> List[RawRecord]:
        async with self.session_factory() as session:
            return await UserRepository(session).list_records(range_filter)

    async def fetch_product_count(self, is_active: bool) -> int:
        async with self.session_factory() as session:
            return await ProductRepository(session).count_by_availability(is_active)

    async def fetch_product_revenue(self, range_filter: Optional[DateRangeFilter]) -> List[ProductRevenue]:
        async with self.session_factory() as session:
            return await OrderRepository(session).get_revenue_by_product(range_filter)
