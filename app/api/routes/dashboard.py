"""
Admin Dashboard API Routes
Sales, customer and product summaries for the operator dashboard

Range Selection Rules (per chart):
- If `range` is provided → that preset is used
- Else if `from` and/or `to` is provided → custom inclusive range
  (a missing bound is left open)
- Else → settings.DEFAULT_RANGE
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.errors import EmptyDatasetError, SummaryUnavailableError
from app.domain.models import DayBucket, ProductRevenue, ProductSummary, SalesSummary, UserSummary
from app.domain.services.range_options import RangeOption, get_range_option, range_options
from app.domain.services.summary_builder import SummaryBuilder
from app.infrastructure.db.database import get_session_factory
from app.infrastructure.db.repositories.dashboard_repository import DashboardRepository
from app.utils.formatters import format_currency, format_date, format_number

logger = logging.getLogger(__name__)
router = APIRouter()


# -------------------------------------------------------------------
# Response models
# -------------------------------------------------------------------

class SalesPoint(BaseModel):
    date: date
    label: str
    total_sales: float


class UserPoint(BaseModel):
    date: date
    label: str
    total_users: int


class SalesSummaryResponse(BaseModel):
    series: List[SalesPoint]
    amount: float
    number_of_sales: int
    average_order_value: float


class UserSummaryResponse(BaseModel):
    series: List[UserPoint]
    user_count: int
    average_value_per_user: float


class ProductSummaryResponse(BaseModel):
    active_count: int
    inactive_count: int


class ProductRevenueResponse(BaseModel):
    name: str
    revenue: float


class RangeOptionResponse(BaseModel):
    key: str
    label: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class DashboardCard(BaseModel):
    title: str
    subtitle: str
    body: str


class DashboardResponse(BaseModel):
    cards: List[DashboardCard]
    sales: SalesSummaryResponse
    users: UserSummaryResponse
    products: ProductSummaryResponse
    revenue_by_product: List[ProductRevenueResponse]
    total_sales_range: str
    new_customers_range: str
    revenue_by_product_range: str


# -------------------------------------------------------------------
# Helper utilities
# -------------------------------------------------------------------

def get_summary_builder(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SummaryBuilder:
    return SummaryBuilder(DashboardRepository(session_factory))


def resolve_range(range_key: Optional[str], from_: Optional[date], to: Optional[date]) -> RangeOption:
    try:
        return get_range_option(range_key, from_, to)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _sales_response(summary: SalesSummary) -> SalesSummaryResponse:
    return SalesSummaryResponse(
        series=[_sales_point(bucket) for bucket in summary.series],
        amount=float(summary.amount),
        number_of_sales=summary.number_of_sales,
        average_order_value=float(summary.average_order_value),
    )


def _sales_point(bucket: DayBucket) -> SalesPoint:
    return SalesPoint(date=bucket.date, label=format_date(bucket.date), total_sales=float(bucket.metric))


def _user_response(summary: UserSummary) -> UserSummaryResponse:
    return UserSummaryResponse(
        series=[
            UserPoint(date=bucket.date, label=format_date(bucket.date), total_users=int(bucket.metric))
            for bucket in summary.series
        ],
        user_count=summary.user_count,
        average_value_per_user=float(summary.average_value_per_user),
    )


def _product_response(summary: ProductSummary) -> ProductSummaryResponse:
    return ProductSummaryResponse(
        active_count=summary.active_count,
        inactive_count=summary.inactive_count,
    )


def _revenue_response(rows: List[ProductRevenue]) -> List[ProductRevenueResponse]:
    return [ProductRevenueResponse(name=row.name, revenue=float(row.revenue)) for row in rows]


def build_cards(sales: SalesSummary, users: UserSummary, products: ProductSummary) -> List[DashboardCard]:
    """Headline cards shown above the charts"""
    return [
        DashboardCard(
            title="Sales",
            subtitle=f"{format_number(sales.number_of_sales)} Orders",
            body=format_currency(sales.amount),
        ),
        DashboardCard(
            title="Customers",
            subtitle=f"{format_currency(users.average_value_per_user)} Average Value",
            body=format_number(users.user_count),
        ),
        DashboardCard(
            title="Active Products",
            subtitle=f"{format_number(products.inactive_count)} Inactive",
            body=format_number(products.active_count),
        ),
    ]


async def _run(build):
    """Await a builder call, translating domain errors to HTTP errors"""
    try:
        return await build
    except EmptyDatasetError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SummaryUnavailableError:
        logger.exception("Dashboard summary unavailable")
        raise HTTPException(status_code=500, detail="Internal server error")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@router.get(
    "",
    response_model=DashboardResponse,
    summary="Admin dashboard summary",
    description="Cards, daily sales / new customer series, product counts and revenue by product",
)
async def get_dashboard(
    total_sales_range: Optional[str] = Query(None),
    total_sales_from: Optional[date] = Query(None),
    total_sales_to: Optional[date] = Query(None),
    new_customers_range: Optional[str] = Query(None),
    new_customers_from: Optional[date] = Query(None),
    new_customers_to: Optional[date] = Query(None),
    revenue_by_product_range: Optional[str] = Query(None),
    revenue_by_product_from: Optional[date] = Query(None),
    revenue_by_product_to: Optional[date] = Query(None),
    builder: SummaryBuilder = Depends(get_summary_builder),
):
    sales_range = resolve_range(total_sales_range, total_sales_from, total_sales_to)
    users_range = resolve_range(new_customers_range, new_customers_from, new_customers_to)
    revenue_range = resolve_range(revenue_by_product_range, revenue_by_product_from, revenue_by_product_to)

    summary = await _run(
        builder.build_dashboard(
            sales_filter=sales_range.to_filter(),
            users_filter=users_range.to_filter(),
            revenue_filter=revenue_range.to_filter(),
        )
    )

    return DashboardResponse(
        cards=build_cards(summary.sales, summary.users, summary.products),
        sales=_sales_response(summary.sales),
        users=_user_response(summary.users),
        products=_product_response(summary.products),
        revenue_by_product=_revenue_response(summary.revenue_by_product),
        total_sales_range=sales_range.label,
        new_customers_range=users_range.label,
        revenue_by_product_range=revenue_range.label,
    )


@router.get("/ranges", response_model=List[RangeOptionResponse])
async def list_ranges():
    return [
        RangeOptionResponse(
            key=option.key,
            label=option.label,
            start_date=option.start_date.isoformat() if option.start_date else None,
            end_date=option.end_date.isoformat() if option.end_date else None,
        )
        for option in range_options().values()
    ]


@router.get("/sales", response_model=SalesSummaryResponse)
async def get_sales(
    range: Optional[str] = Query(None),
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    builder: SummaryBuilder = Depends(get_summary_builder),
):
    option = resolve_range(range, from_, to)
    return _sales_response(await _run(builder.build_sales_summary(option.to_filter())))


@router.get("/users", response_model=UserSummaryResponse)
async def get_users(
    range: Optional[str] = Query(None),
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    builder: SummaryBuilder = Depends(get_summary_builder),
):
    option = resolve_range(range, from_, to)
    return _user_response(await _run(builder.build_user_summary(option.to_filter())))


@router.get("/products", response_model=ProductSummaryResponse)
async def get_products(builder: SummaryBuilder = Depends(get_summary_builder)):
    return _product_response(await _run(builder.build_product_summary()))


@router.get("/revenue-by-product", response_model=List[ProductRevenueResponse])
async def get_revenue_by_product(
    range: Optional[str] = Query(None),
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    builder: SummaryBuilder = Depends(get_summary_builder),
):
    option = resolve_range(range, from_, to)
    return _revenue_response(await _run(builder.build_revenue_by_product(option.to_filter())))
