"""
SUMMARY BUILDER - ASYNC
Builds the admin dashboard summary from independent read-only pipelines.

RESPONSIBILITIES:
- Fan out sales / users / products / revenue-by-product queries concurrently
- Feed record sets through RecordAggregator
- Assemble the summary objects handed to the API layer

RULES:
❌ No writes, no caching, no shared mutable state between pipelines
❌ No partial summaries: any failed pipeline fails the whole build
✅ One clock value per request
✅ Money converted from minor units exactly once, here
"""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from typing import Awaitable, Callable, Optional, Protocol

from app.domain.errors import DashboardError, SummaryUnavailableError
from app.domain.models import (
    DashboardSummary,
    DateRangeFilter,
    OrderAggregate,
    ProductRevenue,
    ProductSummary,
    RawRecord,
    SalesSummary,
    UserSummary,
)
from app.domain.services.date_interval import DateInterval, EmptyRangePolicy
from app.domain.services.record_aggregator import RecordAggregator, safe_divide
from app.utils.time import now_local_naive

logger = logging.getLogger(__name__)


class DashboardDataSource(Protocol):
    """Protocol for dashboard data access - ASYNC, read-only"""

    async def fetch_order_aggregate(self, range_filter: Optional[DateRangeFilter]) -> OrderAggregate:
        """Revenue (minor units) and count of orders in range"""
        ...

    async def fetch_order_records(self, range_filter: Optional[DateRangeFilter]) -> list[RawRecord]:
        """Orders in range; value is price paid in minor units"""
        ...

    async def fetch_user_count(self) -> int:
        """All-time user count"""
        ...

    async def fetch_user_records(self, range_filter: Optional[DateRangeFilter]) -> list[RawRecord]:
        """Users created in range"""
        ...

    async def fetch_product_count(self, is_active: bool) -> int:
        """Products available (or not) for purchase"""
        ...

    async def fetch_product_revenue(self, range_filter: Optional[DateRangeFilter]) -> list[ProductRevenue]:
        """Per-product revenue (minor units) from orders in range"""
        ...


def _first_error(group: BaseExceptionGroup) -> BaseException:
    error: BaseException = group
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error


async def _fan_out(*aws: Awaitable) -> list:
    """
    Run awaitables concurrently and wait for all of them.

    The first failure cancels the remaining tasks. Domain errors are
    re-raised unchanged; anything else becomes SummaryUnavailableError.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(aw) for aw in aws]
    except ExceptionGroup as group:
        cause = _first_error(group)
        if isinstance(cause, DashboardError):
            raise cause
        logger.error(f"Dashboard pipeline failed: {cause!r}")
        raise SummaryUnavailableError(f"Dashboard pipeline failed: {cause}") from cause

    return [task.result() for task in tasks]


class SummaryBuilder:
    """
    Summary Builder
    Orchestrates the dashboard pipelines against a DashboardDataSource
    """

    def __init__(
        self,
        data_source: DashboardDataSource,
        aggregator: Optional[RecordAggregator] = None,
        clock: Callable[[], datetime] = now_local_naive,
        empty_range_policy: Optional[EmptyRangePolicy] = None,
    ):
        """Initialize with data source and optional overrides"""
        self.data_source = data_source
        self.aggregator = aggregator or RecordAggregator()
        self.clock = clock
        self.empty_range_policy = empty_range_policy

    def _interval(
        self,
        records: list[RawRecord],
        range_filter: DateRangeFilter,
        now: datetime,
    ) -> DateInterval:
        return DateInterval.covering(
            records,
            lower=range_filter.after,
            upper=range_filter.before,
            now=now,
            empty_policy=self.empty_range_policy,
            tz=self.aggregator.tz,
        )

    async def build_sales_summary(
        self,
        range_filter: Optional[DateRangeFilter] = None,
        now: Optional[datetime] = None,
    ) -> SalesSummary:
        """
        Sales pipeline: daily revenue series, total revenue, order count
        and average order value, all folded from the same order records

        Args:
            range_filter: Optional created_at bounds
            now: Clock value shared with sibling pipelines

        Returns:
            SalesSummary
        """
        range_filter = range_filter or DateRangeFilter()
        now = now or self.clock()

        orders = await self.data_source.fetch_order_records(range_filter)

        records = [RawRecord(order.timestamp, Decimal(order.value) / 100) for order in orders]
        summary = self.aggregator.aggregate(records, self._interval(records, range_filter, now))

        return SalesSummary(
            series=summary.series,
            amount=summary.total,
            number_of_sales=summary.count,
            average_order_value=summary.average,
        )

    async def build_user_summary(
        self,
        range_filter: Optional[DateRangeFilter] = None,
        now: Optional[datetime] = None,
    ) -> UserSummary:
        """
        User pipeline: daily signup series, all-time user count and
        all-time revenue per user
        """
        range_filter = range_filter or DateRangeFilter()
        now = now or self.clock()

        user_count, order_aggregate, users = await _fan_out(
            self.data_source.fetch_user_count(),
            self.data_source.fetch_order_aggregate(None),
            self.data_source.fetch_user_records(range_filter),
        )

        records = [RawRecord(user.timestamp) for user in users]
        summary = self.aggregator.aggregate(records, self._interval(records, range_filter, now))

        return UserSummary(
            series=summary.series,
            user_count=user_count,
            average_value_per_user=safe_divide(order_aggregate.total_revenue, user_count),
        )

    async def build_product_summary(self) -> ProductSummary:
        """Product pipeline: availability counts, no time dimension"""
        active_count, inactive_count = await _fan_out(
            self.data_source.fetch_product_count(True),
            self.data_source.fetch_product_count(False),
        )
        return ProductSummary(active_count=active_count, inactive_count=inactive_count)

    async def build_revenue_by_product(
        self,
        range_filter: Optional[DateRangeFilter] = None,
    ) -> list[ProductRevenue]:
        """Revenue per product in major units, highest first"""
        rows = await self.data_source.fetch_product_revenue(range_filter or DateRangeFilter())
        revenue = [ProductRevenue(name=row.name, revenue=Decimal(row.revenue) / 100) for row in rows]
        return sorted(revenue, key=lambda item: (-item.revenue, item.name))

    async def build_dashboard(
        self,
        sales_filter: Optional[DateRangeFilter] = None,
        users_filter: Optional[DateRangeFilter] = None,
        revenue_filter: Optional[DateRangeFilter] = None,
    ) -> DashboardSummary:
        """
        Build every dashboard section concurrently

        Each chart carries its own range filter. If any section fails the
        others are cancelled and no summary is returned.

        Raises:
            SummaryUnavailableError: If any pipeline failed
        """
        now = self.clock()
        logger.info(
            f"Building dashboard summary (sales={sales_filter}, "
            f"users={users_filter}, revenue={revenue_filter})"
        )

        sales, users, products, revenue_by_product = await _fan_out(
            self.build_sales_summary(sales_filter, now=now),
            self.build_user_summary(users_filter, now=now),
            self.build_product_summary(),
            self.build_revenue_by_product(revenue_filter),
        )

        return DashboardSummary(
            sales=sales,
            users=users,
            products=products,
            revenue_by_product=revenue_by_product,
        )
