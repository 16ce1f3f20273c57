"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class DateRangeFilter:
    """Optional inclusive created_at bounds for a record query"""
    after: Optional[datetime] = None
    before: Optional[datetime] = None


@dataclass(frozen=True)
class RawRecord:
    """Timestamped fact supplied by the persistence layer - Immutable"""
    timestamp: datetime
    value: Decimal = Decimal("1")


@dataclass(frozen=True)
class DayBucket:
    """One calendar day's accumulated metric"""
    date: date
    metric: Decimal


@dataclass(frozen=True)
class AggregateSummary:
    """Dense daily series plus scalar aggregates over a record set"""
    series: list[DayBucket]
    total: Decimal
    count: int
    average: Decimal


@dataclass(frozen=True)
class OrderAggregate:
    """Revenue sum and order count as reported by the store"""
    total_revenue_minor_units: int
    count: int

    @property
    def total_revenue(self) -> Decimal:
        return Decimal(self.total_revenue_minor_units) / 100


@dataclass(frozen=True)
class ProductRevenue:
    """Revenue attributed to a single product"""
    name: str
    revenue: Decimal


@dataclass(frozen=True)
class SalesSummary:
    series: list[DayBucket]
    amount: Decimal
    number_of_sales: int
    average_order_value: Decimal


@dataclass(frozen=True)
class UserSummary:
    series: list[DayBucket]
    user_count: int
    average_value_per_user: Decimal


@dataclass(frozen=True)
class ProductSummary:
    """Product availability counts, no time dimension"""
    active_count: int
    inactive_count: int


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the admin dashboard renders for one request"""
    sales: SalesSummary
    users: UserSummary
    products: ProductSummary
    revenue_by_product: list[ProductRevenue] = field(default_factory=list)
