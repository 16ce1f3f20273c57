"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    AggregateSummary,
    DashboardSummary,
    DateRangeFilter,
    DayBucket,
    OrderAggregate,
    ProductRevenue,
    ProductSummary,
    RawRecord,
    SalesSummary,
    UserSummary,
)

__all__ = [
    "AggregateSummary",
    "DashboardSummary",
    "DateRangeFilter",
    "DayBucket",
    "OrderAggregate",
    "ProductRevenue",
    "ProductSummary",
    "RawRecord",
    "SalesSummary",
    "UserSummary",
]
