"""
Order Repository
Read operations over orders for dashboard reporting
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import and_, func, select
from decimal import Decimal
from typing import List, Optional

from app.infrastructure.db.models import OrderModel, ProductModel
from app.domain.models import DateRangeFilter, OrderAggregate, ProductRevenue, RawRecord


def created_at_conditions(column, range_filter: Optional[DateRangeFilter]) -> list:
    """Inclusive created_at bounds for an optional filter"""
    conditions = []
    if range_filter is None:
        return conditions
    if range_filter.after is not None:
        conditions.append(column >= range_filter.after)
    if range_filter.before is not None:
        conditions.append(column <= range_filter.before)
    return conditions


class OrderRepository:
    """Repository for orders"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get_aggregate(self, range_filter: Optional[DateRangeFilter] = None) -> OrderAggregate:
        """
        Sum of price paid and number of orders

        Args:
            range_filter: Optional created_at bounds (None = all time)

        Returns:
            OrderAggregate in minor units
        """
        result = await self.session.execute(
            select(
                func.coalesce(func.sum(OrderModel.price_paid_in_cents), 0),
                func.count(OrderModel.id),
            )
            .where(*created_at_conditions(OrderModel.created_at, range_filter))
        )
        total, count = result.one()
        return OrderAggregate(total_revenue_minor_units=int(total or 0), count=int(count or 0))

    async def list_records(self, range_filter: Optional[DateRangeFilter] = None) -> List[RawRecord]:
        """
        Orders in range as (created_at, price paid in minor units)

        Returns:
            RawRecords ordered by created_at ascending
        """
        result = await self.session.execute(
            select(OrderModel.created_at, OrderModel.price_paid_in_cents)
            .where(*created_at_conditions(OrderModel.created_at, range_filter))
            .order_by(OrderModel.created_at.asc())
        )
        return [
            RawRecord(timestamp=created_at, value=Decimal(price_paid_in_cents))
            for created_at, price_paid_in_cents in result.all()
        ]

    async def get_revenue_by_product(
        self,
        range_filter: Optional[DateRangeFilter] = None
    ) -> List[ProductRevenue]:
        """
        Revenue per product from orders in range

        Products without orders in range are included with zero revenue.

        Returns:
            ProductRevenue list in minor units
        """
        join_condition = and_(
            OrderModel.product_id == ProductModel.id,
            *created_at_conditions(OrderModel.created_at, range_filter),
        )
        result = await self.session.execute(
            select(
                ProductModel.name,
                func.coalesce(func.sum(OrderModel.price_paid_in_cents), 0),
            )
            .select_from(ProductModel)
            .outerjoin(OrderModel, join_condition)
            .group_by(ProductModel.id, ProductModel.name)
        )
        return [
            ProductRevenue(name=name, revenue=Decimal(int(revenue or 0)))
            for name, revenue in result.all()
        ]
