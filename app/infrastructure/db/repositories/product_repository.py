"""
Product Repository
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select

from app.infrastructure.db.models import ProductModel


class ProductRepository:
    """Repository for products"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_by_availability(self, is_active: bool) -> int:
        """Number of products (not) available for purchase"""
        result = await self.session.execute(
            select(func.count(ProductModel.id))
            .where(ProductModel.is_available_for_purchase.is_(is_active))
        )
        return int(result.scalar() or 0)
