"""
User Repository
Read operations over customer accounts
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select
from typing import List, Optional

from app.infrastructure.db.models import UserModel
from app.infrastructure.db.repositories.order_repository import created_at_conditions
from app.domain.models import DateRangeFilter, RawRecord


class UserRepository:
    """Repository for users"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def count(self) -> int:
        """All-time number of users"""
        result = await self.session.execute(select(func.count(UserModel.id)))
        return int(result.scalar() or 0)

    async def list_records(self, range_filter: Optional[DateRangeFilter] = None) -> List[RawRecord]:
        """
        Users created in range, one record each

        Returns:
            RawRecords ordered by created_at ascending
        """
        result = await self.session.execute(
            select(UserModel.created_at)
            .where(*created_at_conditions(UserModel.created_at, range_filter))
            .order_by(UserModel.created_at.asc())
        )
        return [RawRecord(timestamp=created_at) for created_at in result.scalars().all()]
