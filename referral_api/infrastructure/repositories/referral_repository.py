from typing import List
from sqlalchemy import select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import BaseRepository
from ...models import Referral
from ..database import translate_store_errors


class ReferralRepository(BaseRepository[Referral]):
    """Referral store access. Rows are inserted and read, never updated or deleted."""

    def __init__(self, session: AsyncSession):
        super().__init__(Referral, session)

    async def create(  # type: ignore[override]
        self,
        *,
        referrer_name: str,
        referrer_email: str,
        referee_name: str,
        referee_email: str,
        course: str,
    ) -> Referral:
        """Insert a referral; the database assigns ``id`` and ``created_at``"""
        async with translate_store_errors("create"):
            return await super().create(obj_in={
                "referrer_name": referrer_name,
                "referrer_email": referrer_email,
                "referee_name": referee_name,
                "referee_email": referee_email,
                "course": course,
            })

    async def count(self) -> int:
        """Total number of referrals ever created"""
        async with translate_store_errors("count"):
            return await super().count()

    async def list_recent(self, limit: int = 5) -> List[Row]:
        """Most recent referrals, newest first, projected to the public columns"""
        query = (
            select(Referral.referrer_name, Referral.course, Referral.created_at)
            .order_by(Referral.created_at.desc(), Referral.id.desc())
            .limit(limit)
        )
        async with translate_store_errors("list_recent"):
            result = await self.session.execute(query)
            return list(result.all())
