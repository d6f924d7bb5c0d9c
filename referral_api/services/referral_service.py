"""Referral submission and statistics."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.base import BaseService
from ..core.exceptions import DeliveryFailedError
from ..infrastructure.database import translate_store_errors
from ..infrastructure.repositories import ReferralRepository
from ..models import Referral
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

RECENT_REFERRALS_LIMIT = 5


class ReferralService(BaseService):
    """Service for referral operations."""

    def __init__(self, session: AsyncSession, notifications: Optional[NotificationService] = None):
        super().__init__(session)
        self.repository = ReferralRepository(session)
        self.notifications = notifications

    async def submit_referral(
        self,
        *,
        referrer_name: str,
        referrer_email: str,
        referee_name: str,
        referee_email: str,
        course: str,
    ) -> Referral:
        """Persist a validated referral, then email the referee.

        The row is committed before the email is attempted. A delivery failure
        is logged and otherwise ignored: the referral stands either way.

        Args:
            referrer_name, referrer_email, referee_name, referee_email, course:
                Fields accepted by the validation filter

        Returns:
            The stored referral with its ``id`` and ``created_at``

        Raises:
            StoreUnavailableError: If the database cannot be reached
            StoreConstraintViolationError: If the database rejects the row
        """
        referral = await self.repository.create(
            referrer_name=referrer_name,
            referrer_email=referrer_email,
            referee_name=referee_name,
            referee_email=referee_email,
            course=course,
        )
        async with translate_store_errors("commit"):
            await self.session.commit()

        logger.info("Referral saved to database (referral_id=%s)", referral.id)

        if self.notifications is None:
            logger.warning("No notification service configured; referral %s not emailed", referral.id)
            return referral

        try:
            await self.notifications.send_referral_email(referral)
        except DeliveryFailedError as exc:
            logger.error(
                "Referral email failed (referral_id=%s, to=%s): %s",
                referral.id, referral.referee_email, exc.message,
            )

        return referral

    async def get_stats(self, limit: int = RECENT_REFERRALS_LIMIT) -> Dict[str, Any]:
        """Total referral count plus the most recent ones.

        Raises:
            StoreError: If either query fails
        """
        total = await self.repository.count()
        recent = await self.repository.list_recent(limit)
        return {
            "total_referrals": total,
            "recent_referrals": recent,
        }
