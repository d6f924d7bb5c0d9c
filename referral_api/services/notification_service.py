from __future__ import annotations

import logging

from ..infrastructure.mailer import Mailer
from ..models import Referral

logger = logging.getLogger(__name__)

REFERRAL_SUBJECT = "You've been referred!"
REFERRAL_TEMPLATE = "{referrer_name} has referred you for the {course} course."


class NotificationService:
    """Referral notifications. Email only, one attempt per referral."""

    def __init__(self, mailer: Mailer):
        self._mailer = mailer

    async def send_referral_email(self, referral: Referral) -> None:
        """Tell the referee who referred them and for which course.

        Raises:
            DeliveryFailedError: the transport did not accept the message
        """
        body = REFERRAL_TEMPLATE.format(
            referrer_name=referral.referrer_name,
            course=referral.course,
        )
        await self._mailer.send(referral.referee_email, REFERRAL_SUBJECT, body)
        logger.info("Referral email sent (referral_id=%s, to=%s)", referral.id, referral.referee_email)
