"""Referral submission and statistics endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from ....deps import SessionDep, MailerDep
from ....services.referral_service import ReferralService
from ....services.notification_service import NotificationService
from ....services.validation import validate_referral_input
from ....core.exceptions import ValidationError, StoreError
from ..rate_limit import limiter, current_rate_limit
from ..schemas.referral_schemas import (
    ErrorResponse,
    ReferralCreatedResponse,
    ReferralOut,
    RecentReferralOut,
    ReferralStatsResponse,
)

router = APIRouter(tags=["referrals"])
logger = logging.getLogger(__name__)

SUBMIT_ERROR = "An error occurred while processing your request"
STATS_ERROR = "An error occurred while fetching referral statistics"


async def _read_payload(request: Request) -> Any:
    """Decoded JSON body, or an empty object when there is none to decode."""
    try:
        return await request.json()
    except ValueError:
        return {}


@router.post(
    "/refer",
    response_model=ReferralCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@limiter.limit(current_rate_limit)
async def submit_referral(request: Request, sess: SessionDep, mailer: MailerDep):
    """Record a referral and email the referee.

    Email delivery is best effort: once the referral is stored the request
    succeeds whether or not the message went out.
    """
    payload = await _read_payload(request)
    try:
        submission = validate_referral_input(payload)
    except ValidationError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=e.message)

    service = ReferralService(sess, NotificationService(mailer))
    try:
        referral = await service.submit_referral(**submission)
    except StoreError as e:
        logger.error("Error processing referral: %s", e.message)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SUBMIT_ERROR)

    return ReferralCreatedResponse(
        message="Referral submitted successfully",
        referral=ReferralOut(
            id=referral.id,
            referrer_name=referral.referrer_name,
            referee_name=referral.referee_name,
            course=referral.course,
            created_at=referral.created_at,
        ),
    )


@router.get(
    "/referral-stats",
    response_model=ReferralStatsResponse,
    responses={500: {"model": ErrorResponse}},
)
@limiter.limit(current_rate_limit)
async def referral_stats(request: Request, sess: SessionDep):
    """Total number of referrals and the five most recent ones."""
    service = ReferralService(sess)
    try:
        stats = await service.get_stats()
    except StoreError as e:
        logger.error("Error fetching referral stats: %s", e.message)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail=STATS_ERROR)

    return ReferralStatsResponse(
        total_referrals=stats["total_referrals"],
        recent_referrals=[
            RecentReferralOut(referrer_name=row.referrer_name, course=row.course, created_at=row.created_at)
            for row in stats["recent_referrals"]
        ],
    )
