from .referral_schemas import (
    ReferralOut,
    ReferralCreatedResponse,
    RecentReferralOut,
    ReferralStatsResponse,
    ErrorResponse,
)

__all__ = [
    "ReferralOut",
    "ReferralCreatedResponse",
    "RecentReferralOut",
    "ReferralStatsResponse",
    "ErrorResponse",
]
