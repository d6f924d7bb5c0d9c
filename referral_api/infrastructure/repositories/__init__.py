from .referral_repository import ReferralRepository

__all__ = [
    "ReferralRepository",
]
