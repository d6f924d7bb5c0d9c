from .referral_service import ReferralService
from .notification_service import NotificationService
from .validation import validate_referral_input

__all__ = [
    "ReferralService",
    "NotificationService",
    "validate_referral_input",
]
