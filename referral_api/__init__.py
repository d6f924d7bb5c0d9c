"""Course referral submission service."""

__version__ = "1.0.0"
