from . import referrals, health

__all__ = ["referrals", "health"]
