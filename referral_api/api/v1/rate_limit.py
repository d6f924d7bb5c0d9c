"""Per-client request limiting shared by every endpoint."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from ...core.config import DEFAULT_RATE_LIMIT

_rate_limit = DEFAULT_RATE_LIMIT


def current_rate_limit() -> str:
    """Limit string applied to each decorated endpoint, read on every request"""
    return _rate_limit


def configure_rate_limit(value: str) -> None:
    """Set the limit for the app being built and start counting from zero"""
    global _rate_limit
    _rate_limit = value
    limiter.reset()


limiter = Limiter(key_func=get_remote_address)
