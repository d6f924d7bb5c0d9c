from .base import BaseRepository, IRepository, BaseService
from .exceptions import (
    BaseError,
    ValidationError,
    MissingFieldError,
    InvalidEmailFormatError,
    StoreError,
    StoreUnavailableError,
    StoreConstraintViolationError,
    ExternalServiceError,
    DeliveryFailedError,
)
from .config import Settings, get_settings

__all__ = [
    # Base classes
    "BaseRepository",
    "IRepository",
    "BaseService",

    # Exceptions
    "BaseError",
    "ValidationError",
    "MissingFieldError",
    "InvalidEmailFormatError",
    "StoreError",
    "StoreUnavailableError",
    "StoreConstraintViolationError",
    "ExternalServiceError",
    "DeliveryFailedError",

    # Config
    "Settings",
    "get_settings",
]
