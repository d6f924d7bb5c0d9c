from typing import Any, Optional, Dict


class BaseError(Exception):
    """Base exception class for the application"""

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseError):
    """Exception raised when a submission is rejected before any side effect"""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=400)


class MissingFieldError(ValidationError):
    """A required field is absent, empty or not a string"""

    def __init__(self):
        super().__init__("All fields are required")


class InvalidEmailFormatError(ValidationError):
    """An email field does not look like local@domain.tld"""

    def __init__(self):
        super().__init__("Invalid email format")


class StoreError(BaseError):
    """Exception raised when the referral store rejects or fails an operation"""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=500, details=details)


class StoreUnavailableError(StoreError):
    """The database could not be reached"""


class StoreConstraintViolationError(StoreError):
    """The database rejected the statement (constraint, type or schema error)"""


class ExternalServiceError(BaseError):
    """Exception raised when external service fails"""

    def __init__(self, service: str, message: str):
        super().__init__(
            message=f"External service error: {message}",
            status_code=503,
            details={"service": service}
        )


class DeliveryFailedError(ExternalServiceError):
    """The mail transport refused or failed to accept a message"""

    def __init__(self, message: str):
        super().__init__(service="smtp", message=message)
