"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Each class carries a stable machine-readable code and the HTTP status
the transport layer maps it to.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    status_code = 404

    def __init__(self, message: str = "Resource not found", code: str = "RES_NOT_FOUND") -> None:
        super().__init__(message, code=code)


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict | None = None,
        code: str = "VAL_VALIDATION_ERROR",
    ) -> None:
        self.details = details or {}
        super().__init__(message, code=code)
