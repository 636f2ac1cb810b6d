"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(400, code, message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ValidationException(APIException):
    """422 Validation Error"""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(422, code, message, details)

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationException":
        """Build from a pydantic ValidationError, one entry per failing field."""
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return cls(message="Please fill in all required fields", details=details)


class BackendException(APIException):
    """502 - the hosted backend rejected the call. Message is passed through verbatim."""

    def __init__(self, message: str, code: str = "BACKEND_ERROR"):
        super().__init__(502, code, message)


class BackendNotConfiguredException(APIException):
    """503 - no backend credentials are configured."""

    def __init__(self, message: str = "Backend is not configured"):
        super().__init__(503, "BACKEND_NOT_CONFIGURED", message)


# Authentication specific exceptions
class AuthenticationException(UnauthorizedException):
    """Sign-in / sign-up rejected by the identity backend"""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message=message, code="AUTHENTICATION_FAILED")


class AdminAccessRequiredException(ForbiddenException):
    """Signed in, but without the admin role"""

    def __init__(self):
        super().__init__(
            message="You don't have permission to access the admin dashboard.",
            code="ADMIN_REQUIRED",
        )


class PasswordMismatchException(BadRequestException):
    """Sign-up password and confirmation differ"""

    def __init__(self):
        super().__init__(message="Passwords do not match", code="PASSWORD_MISMATCH")


# Resource specific exceptions
class ApplicationNotFoundException(NotFoundException):
    """Job application not found"""

    def __init__(self):
        super().__init__(message="Job application not found", code="APPLICATION_NOT_FOUND")


class UnsupportedOAuthProviderException(BadRequestException):
    """OAuth provider not offered"""

    def __init__(self, provider: str):
        super().__init__(
            message=f"OAuth provider '{provider}' is not supported",
            code="UNSUPPORTED_PROVIDER",
        )
