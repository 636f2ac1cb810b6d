"""Core module exports."""
from asocsemi.core.config import settings, get_settings
from asocsemi.core.backend import (
    BackendResult,
    DataBackend,
    HostedBackend,
    UnconfiguredBackend,
    create_backend,
)
from asocsemi.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    BackendException,
    BackendNotConfiguredException,
    AuthenticationException,
    AdminAccessRequiredException,
    PasswordMismatchException,
    ApplicationNotFoundException,
    UnsupportedOAuthProviderException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Backend
    "BackendResult",
    "DataBackend",
    "HostedBackend",
    "UnconfiguredBackend",
    "create_backend",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "BackendException",
    "BackendNotConfiguredException",
    "AuthenticationException",
    "AdminAccessRequiredException",
    "PasswordMismatchException",
    "ApplicationNotFoundException",
    "UnsupportedOAuthProviderException",
]
