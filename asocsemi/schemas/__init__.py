"""
Pydantic schemas for request bodies, stored rows and responses.
"""
from asocsemi.schemas.base import BaseSchema, MessageResponse, ErrorResponse
from asocsemi.schemas.auth import (
    Role,
    AuthEvent,
    AuthUser,
    AuthSession,
    AuthState,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    OAuthRedirectResponse,
    GoogleProfile,
)
from asocsemi.schemas.contact import ContactCreate, Contact
from asocsemi.schemas.application import (
    ApplicationStatus,
    JobApplicationCreate,
    JobApplication,
    StatusUpdate,
)
from asocsemi.schemas.user import User
from asocsemi.schemas.admin import DashboardStats, ApplicationList, ContactList

__all__ = [
    # Base
    "BaseSchema",
    "MessageResponse",
    "ErrorResponse",
    # Auth
    "Role",
    "AuthEvent",
    "AuthUser",
    "AuthSession",
    "AuthState",
    "LoginRequest",
    "RegisterRequest",
    "SessionResponse",
    "OAuthRedirectResponse",
    "GoogleProfile",
    # Contact
    "ContactCreate",
    "Contact",
    # Application
    "ApplicationStatus",
    "JobApplicationCreate",
    "JobApplication",
    "StatusUpdate",
    # User
    "User",
    # Admin
    "DashboardStats",
    "ApplicationList",
    "ContactList",
]
