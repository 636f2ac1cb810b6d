"""
API package.
"""
from asocsemi.api.routes import api_router
from asocsemi.api.deps import (
    get_backend,
    get_identity,
    get_auth_state,
    get_current_user,
    get_admin_state,
)

__all__ = [
    "api_router",
    "get_backend",
    "get_identity",
    "get_auth_state",
    "get_current_user",
    "get_admin_state",
]
