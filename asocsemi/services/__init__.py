"""
Service layer - business logic and orchestration.

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from asocsemi.services.identity_service import IdentityProvider
from asocsemi.services.contact_service import ContactService
from asocsemi.services.application_service import ApplicationService, ResumeFile
from asocsemi.services.admin_service import AdminDashboard

__all__ = [
    "IdentityProvider",
    "ContactService",
    "ApplicationService",
    "ResumeFile",
    "AdminDashboard",
]
