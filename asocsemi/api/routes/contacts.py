"""
Contact form routes.
"""
from fastapi import APIRouter, Depends, Request, status

from asocsemi.api.deps import get_backend
from asocsemi.core.backend import DataBackend
from asocsemi.core.rate_limit import RATE_FORM, limiter
from asocsemi.schemas.contact import Contact, ContactCreate
from asocsemi.services.contact_service import ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])

contact_service = ContactService()


@router.post("/", response_model=Contact, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_FORM)
async def submit_contact(
    request: Request,
    body: ContactCreate,
    backend: DataBackend = Depends(get_backend),
):
    """Store a Contact form message."""
    return await contact_service.submit(backend, body)
