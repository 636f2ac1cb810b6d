"""
Job application routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from pydantic import ValidationError

from asocsemi.api.deps import get_auth_state, get_backend
from asocsemi.core.backend import DataBackend
from asocsemi.core.exceptions import ValidationException
from asocsemi.core.rate_limit import RATE_FORM, limiter
from asocsemi.schemas.application import JobApplication, JobApplicationCreate
from asocsemi.schemas.auth import AuthState
from asocsemi.services.application_service import ApplicationService, ResumeFile

router = APIRouter(prefix="/applications", tags=["applications"])

application_service = ApplicationService()


async def read_resume(upload: Optional[UploadFile]) -> Optional[ResumeFile]:
    """Turn an optional multipart file into a ResumeFile; empty file inputs count as absent."""
    if upload is None or not upload.filename:
        return None
    return ResumeFile(
        filename=upload.filename,
        content=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


@router.post("/", response_model=JobApplication, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_FORM)
async def submit_application(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    position: str = Form(""),
    experience: str = Form(""),
    cover_letter: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    state: AuthState = Depends(get_auth_state),
    backend: DataBackend = Depends(get_backend),
):
    """
    Submit a job application (multipart form, optional resume file).
    """
    try:
        data = JobApplicationCreate(
            full_name=full_name,
            email=email,
            phone=phone,
            position=position,
            experience=experience,
            cover_letter=cover_letter,
        )
    except ValidationError as exc:
        raise ValidationException.from_pydantic(exc) from exc

    return await application_service.submit(
        backend,
        data,
        user=state.user,
        resume=await read_resume(resume),
        access_token=state.access_token,
    )
