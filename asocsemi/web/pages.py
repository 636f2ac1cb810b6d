"""
HTML pages.

Each handler renders one Jinja2 template. Forms post back to their page and
re-render with inline messages; nothing is kept between navigations except
the signed cookies.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from asocsemi.api.cookies import (
    clear_google_user_cookie,
    clear_session_cookie,
    read_google_state,
    read_google_user,
    read_oauth_verifier,
    set_google_state_cookie,
    set_google_user_cookie,
    set_oauth_verifier_cookie,
    set_session_cookie,
)
from asocsemi.api.deps import get_auth_state, get_backend, get_google_sign_in, get_identity
from asocsemi.api.routes.applications import read_resume
from asocsemi.core.backend import DataBackend
from asocsemi.core.config import settings
from asocsemi.core.exceptions import APIException, AuthenticationException
from asocsemi.core.logging import get_logger
from asocsemi.core.oauth import FACEBOOK_NOT_AVAILABLE, GOOGLE_NOT_CONFIGURED, GoogleSignIn
from asocsemi.core.rate_limit import RATE_AUTH, RATE_FORM, limiter
from asocsemi.schemas.application import JobApplicationCreate
from asocsemi.schemas.auth import AuthState, LoginRequest, RegisterRequest
from asocsemi.schemas.contact import ContactCreate
from asocsemi.services.admin_service import AdminDashboard, can_view_admin
from asocsemi.services.application_service import ApplicationService
from asocsemi.services.contact_service import ContactService
from asocsemi.services.identity_service import IdentityProvider
from asocsemi.web import content

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(include_in_schema=False)

contact_service = ContactService()
application_service = ApplicationService()

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
AUTH_FAILED_TITLE = "Authentication Failed"


def render(
    request: Request,
    template: str,
    auth: AuthState,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render a page with the shell context (navigation, user menu, footer)."""
    page_context = {
        "app_name": settings.app_name,
        "auth": auth,
        "google_user": read_google_user(request),
        "nav_links": content.NAV_LINKS,
        "footer_sections": content.FOOTER_SECTIONS,
        "social_links": content.SOCIAL_LINKS,
        "current_path": request.url.path,
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, template, page_context, status_code=status_code)


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    """First message per form field."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        errors.setdefault(field, error["msg"])
    return errors


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


# ── Informational pages ───────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    welcome: bool = Query(False),
    auth: AuthState = Depends(get_auth_state),
):
    return render(
        request,
        "home.html",
        auth,
        {
            "capabilities": content.CAPABILITIES,
            "numbers": content.HOME_NUMBERS,
            "welcome": welcome,
        },
    )


@router.get("/about", response_class=HTMLResponse)
async def about(request: Request, auth: AuthState = Depends(get_auth_state)):
    return render(
        request,
        "about.html",
        auth,
        {
            "story": content.COMPANY_STORY,
            "expertise": content.EXPERTISE,
            "achievements": content.ACHIEVEMENTS,
        },
    )


@router.get("/services", response_class=HTMLResponse)
async def services(request: Request, auth: AuthState = Depends(get_auth_state)):
    return render(request, "services.html", auth, {"services": content.SERVICES})


# ── Careers ───────────────────────────────────────────────────────────────

def _careers_page(
    request: Request,
    auth: AuthState,
    *,
    modal_open: bool = False,
    form: Optional[Dict[str, Any]] = None,
    errors: Optional[Dict[str, str]] = None,
    error: Optional[str] = None,
    submitted_position: Optional[str] = None,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "careers.html",
        auth,
        {
            "jobs": content.JOB_OPENINGS,
            "benefits": content.BENEFITS,
            "experience_levels": content.EXPERIENCE_LEVELS,
            "modal_open": modal_open,
            "form": form or {},
            "errors": errors or {},
            "error": error,
            "submitted_position": submitted_position,
        },
        status_code,
    )


@router.get("/careers", response_class=HTMLResponse)
async def careers(
    request: Request,
    apply: Optional[str] = Query(None, description="Job title to open the application form for"),
    auth: AuthState = Depends(get_auth_state),
):
    form = {"position": apply} if apply else {}
    if auth.user:
        form.update(full_name=auth.user.full_name or "", email=auth.user.email)
    return _careers_page(request, auth, modal_open=apply is not None, form=form)


@router.post("/careers/apply", response_class=HTMLResponse)
@limiter.limit(RATE_FORM)
async def careers_apply(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    position: str = Form(""),
    experience: str = Form(""),
    cover_letter: str = Form(""),
    resume: Optional[UploadFile] = File(None),
    auth: AuthState = Depends(get_auth_state),
    backend: DataBackend = Depends(get_backend),
):
    form = {
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "position": position,
        "experience": experience,
        "cover_letter": cover_letter,
    }
    try:
        data = JobApplicationCreate(**form)
    except ValidationError as exc:
        return _careers_page(
            request,
            auth,
            modal_open=True,
            form=form,
            errors=_field_errors(exc),
            error=REQUIRED_FIELDS_MESSAGE,
            status_code=422,
        )

    try:
        application = await application_service.submit(
            backend,
            data,
            user=auth.user,
            resume=await read_resume(resume),
            access_token=auth.access_token,
        )
    except APIException as exc:
        return _careers_page(
            request,
            auth,
            modal_open=True,
            form=form,
            error=exc.message,
            status_code=exc.status_code,
        )

    return _careers_page(request, auth, submitted_position=application.position)


# ── Contact ───────────────────────────────────────────────────────────────

def _contact_page(
    request: Request,
    auth: AuthState,
    *,
    form: Optional[Dict[str, Any]] = None,
    errors: Optional[Dict[str, str]] = None,
    error: Optional[str] = None,
    submitted: bool = False,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "contact.html",
        auth,
        {
            "details": content.CONTACT_DETAILS,
            "office_hours": content.OFFICE_HOURS,
            "form": form or {},
            "errors": errors or {},
            "error": error,
            "submitted": submitted,
        },
        status_code,
    )


@router.get("/contact", response_class=HTMLResponse)
async def contact(request: Request, auth: AuthState = Depends(get_auth_state)):
    return _contact_page(request, auth)


@router.post("/contact", response_class=HTMLResponse)
@limiter.limit(RATE_FORM)
async def contact_submit(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    company: str = Form(""),
    message: str = Form(""),
    auth: AuthState = Depends(get_auth_state),
    backend: DataBackend = Depends(get_backend),
):
    """Validate first; an invalid form never reaches the backend."""
    form = {
        "name": name,
        "email": email,
        "phone": phone,
        "company": company,
        "message": message,
    }
    try:
        data = ContactCreate(**form)
    except ValidationError as exc:
        return _contact_page(
            request,
            auth,
            form=form,
            errors=_field_errors(exc),
            error=REQUIRED_FIELDS_MESSAGE,
            status_code=422,
        )

    try:
        await contact_service.submit(backend, data)
    except APIException as exc:
        return _contact_page(
            request, auth, form=form, error=exc.message, status_code=exc.status_code
        )

    return _contact_page(request, auth, submitted=True)


# ── Login / logout ────────────────────────────────────────────────────────

def _login_page(
    request: Request,
    auth: AuthState,
    *,
    mode: str = "signin",
    form: Optional[Dict[str, Any]] = None,
    errors: Optional[Dict[str, str]] = None,
    notice: Optional[Dict[str, str]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    return render(
        request,
        "login.html",
        auth,
        {
            "mode": "signup" if mode == "signup" else "signin",
            "form": form or {},
            "errors": errors or {},
            "notice": notice,
        },
        status_code,
    )


def _failure(title: str, text: str) -> Dict[str, str]:
    return {"level": "error", "title": title, "text": text}


def _info(title: str, text: str) -> Dict[str, str]:
    return {"level": "info", "title": title, "text": text}


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    mode: str = Query("signin"),
    auth: AuthState = Depends(get_auth_state),
):
    return _login_page(request, auth, mode=mode)


@router.post("/login", response_class=HTMLResponse)
@limiter.limit(RATE_AUTH)
async def login_submit(
    request: Request,
    mode: str = Form("signin"),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    first_name: str = Form(""),
    last_name: str = Form(""),
    auth: AuthState = Depends(get_auth_state),
    identity: IdentityProvider = Depends(get_identity),
):
    """Sign in or sign up, then redirect home with the session cookie set."""
    signing_up = mode == "signup"
    form = {"email": email, "first_name": first_name, "last_name": last_name}

    if signing_up and password != confirm_password:
        return _login_page(
            request,
            auth,
            mode=mode,
            form=form,
            notice=_failure("Error", "Passwords do not match"),
            status_code=400,
        )

    try:
        if signing_up:
            body = RegisterRequest(
                email=email,
                password=password,
                confirm_password=confirm_password,
                first_name=first_name,
                last_name=last_name,
            )
        else:
            body = LoginRequest(email=email, password=password)
    except ValidationError as exc:
        return _login_page(
            request,
            auth,
            mode=mode,
            form=form,
            errors=_field_errors(exc),
            notice=_failure("Error", REQUIRED_FIELDS_MESSAGE),
            status_code=422,
        )

    try:
        if signing_up:
            session = await identity.sign_up(body.email, body.password, body.full_name)
        else:
            session = await identity.sign_in(body.email, body.password)
    except APIException as exc:
        return _login_page(
            request,
            auth,
            mode=mode,
            form=form,
            notice=_failure(AUTH_FAILED_TITLE, exc.message),
            status_code=exc.status_code,
        )

    if session is None:
        return _login_page(
            request,
            auth,
            mode="signin",
            form={"email": email},
            notice=_info("Account created successfully!", "Check your email to confirm your account."),
        )

    response = _redirect("/")
    set_session_cookie(response, identity.issue_token(session))
    return response


@router.post("/logout")
async def logout(
    auth: AuthState = Depends(get_auth_state),
    identity: IdentityProvider = Depends(get_identity),
):
    """Sign out of the backend session and forget the Google profile."""
    await identity.sign_out(auth)
    response = _redirect("/")
    clear_session_cookie(response)
    clear_google_user_cookie(response)
    return response


# ── Google sign-in (SDK) ──────────────────────────────────────────────────

@router.get("/auth/google")
async def google_start(
    request: Request,
    auth: AuthState = Depends(get_auth_state),
    google: GoogleSignIn = Depends(get_google_sign_in),
):
    if not google.configured:
        return _login_page(
            request,
            auth,
            notice=_failure(AUTH_FAILED_TITLE, GOOGLE_NOT_CONFIGURED),
            status_code=503,
        )
    url, state = google.authorization_url()
    response = _redirect(url)
    set_google_state_cookie(response, state)
    return response


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    auth: AuthState = Depends(get_auth_state),
    google: GoogleSignIn = Depends(get_google_sign_in),
):
    """Store the Google profile under google_user and greet the visitor on Home."""
    expected_state = read_google_state(request)
    if error or not code or not state or state != expected_state:
        logger.warning("google_callback_rejected", error=error, state_matches=state == expected_state)
        return _login_page(
            request,
            auth,
            notice=_failure(AUTH_FAILED_TITLE, GOOGLE_NOT_CONFIGURED),
            status_code=400,
        )

    try:
        profile = await google.fetch_profile(code, state)
    except AuthenticationException as exc:
        return _login_page(
            request,
            auth,
            notice=_failure(AUTH_FAILED_TITLE, exc.message),
            status_code=exc.status_code,
        )

    logger.info("google_signed_in", email=profile.email)
    response = _redirect("/?welcome=1")
    set_google_user_cookie(response, profile)
    response.delete_cookie(settings.google_state_cookie_name)
    return response


@router.get("/auth/facebook", response_class=HTMLResponse)
async def facebook_start(request: Request, auth: AuthState = Depends(get_auth_state)):
    return _login_page(
        request,
        auth,
        notice=_info("Facebook Login", FACEBOOK_NOT_AVAILABLE),
    )


# ── Backend OAuth (PKCE) ──────────────────────────────────────────────────

@router.get("/auth/oauth/{provider}")
async def oauth_start(
    request: Request,
    provider: str,
    auth: AuthState = Depends(get_auth_state),
    identity: IdentityProvider = Depends(get_identity),
):
    try:
        flow = await identity.sign_in_with_oauth(provider, settings.oauth_redirect_uri)
    except APIException as exc:
        return _login_page(
            request,
            auth,
            notice=_failure(AUTH_FAILED_TITLE, exc.message),
            status_code=exc.status_code,
        )
    response = _redirect(flow["url"])
    set_oauth_verifier_cookie(response, flow["code_verifier"])
    return response


@router.get("/auth/callback")
async def oauth_callback(
    request: Request,
    code: Optional[str] = Query(None),
    auth: AuthState = Depends(get_auth_state),
    identity: IdentityProvider = Depends(get_identity),
):
    verifier = read_oauth_verifier(request)
    if not code or not verifier:
        return _login_page(
            request,
            auth,
            notice=_failure(AUTH_FAILED_TITLE, "The sign-in link is invalid or has expired."),
            status_code=400,
        )

    try:
        session = await identity.complete_oauth(code, verifier)
    except APIException as exc:
        return _login_page(
            request,
            auth,
            notice=_failure(AUTH_FAILED_TITLE, exc.message),
            status_code=exc.status_code,
        )

    response = _redirect("/")
    set_session_cookie(response, identity.issue_token(session))
    response.delete_cookie(settings.oauth_verifier_cookie_name)
    return response


# ── Admin ─────────────────────────────────────────────────────────────────

@router.get("/admin", response_class=HTMLResponse)
async def admin(
    request: Request,
    tab: str = Query("applications"),
    q: str = Query(""),
    status_filter: str = Query("", alias="status"),
    auth: AuthState = Depends(get_auth_state),
    backend: DataBackend = Depends(get_backend),
):
    """
    Admin dashboard.

    Visitors without the admin role get the static denial page and no fetch
    is made on their behalf. Every fetched row is rendered; rows outside the
    q/status filter start hidden so the live filter can bring them back.
    """
    if not can_view_admin(auth):
        return render(request, "access_denied.html", auth, status_code=403)

    dashboard = AdminDashboard(
        backend,
        access_token=auth.access_token,
        application_service=application_service,
    )
    await dashboard.load()

    return render(
        request,
        "admin.html",
        auth,
        {
            "tab": "contacts" if tab == "contacts" else "applications",
            "q": q,
            "status_filter": status_filter,
            "stats": dashboard.stats(),
            "applications": dashboard.applications,
            "contacts": dashboard.contacts,
            "shown_applications": {app.id for app in dashboard.filtered_applications(q, status_filter)},
            "shown_contacts": {contact.id for contact in dashboard.filtered_contacts(q)},
            "errors": dashboard.errors,
            "status_options": content.STATUS_OPTIONS,
            "api_prefix": settings.api_prefix,
        },
    )
