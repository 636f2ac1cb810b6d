"""
Application configuration using Pydantic Settings.
All configuration is loaded from environment variables.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Secrets that must never be used outside development
_DEV_ONLY_DEFAULTS = {
    "session_secret_key": "dev-session-secret-change-in-production",
}

# Values shipped in the sample .env; treated as "not configured"
PLACEHOLDER_SUPABASE_URL = "https://demo.supabase.co"
PLACEHOLDER_SUPABASE_ANON_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJpc3MiOiJzdXBhYmFzZS1kZW1vIiwicm9sZSI6ImFub24iLCJleHAiOjE5ODM4MTI5OTZ9."
    "CRXP1A7WOeoJeXxjNni43kdQwgnWNReilDMblYTn_I0"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "ASOCSEMI"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # API
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Hosted backend (auth + tables + storage)
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    backend_timeout_seconds: int = 15

    # S3-compatible storage endpoint of the hosted backend
    storage_s3_access_key_id: Optional[str] = None
    storage_s3_secret_access_key: Optional[str] = None
    storage_s3_region: str = "us-east-1"
    resume_bucket: str = "resumes"
    max_resume_size_mb: int = 5

    # Session cookie (signed JWT)
    session_secret_key: str = "dev-session-secret-change-in-production"
    session_algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24
    session_cookie_name: str = "asocsemi_session"
    google_user_cookie_name: str = "google_user"
    oauth_verifier_cookie_name: str = "asocsemi_oauth_verifier"
    google_state_cookie_name: str = "asocsemi_google_state"
    cookie_secure: bool = False

    # Admin role assignment
    admin_emails: List[str] = []
    admin_email_marker: Optional[str] = "admin"

    # Google sign-in
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: str = "http://localhost:8000/auth/google/callback"

    # Backend OAuth (PKCE) callback
    oauth_redirect_uri: str = "http://localhost:8000/auth/callback"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"

    @property
    def max_resume_size_bytes(self) -> int:
        return self.max_resume_size_mb * 1024 * 1024

    @property
    def backend_configured(self) -> bool:
        """True when real backend credentials are present."""
        if not self.supabase_url or not self.supabase_anon_key:
            return False
        return (
            self.supabase_url.rstrip("/") != PLACEHOLDER_SUPABASE_URL
            and self.supabase_anon_key != PLACEHOLDER_SUPABASE_ANON_KEY
        )

    @property
    def storage_configured(self) -> bool:
        return bool(
            self.backend_configured
            and self.storage_s3_access_key_id
            and self.storage_s3_secret_access_key
        )

    @property
    def google_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)

    @model_validator(mode="after")
    def _reject_dev_secrets_in_production(self) -> "Settings":
        """Fail loud if production/staging still uses dev-only default secrets."""
        if self.environment in ("production", "staging"):
            for field_name, dev_default in _DEV_ONLY_DEFAULTS.items():
                actual = getattr(self, field_name)
                if actual == dev_default:
                    raise ValueError(
                        f"SECURITY: '{field_name}' is still set to its development default. "
                        f"Set a real value via environment variable in {self.environment}."
                    )
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
