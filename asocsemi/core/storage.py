"""
Object storage helpers for the hosted backend's S3-compatible endpoint.

All functions use aioboto3 for async I/O. The backend exposes its buckets at
{supabase_url}/storage/v1/s3 and serves public objects from
{supabase_url}/storage/v1/object/public/{bucket}/{key}.

Each function opens and closes its own S3 client context. aioboto3 clients are
lightweight; connection pooling lives in the underlying botocore HTTP session.
"""
import re
import uuid

import aioboto3
from botocore.config import Config

from asocsemi.core.config import settings


# ── Key construction ────────────────────────────────────────────────────────

def build_object_key(filename: str) -> str:
    """
    Object key:  {random_uuid}/{safe_filename}

    The random prefix keeps two uploads with the same filename apart.
    """
    return f"{uuid.uuid4()}/{_sanitize_filename(filename)}"


def _sanitize_filename(name: str) -> str:
    """Keep only safe ASCII chars for object keys; collapse whitespace to underscore."""
    safe = re.sub(r"[^\w\-.]", "_", name, flags=re.ASCII)
    safe = re.sub(r"_+", "_", safe)
    return safe[:200] or "file"


def public_url(bucket: str, key: str) -> str:
    """Public download URL for an object in a public bucket."""
    base = (settings.supabase_url or "").rstrip("/")
    return f"{base}/storage/v1/object/public/{bucket}/{key}"


# ── Session factory ──────────────────────────────────────────────────────────

def _s3_client():
    """Return an async context-manager for an S3 client configured from settings."""
    session = aioboto3.Session()
    return session.client(
        "s3",
        endpoint_url=f"{settings.supabase_url.rstrip('/')}/storage/v1/s3",
        region_name=settings.storage_s3_region,
        aws_access_key_id=settings.storage_s3_access_key_id,
        aws_secret_access_key=settings.storage_s3_secret_access_key,
        config=Config(s3={"addressing_style": "path"}),
    )


# ── Upload ───────────────────────────────────────────────────────────────────

async def upload_bytes(bucket: str, key: str, content: bytes, content_type: str) -> str:
    """
    Store bytes under bucket/key and return the object's public URL.

    Raises botocore / aiohttp errors as-is; callers turn them into results.
    """
    async with _s3_client() as s3:
        await s3.put_object(
            Bucket=bucket,
            Key=key,
            Body=content,
            ContentType=content_type,
        )
    return public_url(bucket, key)
