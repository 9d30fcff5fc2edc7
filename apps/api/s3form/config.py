import os
from pathlib import Path

from dotenv import load_dotenv

from s3form.services.browser_upload import S3Config

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(_ENV_PATH, override=False)

_TRUTHY = {"1", "true", "yes", "on"}


def _get_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def get_s3_bucket() -> str | None:
    return _get_env("S3_BUCKET")


def get_s3_region() -> str:
    return _get_env("S3_REGION") or "us-east-1"


def get_s3_access_key_id() -> str | None:
    return _get_env("S3_ACCESS_KEY_ID")


def get_s3_secret_access_key() -> str | None:
    return _get_env("S3_SECRET_ACCESS_KEY")


def get_s3_session_token() -> str | None:
    return _get_env("S3_SESSION_TOKEN")


def get_s3_endpoint_url() -> str | None:
    return _get_env("S3_ENDPOINT_URL")


def get_s3_accelerate() -> bool:
    return (_get_env("S3_ACCELERATE") or "").lower() in _TRUTHY


def get_browser_upload_expiry_minutes() -> int:
    raw = _get_env("BROWSER_UPLOAD_EXPIRY_MINUTES")
    if raw is None:
        return 10
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"BROWSER_UPLOAD_EXPIRY_MINUTES must be an integer, got {raw!r}") from exc


def get_cors_allow_origins() -> list[str]:
    raw = _get_env("CORS_ALLOW_ORIGINS") or "http://localhost:3000"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_s3_config() -> S3Config:
    """Build the signing account context from the environment."""
    access_key = get_s3_access_key_id()
    secret_key = get_s3_secret_access_key()
    if not access_key or not secret_key:
        raise ValueError("S3 credentials missing: set S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY")
    bucket = get_s3_bucket()
    if not bucket:
        raise ValueError("S3_BUCKET is not set")

    return S3Config(
        access_key=access_key,
        secret_key=secret_key,
        bucket=bucket,
        region=get_s3_region(),
        accelerate=get_s3_accelerate(),
        session_token=get_s3_session_token(),
        endpoint_url=get_s3_endpoint_url(),
    )
