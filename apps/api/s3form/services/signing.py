import hashlib
import hmac

from s3form.fields import AWS4_REQUEST, S3_SERVICE


def hmac_sha256(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(
    secret_key: str,
    date_compact: str,
    region: str,
    service: str = S3_SERVICE,
) -> bytes:
    """Derive the SigV4 signing key through the date, region, service and request stages."""
    date_key = hmac_sha256(f"AWS4{secret_key}".encode("utf-8"), date_compact)
    region_key = hmac_sha256(date_key, region)
    service_key = hmac_sha256(region_key, service)
    return hmac_sha256(service_key, AWS4_REQUEST)


def sign_hex(signing_key: bytes, message: str) -> str:
    return hmac.new(signing_key, message.encode("utf-8"), hashlib.sha256).hexdigest()


def compute_signature(*, secret_key: str, date_compact: str, region: str, policy_b64: str) -> str:
    return sign_hex(derive_signing_key(secret_key, date_compact, region), policy_b64)
