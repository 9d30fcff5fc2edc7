from s3form.services.browser_upload import (
    BrowserUploadSession,
    S3Config,
    bucket_endpoint_url,
    credential_string,
)
from s3form.services.conditions import Conditions, default_conditions
from s3form.services.dates import compact_date, expiration_timestamp, iso_compact
from s3form.services.policy import PolicyDocument, PolicySerializationError, to_base64_policy, to_canonical_json
from s3form.services.s3_storage import (
    build_object_key,
    build_storage_key,
    create_s3_client,
    generate_presigned_get_url,
    get_bucket_region,
    head_object,
    parse_storage_key,
    upload_file,
)
from s3form.services.signing import compute_signature, derive_signing_key, hmac_sha256, sign_hex

__all__ = [
    "BrowserUploadSession",
    "S3Config",
    "bucket_endpoint_url",
    "credential_string",
    "Conditions",
    "default_conditions",
    "compact_date",
    "iso_compact",
    "expiration_timestamp",
    "PolicyDocument",
    "PolicySerializationError",
    "to_canonical_json",
    "to_base64_policy",
    "hmac_sha256",
    "derive_signing_key",
    "sign_hex",
    "compute_signature",
    "create_s3_client",
    "build_object_key",
    "build_storage_key",
    "parse_storage_key",
    "generate_presigned_get_url",
    "upload_file",
    "get_bucket_region",
    "head_object",
]
