from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import BinaryIO
from uuid import uuid4

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from s3form.services.browser_upload import S3Config


def create_s3_client(config: S3Config) -> BaseClient:
    session_token = config.session_token.get_secret_value() if config.session_token is not None else None
    return boto3.client(
        "s3",
        region_name=config.region,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key.get_secret_value(),
        aws_session_token=session_token,
        endpoint_url=config.endpoint_url,
        config=Config(signature_version="s3v4", s3={"use_accelerate_endpoint": config.accelerate}),
    )


def sanitize_filename(filename: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9._-]+", "-", filename).strip("-")
    return cleaned or "file"


def build_object_key(filename: str, prefix: str = "uploads") -> str:
    safe_filename = sanitize_filename(filename)
    today = datetime.now(UTC).strftime("%Y/%m/%d")
    return f"{prefix.strip('/')}/{today}/{uuid4().hex}-{safe_filename}"


def build_storage_key(bucket: str, key: str) -> str:
    return f"s3://{bucket}/{key}"


def parse_storage_key(storage_key: str) -> tuple[str, str]:
    if not storage_key.startswith("s3://"):
        raise ValueError("storage_key must start with s3://")
    without_scheme = storage_key[5:]
    if "/" not in without_scheme:
        raise ValueError("storage_key format must be s3://bucket/key")
    bucket, key = without_scheme.split("/", 1)
    if not bucket or not key:
        raise ValueError("storage_key format must be s3://bucket/key")
    return bucket, key


def generate_presigned_get_url(
    *,
    client: BaseClient,
    bucket: str,
    key: str,
    expires_in: int = 900,
) -> str:
    return client.generate_presigned_url(
        "get_object",
        Params={
            "Bucket": bucket,
            "Key": key,
        },
        ExpiresIn=expires_in,
        HttpMethod="GET",
    )


def upload_file(
    *,
    client: BaseClient,
    bucket: str,
    key: str,
    content_type: str,
    body: BinaryIO,
    expires_in: int = 900,
) -> str:
    """Upload ``body`` from the server and return a presigned download URL for it."""
    client.upload_fileobj(body, bucket, key, ExtraArgs={"ContentType": content_type})
    return generate_presigned_get_url(client=client, bucket=bucket, key=key, expires_in=expires_in)


def get_bucket_region(*, client: BaseClient, bucket: str) -> str:
    response = client.get_bucket_location(Bucket=bucket)
    # Buckets in us-east-1 report no location constraint.
    return response.get("LocationConstraint") or "us-east-1"


def head_object(*, client: BaseClient, bucket: str, key: str) -> dict:
    return client.head_object(Bucket=bucket, Key=key)
