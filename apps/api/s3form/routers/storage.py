import logging

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, HTTPException, status

from s3form.config import get_browser_upload_expiry_minutes, load_s3_config
from s3form.fields import ACL, CONTENT_TYPE, KEY, SUCCESS_ACTION_REDIRECT, SUCCESS_ACTION_STATUS, X_AMZ_SECURITY_TOKEN
from s3form.schemas.storage import (
    BrowserUploadRequest,
    BucketRegionResponse,
    FormFieldBundle,
    PresignDownloadRequest,
    PresignDownloadResponse,
)
from s3form.services.browser_upload import BrowserUploadSession
from s3form.services.policy import PolicySerializationError
from s3form.services.s3_storage import (
    build_object_key,
    build_storage_key,
    create_s3_client,
    generate_presigned_get_url,
    get_bucket_region,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storage", tags=["storage"])


@router.post("/s3/browser-upload", response_model=FormFieldBundle)
def sign_browser_upload(payload: BrowserUploadRequest) -> FormFieldBundle:
    try:
        config = load_s3_config()
        minutes_to_expiry = payload.expires_in_minutes or get_browser_upload_expiry_minutes()
        session = BrowserUploadSession(config, minutes_to_expiry)
        session.add_condition(KEY, build_object_key(payload.filename, prefix=payload.prefix))
        session.add_condition(CONTENT_TYPE, payload.content_type)
        if payload.acl:
            session.add_condition(ACL, payload.acl)
        if payload.success_action_redirect:
            session.add_condition(SUCCESS_ACTION_REDIRECT, payload.success_action_redirect)
        if payload.success_action_status:
            session.add_condition(SUCCESS_ACTION_STATUS, payload.success_action_status)
        if config.session_token is not None:
            session.add_condition(X_AMZ_SECURITY_TOKEN, config.session_token.get_secret_value())
        return session.form_fields()
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except PolicySerializationError as exc:
        logger.exception("Browser upload policy could not be encoded")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc


@router.post("/s3/presign-download", response_model=PresignDownloadResponse)
def presign_s3_download(payload: PresignDownloadRequest) -> PresignDownloadResponse:
    try:
        config = load_s3_config()
        client = create_s3_client(config)
        download_url = generate_presigned_get_url(
            client=client,
            bucket=config.bucket,
            key=payload.key,
            expires_in=payload.expires_in_sec,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (BotoCoreError, ClientError) as exc:
        logger.warning("Presigning download for %s failed: %s", payload.key, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate S3 presigned URL: {exc}",
        ) from exc

    return PresignDownloadResponse(
        bucket=config.bucket,
        key=payload.key,
        storage_key=build_storage_key(config.bucket, payload.key),
        download_url=download_url,
        expires_in_sec=payload.expires_in_sec,
    )


@router.get("/s3/bucket-region", response_model=BucketRegionResponse)
def read_bucket_region() -> BucketRegionResponse:
    try:
        config = load_s3_config()
        region = get_bucket_region(client=create_s3_client(config), bucket=config.bucket)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (BotoCoreError, ClientError) as exc:
        logger.warning("Bucket region lookup failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to read bucket region: {exc}",
        ) from exc

    if region != config.region:
        logger.warning("Bucket %s is in %s but S3_REGION is %s", config.bucket, region, config.region)
    return BucketRegionResponse(bucket=config.bucket, region=region)
