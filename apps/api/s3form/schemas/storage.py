from pydantic import BaseModel, ConfigDict, Field


class FormFieldBundle(BaseModel):
    """Fields an HTML form needs to POST a file straight to the bucket."""

    model_config = ConfigDict(frozen=True)

    url: str
    success_action_redirect: str = ""
    x_amz_algorithm: str
    x_amz_credential: str
    aws_access_key_id: str
    signature: str
    policy: str
    x_amz_date: str
    key: str = ""


class BrowserUploadRequest(BaseModel):
    filename: str = Field(min_length=1)
    content_type: str = Field(default="application/octet-stream", min_length=1)
    prefix: str = Field(default="uploads", min_length=1)
    expires_in_minutes: int | None = Field(default=None, ge=1, le=7 * 24 * 60)
    success_action_redirect: str | None = Field(default=None, min_length=1)
    success_action_status: str | None = Field(default=None, pattern=r"^(200|201|204)$")
    acl: str | None = Field(default=None, min_length=1)


class PresignDownloadRequest(BaseModel):
    key: str = Field(min_length=1)
    expires_in_sec: int = Field(default=900, ge=60, le=3600)


class PresignDownloadResponse(BaseModel):
    bucket: str
    key: str
    storage_key: str
    download_url: str
    expires_in_sec: int


class BucketRegionResponse(BaseModel):
    bucket: str
    region: str
