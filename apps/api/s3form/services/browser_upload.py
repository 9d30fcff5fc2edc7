import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from s3form.fields import AWS4_HMAC_SHA256, CREDENTIAL_SCOPE, KEY, SUCCESS_ACTION_REDIRECT
from s3form.schemas.storage import FormFieldBundle
from s3form.services.conditions import Conditions, default_conditions
from s3form.services.dates import compact_date, expiration_timestamp, iso_compact, utc_now
from s3form.services.policy import PolicyDocument
from s3form.services.signing import compute_signature

logger = logging.getLogger(__name__)


class S3Config(BaseModel):
    """Account context for signing; shared read-only across sessions."""

    model_config = ConfigDict(frozen=True)

    access_key: str = Field(min_length=1)
    secret_key: SecretStr
    bucket: str = Field(min_length=1)
    region: str = Field(min_length=1)
    accelerate: bool = False
    session_token: SecretStr | None = None
    endpoint_url: str | None = None

    @field_validator("secret_key")
    @classmethod
    def _require_secret_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("secret_key must not be empty")
        return value


def credential_string(config: S3Config, date_compact: str) -> str:
    return "/".join([config.access_key, date_compact, config.region, CREDENTIAL_SCOPE])


def bucket_endpoint_url(config: S3Config) -> str:
    s3_host = ".s3-accelerate" if config.accelerate else ".s3"
    return f"http://{config.bucket}{s3_host}.amazonaws.com/"


class BrowserUploadSession:
    """One upload authorization: conditions, policy and signature for a single form.

    Every date string and the expiration derive from the instant captured at
    construction. A session is not safe to mutate while another thread is
    reading its policy or signature.
    """

    def __init__(self, config: S3Config, minutes_to_expiry: int, *, now: datetime | None = None) -> None:
        self.config = config
        self.created_at = now or utc_now()
        self.minutes_to_expiry = minutes_to_expiry
        self.date_string = compact_date(self.created_at)
        self.date_string_iso = iso_compact(self.date_string)
        self.credential = credential_string(config, self.date_string)
        self.expiration = expiration_timestamp(self.created_at, minutes_to_expiry)
        self.conditions: Conditions = default_conditions(
            bucket=config.bucket,
            credential=self.credential,
            iso_date=self.date_string_iso,
        )
        self._policy = PolicyDocument(self.conditions, self.expiration)
        logger.debug(
            "Opened browser upload session bucket=%s region=%s date=%s expiration=%s",
            config.bucket,
            config.region,
            self.date_string,
            self.expiration,
        )

    def add_condition(self, key: str, value: str) -> "BrowserUploadSession":
        self.conditions.add(key, value)
        # A policy computed before this call no longer covers every condition.
        self._policy.invalidate()
        return self

    def condition_for_key(self, key: str) -> str:
        return self.conditions.value_for(key)

    def policy(self) -> str:
        return self._policy.encoded

    def signature(self) -> str:
        return compute_signature(
            secret_key=self.config.secret_key.get_secret_value(),
            date_compact=self.date_string,
            region=self.config.region,
            policy_b64=self._policy.encoded,
        )

    def bucket_url(self) -> str:
        return bucket_endpoint_url(self.config)

    def form_fields(self) -> FormFieldBundle:
        policy = self.policy()
        return FormFieldBundle(
            url=self.bucket_url(),
            success_action_redirect=self.condition_for_key(SUCCESS_ACTION_REDIRECT),
            x_amz_algorithm=AWS4_HMAC_SHA256,
            x_amz_credential=self.credential,
            aws_access_key_id=self.config.access_key,
            signature=self.signature(),
            policy=policy,
            x_amz_date=self.date_string_iso,
            key=self.condition_for_key(KEY),
        )
