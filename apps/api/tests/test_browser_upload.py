import base64
import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from s3form.fields import CONTENT_TYPE, KEY, SUCCESS_ACTION_REDIRECT
from s3form.services import browser_upload
from s3form.services.browser_upload import (
    BrowserUploadSession,
    S3Config,
    bucket_endpoint_url,
    credential_string,
)
from s3form.services.signing import derive_signing_key, sign_hex

INSTANT = datetime(2024, 3, 5, 14, 30, tzinfo=UTC)
SECRET = "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY"


def _config(**overrides) -> S3Config:
    values = {
        "access_key": "AKIA123",
        "secret_key": SECRET,
        "bucket": "mybucket",
        "region": "us-east-1",
    }
    values.update(overrides)
    return S3Config(**values)


def _session(**overrides) -> BrowserUploadSession:
    return BrowserUploadSession(_config(**overrides), 10, now=INSTANT)


def test_credential_string():
    assert credential_string(_config(), "20240305") == "AKIA123/20240305/us-east-1/s3/aws4_request"


def test_bucket_endpoint_url_plain_and_accelerated():
    assert bucket_endpoint_url(_config()) == "http://mybucket.s3.amazonaws.com/"
    assert bucket_endpoint_url(_config(accelerate=True)) == "http://mybucket.s3-accelerate.amazonaws.com/"


@pytest.mark.parametrize("field", ["access_key", "secret_key", "bucket", "region"])
def test_config_rejects_empty_values(field):
    with pytest.raises(ValidationError):
        _config(**{field: ""})


def test_config_is_frozen():
    config = _config()

    with pytest.raises(ValidationError):
        config.bucket = "other"


def test_session_derives_dates_from_single_instant():
    session = _session()

    assert session.date_string == "20240305"
    assert session.date_string_iso == "20240305T000000Z"
    assert session.credential == "AKIA123/20240305/us-east-1/s3/aws4_request"
    assert session.expiration == "2024-03-05T14:40:00.000Z"


def test_session_reads_clock_once(monkeypatch):
    reads: list[datetime] = []

    def _fake_now() -> datetime:
        reads.append(INSTANT)
        return INSTANT

    monkeypatch.setattr(browser_upload, "utc_now", _fake_now)

    session = BrowserUploadSession(_config(), 10)
    session.form_fields()

    assert len(reads) == 1
    assert session.created_at == INSTANT


def test_default_conditions_come_first_then_additions():
    session = _session().add_condition(KEY, "uploads/a.png").add_condition(CONTENT_TYPE, "image/png")

    assert session.conditions.as_policy_list() == [
        {"bucket": "mybucket"},
        {"x-amz-credential": "AKIA123/20240305/us-east-1/s3/aws4_request"},
        {"x-amz-algorithm": "AWS4-HMAC-SHA256"},
        {"x-amz-date": "20240305T000000Z"},
        {"key": "uploads/a.png"},
        {"Content-Type": "image/png"},
    ]


def test_form_fields_policy_and_signature_are_coupled():
    session = _session().add_condition(KEY, "uploads/a.png").add_condition(SUCCESS_ACTION_REDIRECT, "https://x/ok")

    bundle = session.form_fields()
    document = json.loads(base64.b64decode(bundle.policy))

    assert document["conditions"] == session.conditions.as_policy_list()
    assert document["expiration"] == "2024-03-05T14:40:00.000Z"
    assert bundle.signature == sign_hex(derive_signing_key(SECRET, "20240305", "us-east-1"), bundle.policy)
    assert bundle.signature == session.signature()
    assert bundle.policy == session.policy()


def test_form_fields_echo_key_and_redirect():
    session = _session(accelerate=True)
    session.add_condition(KEY, "uploads/a.png")
    session.add_condition(SUCCESS_ACTION_REDIRECT, "https://example.com/done")
    session.add_condition(KEY, "uploads/ignored.png")

    bundle = session.form_fields()

    assert bundle.url == "http://mybucket.s3-accelerate.amazonaws.com/"
    assert bundle.key == "uploads/a.png"
    assert bundle.success_action_redirect == "https://example.com/done"
    assert bundle.x_amz_algorithm == "AWS4-HMAC-SHA256"
    assert bundle.x_amz_credential == "AKIA123/20240305/us-east-1/s3/aws4_request"
    assert bundle.aws_access_key_id == "AKIA123"
    assert bundle.x_amz_date == "20240305T000000Z"


def test_form_fields_missing_optional_conditions_are_empty():
    bundle = _session().form_fields()

    assert bundle.key == ""
    assert bundle.success_action_redirect == ""


def test_form_fields_json_has_fixed_field_names():
    payload = json.loads(_session().form_fields().model_dump_json())

    assert list(payload) == [
        "url",
        "success_action_redirect",
        "x_amz_algorithm",
        "x_amz_credential",
        "aws_access_key_id",
        "signature",
        "policy",
        "x_amz_date",
        "key",
    ]
    assert all(isinstance(value, str) for value in payload.values())


def test_form_fields_are_deterministic():
    first = _session().add_condition(KEY, "k").form_fields().model_dump_json()
    second = _session().add_condition(KEY, "k").form_fields().model_dump_json()

    session = _session().add_condition(KEY, "k")
    assert session.form_fields() == session.form_fields()
    assert first == second


def test_adding_condition_after_signing_refreshes_policy_and_signature():
    session = _session()
    before = session.form_fields()

    session.add_condition(KEY, "uploads/late.png")
    after = session.form_fields()

    assert after.policy != before.policy
    assert after.signature != before.signature
    assert after.signature == sign_hex(derive_signing_key(SECRET, "20240305", "us-east-1"), after.policy)


def test_secret_key_never_leaks():
    session = _session()
    bundle_json = session.form_fields().model_dump_json()

    assert SECRET not in bundle_json
    assert SECRET not in base64.b64decode(session.policy()).decode("utf-8")
    assert SECRET not in repr(session.config)
