from datetime import UTC, datetime, timedelta

_EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"


def utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def compact_date(instant: datetime) -> str:
    """Return the ``YYYYMMDD`` UTC date used in credential scopes."""
    return _as_utc(instant).strftime("%Y%m%d")


def iso_compact(date_compact: str) -> str:
    # Always midnight; only the date portion is checked by the service.
    return f"{date_compact}T000000Z"


def expiration_timestamp(instant: datetime, minutes_to_expiry: int) -> str:
    """Return ``instant + minutes_to_expiry`` as ``YYYY-MM-DDTHH:MM:SS.000Z``.

    Zero and negative offsets are accepted and yield an already expired policy.
    """
    expires_at = _as_utc(instant) + timedelta(minutes=minutes_to_expiry)
    return expires_at.strftime(_EXPIRATION_FORMAT)
