import base64
import json

from s3form.services.conditions import Conditions


class PolicySerializationError(RuntimeError):
    """Raised when the policy document cannot be encoded."""


def to_canonical_json(conditions: Conditions, expiration: str) -> bytes:
    document = {
        "conditions": conditions.as_policy_list(),
        "expiration": expiration,
    }
    try:
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise PolicySerializationError(f"Failed to encode policy document: {exc}") from exc


def to_base64_policy(canonical_json: bytes) -> str:
    return base64.b64encode(canonical_json).decode("ascii")


class PolicyDocument:
    """Compute-once base64 policy for a condition set and expiration.

    The signature must be computed over the exact string handed to the
    client, so both read ``encoded`` and never re-serialize independently.
    """

    def __init__(self, conditions: Conditions, expiration: str) -> None:
        self.conditions = conditions
        self.expiration = expiration
        self._encoded: str | None = None

    @property
    def encoded(self) -> str:
        if self._encoded is None:
            self._encoded = to_base64_policy(to_canonical_json(self.conditions, self.expiration))
        return self._encoded

    @property
    def is_cached(self) -> bool:
        return self._encoded is not None

    def invalidate(self) -> None:
        self._encoded = None
