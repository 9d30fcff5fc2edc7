from collections.abc import Iterator

from s3form.fields import AWS4_HMAC_SHA256, BUCKET, X_AMZ_ALGORITHM, X_AMZ_CREDENTIAL, X_AMZ_DATE


class Conditions:
    """Ordered, append-only list of single-key policy conditions.

    Order is part of the signed policy document, so entries are never sorted,
    merged or deduplicated. Duplicate keys are allowed; lookups return the
    first match.
    """

    def __init__(self, items: list[tuple[str, str]] | None = None) -> None:
        self._items: list[tuple[str, str]] = list(items or [])

    def add(self, key: str, value: str) -> "Conditions":
        self._items.append((key, value))
        return self

    def lookup(self, key: str) -> tuple[str, bool]:
        for item_key, value in self._items:
            if item_key == key:
                return value, True
        return "", False

    def value_for(self, key: str) -> str:
        value, _ = self.lookup(key)
        return value

    def as_policy_list(self) -> list[dict[str, str]]:
        return [{key: value} for key, value in self._items]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Conditions({self._items!r})"


def default_conditions(
    *,
    bucket: str,
    credential: str,
    iso_date: str,
    algorithm: str = AWS4_HMAC_SHA256,
) -> Conditions:
    return Conditions(
        [
            (BUCKET, bucket),
            (X_AMZ_CREDENTIAL, credential),
            (X_AMZ_ALGORITHM, algorithm),
            (X_AMZ_DATE, iso_date),
        ]
    )
