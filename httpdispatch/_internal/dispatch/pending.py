"""Pending-request table keyed by correlation key."""

import itertools

from httpdispatch._internal.dispatch.models import RequestRecord


class PendingRequests:
    """Mapping from correlation key to in-flight RequestRecord.

    Keys are `<url>-<n>` where n comes from a per-table counter, so two
    requests to the same URL never share a slot.
    """

    def __init__(self) -> None:
        self._records: dict[str, RequestRecord] = {}
        self._counter = itertools.count(1)

    def next_key(self, url: str) -> str:
        return f"{url}-{next(self._counter)}"

    def add(self, record: RequestRecord) -> None:
        if record.key in self._records:
            raise KeyError(f"request already pending: {record.key}")
        self._records[record.key] = record

    def pop(self, key: str) -> RequestRecord | None:
        """Remove and return the record for `key`, or None if absent."""
        return self._records.pop(key, None)

    def get(self, key: str) -> RequestRecord | None:
        return self._records.get(key)

    def keys(self) -> list[str]:
        return list(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)
