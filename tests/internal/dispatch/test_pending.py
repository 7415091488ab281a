"""Tests for the pending-request table."""

import pytest

from httpdispatch._internal.dispatch.models import RequestRecord, Verb
from httpdispatch._internal.dispatch.pending import PendingRequests


def _record(table: PendingRequests, url: str = "http://x/test") -> RequestRecord:
    return RequestRecord(key=table.next_key(url), verb=Verb.GET, url=url, open_url=url)


class TestPendingRequests:
    """Tests for PendingRequests."""

    def test_keys_unique_for_same_url(self):
        """Should give distinct keys to requests for the same URL."""
        table = PendingRequests()
        keys = {table.next_key("http://x/test") for _ in range(100)}
        assert len(keys) == 100

    def test_key_format(self):
        """Should key by URL plus counter."""
        table = PendingRequests()
        assert table.next_key("http://x/test") == "http://x/test-1"
        assert table.next_key("http://x/test") == "http://x/test-2"

    def test_add_and_pop(self):
        """Should store and remove a record exactly once."""
        table = PendingRequests()
        record = _record(table)
        table.add(record)
        assert record.key in table
        assert len(table) == 1

        assert table.pop(record.key) is record
        assert table.pop(record.key) is None
        assert len(table) == 0

    def test_add_duplicate_raises(self):
        """Should refuse to overwrite a pending record."""
        table = PendingRequests()
        record = _record(table)
        table.add(record)
        with pytest.raises(KeyError):
            table.add(record)

    def test_get_and_keys(self):
        """Should look up records without removing them."""
        table = PendingRequests()
        first = _record(table)
        second = _record(table)
        table.add(first)
        table.add(second)
        assert table.get(first.key) is first
        assert table.get("missing") is None
        assert table.keys() == [first.key, second.key]
