"""Tests for redaction of diagnostic output."""

from httpdispatch._internal.dispatch.redaction import REDACTED_VALUE, redact_mapping, redact_value


class TestRedactMapping:
    """Tests for redact_mapping()."""

    def test_redacts_auth_headers(self):
        """Should redact authorization and cookie headers."""
        result = redact_mapping(
            {"Authorization": "Bearer abc", "Cookie": "sid=1", "Accept": "text/html"}
        )
        assert result == {
            "Authorization": REDACTED_VALUE,
            "Cookie": REDACTED_VALUE,
            "Accept": "text/html",
        }

    def test_redacts_sensitive_params(self):
        """Should redact password-like params."""
        result = redact_mapping({"user": "bob", "password": "hunter2"})
        assert result == {"user": "bob", "password": REDACTED_VALUE}

    def test_nested_values(self):
        """Should walk nested mappings and lists."""
        result = redact_mapping({"items": [{"token": "t", "id": 1}], "meta": {"secret": "s"}})
        assert result == {
            "items": [{"token": REDACTED_VALUE, "id": 1}],
            "meta": {"secret": REDACTED_VALUE},
        }

    def test_does_not_mutate_input(self):
        """Should leave the original untouched."""
        original = {"Authorization": "Bearer abc"}
        redact_mapping(original)
        assert original == {"Authorization": "Bearer abc"}

    def test_empty(self):
        """Should return empty dict for empty or missing input."""
        assert redact_mapping(None) == {}
        assert redact_mapping({}) == {}


class TestRedactValue:
    """Tests for redact_value()."""

    def test_list_of_mappings(self):
        """Should redact sensitive keys inside a top-level list."""
        assert redact_value([{"password": "hunter2", "name": "bob"}]) == [
            {"password": REDACTED_VALUE, "name": "bob"}
        ]

    def test_scalars_unchanged(self):
        """Should return scalars and None as-is."""
        assert redact_value("plain") == "plain"
        assert redact_value(None) is None
