"""Tests for public exceptions."""

import pytest

from httpdispatch.exceptions import (
    HttpDispatchConfigError,
    HttpDispatchError,
    MissingURLError,
    RequestConfigError,
    RequestTimeoutError,
    ResponseStatusError,
    TransportError,
)


class TestHttpDispatchError:
    """Tests for base HttpDispatchError."""

    def test_is_exception(self):
        """HttpDispatchError should be an Exception."""
        assert issubclass(HttpDispatchError, Exception)

    @pytest.mark.parametrize(
        "error_cls",
        [MissingURLError, RequestConfigError, HttpDispatchConfigError, TransportError],
    )
    def test_subclasses(self, error_cls):
        """All errors should be catchable as HttpDispatchError."""
        assert issubclass(error_cls, HttpDispatchError)


class TestTransportError:
    """Tests for TransportError and its subclasses."""

    def test_with_message_only(self):
        """Should create error with message only."""
        error = TransportError("connection refused")
        assert str(error) == "connection refused"
        assert error.url is None
        assert error.status_code is None

    def test_with_url(self):
        """Should store the URL."""
        error = TransportError("failed", url="http://x/test")
        assert error.url == "http://x/test"

    def test_response_status_error(self):
        """Should store status code and body."""
        error = ResponseStatusError("Not found", url="http://x", status_code=404, body="nope")
        assert isinstance(error, TransportError)
        assert error.status_code == 404
        assert error.body == "nope"
        assert error.url == "http://x"

    def test_timeout_is_transport_error(self):
        """Should be catchable as TransportError."""
        with pytest.raises(TransportError):
            raise RequestTimeoutError("timed out", url="http://x")
