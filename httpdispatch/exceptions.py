"""Public exceptions for httpdispatch."""


class HttpDispatchError(Exception):
    """Base exception for all httpdispatch errors."""


class MissingURLError(HttpDispatchError):
    """Request config has no URL; nothing was sent."""


class RequestConfigError(HttpDispatchError):
    """Per-request config failed validation."""


class HttpDispatchConfigError(HttpDispatchError):
    """Client configuration error (invalid timeout, bad env values)."""


class TransportError(HttpDispatchError):
    """Request was sent but did not complete successfully."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResponseStatusError(TransportError):
    """Server answered with a non-2xx status."""

    def __init__(self, message: str, *, url: str, status_code: int, body: str = "") -> None:
        super().__init__(message, url=url, status_code=status_code)
        self.body = body


class RequestTimeoutError(TransportError):
    """Request did not complete within the configured timeout."""
