"""Shared HTTP client configuration."""

import httpx

from httpdispatch._version import __version__

DEFAULT_TIMEOUT = 30.0


def create_http_client(
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        timeout: Request timeout in seconds. None disables the timeout.
        base_url: Optional base URL for all requests.
        headers: Extra headers sent with every request.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"httpdispatch/{__version__}", **(headers or {})},
    )
