"""User-facing async HTTP client.

Example:
    from httpdispatch import HttpClient

    async with HttpClient(verbose=True) as client:
        await client.get(
            url="http://example.com",
            params={"foo": "bar", "boo": "bat"},
            callback=handler,
        )

    # GET http://example.com?foo=bar&boo=bat, then handler(body, url)
"""

import asyncio
import os
from collections.abc import Callable
from types import TracebackType
from typing import Any

import httpx

from httpdispatch._internal.dispatch.client import ConfigLike, RequestDispatcher
from httpdispatch._internal.dispatch.models import DispatchResponse, Verb
from httpdispatch._internal.dispatch.pending import PendingRequests
from httpdispatch._internal.http import create_http_client
from httpdispatch.exceptions import HttpDispatchConfigError

DEFAULT_TIMEOUT_MS = 30_000


class HttpClient:
    """Async HTTP client that routes each response to a per-request callback.

    Use `HttpClient.from_env()` to create a client from environment variables.
    The verb methods accept a RequestConfig, a plain mapping, or keyword
    arguments (`url`, `params`, `json`, `raw_data`, `headers`, `callback`,
    `on_error`, `send_url`, `verbose`).
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_ms: int | None = DEFAULT_TIMEOUT_MS,
        headers: dict[str, str] | None = None,
        send_url: bool = True,
        verbose: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Optional base URL for relative request URLs.
            timeout_ms: Per-request timeout in milliseconds. None disables it.
            headers: Headers sent with every request.
            send_url: Default for passing the URL to callbacks.
            verbose: Default for per-request diagnostic logging to stderr.
            http_client: Pre-built httpx client. It is not closed by aclose();
                base_url, timeout_ms and headers are ignored when given.

        Raises:
            HttpDispatchConfigError: timeout_ms is not positive.
        """
        if timeout_ms is not None and timeout_ms <= 0:
            raise HttpDispatchConfigError(f"timeout_ms must be positive, got {timeout_ms}")

        self._base_url = base_url
        self._timeout_ms = timeout_ms
        self._owns_http = http_client is None
        self._http = http_client or create_http_client(
            timeout=timeout_ms / 1000 if timeout_ms is not None else None,
            base_url=base_url,
            headers=headers,
        )
        self._dispatcher = RequestDispatcher(self._http, send_url=send_url, verbose=verbose)

    @classmethod
    def from_env(cls) -> "HttpClient":
        """Create a client from environment variables.

        Optional environment variables:
            HTTPDISPATCH_BASE_URL: Base URL for relative request URLs.
            HTTPDISPATCH_TIMEOUT_MS: Request timeout in milliseconds.
            HTTPDISPATCH_VERBOSE: Set to "1" to enable diagnostic logging.
            HTTPDISPATCH_SEND_URL: Set to "0" to stop passing URLs to callbacks.

        Returns:
            A configured HttpClient.

        Raises:
            ValueError: HTTPDISPATCH_TIMEOUT_MS is not an integer.
        """
        base_url = os.environ.get("HTTPDISPATCH_BASE_URL")
        timeout_ms = int(os.environ.get("HTTPDISPATCH_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        verbose = os.environ.get("HTTPDISPATCH_VERBOSE", "") == "1"
        send_url = os.environ.get("HTTPDISPATCH_SEND_URL", "1") != "0"

        return cls(
            base_url=base_url,
            timeout_ms=timeout_ms,
            verbose=verbose,
            send_url=send_url,
        )

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    @property
    def pending(self) -> PendingRequests:
        """The table of in-flight requests."""
        return self._dispatcher.pending

    # =========================================================================
    # Requests
    # =========================================================================

    async def get(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        """GET `url`, with `params` encoded into the query string."""
        return await self._dispatcher.get(config, **overrides)

    async def post(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        """POST `params` (form), `json` or `raw_data` to `url`."""
        return await self._dispatcher.post(config, **overrides)

    async def put(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        """PUT `params` (form), `json` or `raw_data` to `url`."""
        return await self._dispatcher.put(config, **overrides)

    async def delete(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        """DELETE `url`, with `params` encoded into the query string."""
        return await self._dispatcher.delete(config, **overrides)

    async def request(
        self, verb: Verb | str, config: ConfigLike = None, **overrides: Any
    ) -> DispatchResponse:
        return await self._dispatcher.request(verb, config, **overrides)

    def dispatch(
        self, verb: Verb | str, config: ConfigLike = None, **overrides: Any
    ) -> "asyncio.Task[DispatchResponse]":
        """Fire-and-forget variant of request(). Returns the scheduled task."""
        return self._dispatcher.dispatch(verb, config, **overrides)

    async def drain(self) -> None:
        await self._dispatcher.drain()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self) -> None:
        """Wait for dispatched requests, then close the owned httpx client."""
        await self._dispatcher.drain()
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def get_http_client() -> HttpClient:
    """Get an HttpClient configured from environment variables.

    Returns:
        A configured HttpClient instance.
    """
    return HttpClient.from_env()


async def fetch(
    url: str | None,
    callback: Callable[..., Any] | None,
    *,
    verbose: bool = False,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    """One-shot GET that hands the response body to `callback`.

    Nothing is sent unless both `url` and `callback` are given.

    Returns:
        The response body, or None if the request was skipped.
    """
    if not url or callback is None:
        return None

    async with HttpClient(http_client=http_client, send_url=False, verbose=verbose) as client:
        response = await client.get(url=url, callback=callback)
    return response.body
