"""Async request dispatcher with a pending-request correlation table."""

import asyncio
import inspect
import sys
from collections.abc import Callable, Mapping
from typing import Any, NoReturn

import httpx
from pydantic import ValidationError

from httpdispatch._internal.dispatch.encoding import build_open_url, encode_body, merge_headers
from httpdispatch._internal.dispatch.models import (
    DispatchResponse,
    PayloadKind,
    RequestConfig,
    RequestRecord,
    RequestState,
    Verb,
)
from httpdispatch._internal.dispatch.pending import PendingRequests
from httpdispatch._internal.dispatch.redaction import redact_mapping, redact_value
from httpdispatch.exceptions import (
    MissingURLError,
    RequestConfigError,
    RequestTimeoutError,
    ResponseStatusError,
    TransportError,
)

ConfigLike = RequestConfig | Mapping[str, Any] | None

_CONFIG_FIELDS = (
    "url",
    "params",
    "json_body",
    "raw_data",
    "headers",
    "callback",
    "on_error",
    "send_url",
    "verbose",
)


class RequestDispatcher:
    """Issues requests and routes each response back to its own callback.

    Every request is stored in the pending table under a unique correlation
    key before it is sent, and removed exactly once when it completes, fails
    or is cancelled.

    Callbacks only see successful (2xx) responses. Non-2xx statuses, timeouts
    and network errors are raised as TransportError subclasses and passed to
    the request's `on_error` handler, if any.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        send_url: bool = True,
        verbose: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            http_client: Client used to send requests. Not closed by the dispatcher.
            send_url: Default for passing the URL to callbacks.
            verbose: Default for per-request diagnostic logging.
        """
        self._http = http_client
        self._send_url = send_url
        self._verbose = verbose
        self._pending = PendingRequests()
        self._tasks: set[asyncio.Task[DispatchResponse]] = set()

    @property
    def pending(self) -> PendingRequests:
        """The table of in-flight requests."""
        return self._pending

    def _log(self, message: str, *, verbose: bool) -> None:
        """Log a diagnostic message to stderr if verbose is on."""
        if verbose:
            print(f"[httpdispatch] {message}", file=sys.stderr)

    # =========================================================================
    # Entry Points
    # =========================================================================

    async def get(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        return await self.request(Verb.GET, config, **overrides)

    async def post(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        return await self.request(Verb.POST, config, **overrides)

    async def put(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        return await self.request(Verb.PUT, config, **overrides)

    async def delete(self, config: ConfigLike = None, **overrides: Any) -> DispatchResponse:
        return await self.request(Verb.DELETE, config, **overrides)

    async def request(
        self,
        verb: Verb | str,
        config: ConfigLike = None,
        **overrides: Any,
    ) -> DispatchResponse:
        """Send one request and deliver its response.

        Args:
            verb: HTTP verb, as a Verb or a case-insensitive string.
            config: RequestConfig or a mapping with the same keys.
            **overrides: Config keys that replace those in `config`.

        Returns:
            The successful response.

        Raises:
            RequestConfigError: The verb or config is invalid.
            MissingURLError: The config has no URL. Nothing was sent.
            TransportError: The request failed (see subclasses).
        """
        verb = self._normalize_verb(verb)
        cfg = self._normalize_config(config, overrides)
        verbose = self._verbose if cfg.verbose is None else cfg.verbose

        if verbose:
            self._log(f"Initializing '{verb.value}' call with:", verbose=True)
            for line in self._describe(cfg):
                self._log(line, verbose=True)

        if not cfg.url:
            self._log("Aborting HTTP request: no URL.", verbose=verbose)
            raise MissingURLError("request config has no url")

        record = self._build_record(verb, cfg, verbose=verbose)
        return await self._send(record)

    def dispatch(
        self,
        verb: Verb | str,
        config: ConfigLike = None,
        **overrides: Any,
    ) -> "asyncio.Task[DispatchResponse]":
        """Schedule a request without waiting for it.

        Must be called from a running event loop. Failures of the returned
        task are always logged, so they are not lost if nobody awaits it.
        """
        task = asyncio.create_task(self.request(verb, config, **overrides))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    async def drain(self) -> None:
        """Wait for all requests scheduled with dispatch() to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _task_done(self, task: "asyncio.Task[DispatchResponse]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._log(f"Dispatched request failed: {error!r}", verbose=True)

    # =========================================================================
    # Normalization
    # =========================================================================

    def _normalize_verb(self, verb: Verb | str) -> Verb:
        if isinstance(verb, Verb):
            return verb
        try:
            return Verb(verb.upper())
        except ValueError as e:
            raise RequestConfigError(f"unsupported HTTP verb: {verb!r}") from e

    def _normalize_config(
        self, config: ConfigLike, overrides: Mapping[str, Any]
    ) -> RequestConfig:
        if isinstance(config, RequestConfig) and not overrides:
            return config

        if isinstance(config, RequestConfig):
            data: dict[str, Any] = {
                name: getattr(config, name) for name in config.model_fields_set
            }
        else:
            data = dict(config or {})
        data.update(overrides)

        try:
            return RequestConfig.model_validate(data)
        except ValidationError as e:
            raise RequestConfigError(f"invalid request config: {e}") from e

    def _describe(self, cfg: RequestConfig) -> list[str]:
        """Describe how each config key was filled, with secrets redacted."""
        lines = []
        for name in _CONFIG_FIELDS:
            value = redact_value(getattr(cfg, name))
            source = "value" if name in cfg.model_fields_set else "default"
            lines.append(f"Filling request key '{name}' with {source} '{value}'.")
        return lines

    def _build_record(self, verb: Verb, cfg: RequestConfig, *, verbose: bool) -> RequestRecord:
        url = cfg.url or ""
        if verb.has_body:
            open_url = url
            body, content_type = encode_body(cfg)
        else:
            ignored = [kind.value for kind in cfg.payload_kinds if kind is not PayloadKind.PARAMS]
            if ignored:
                self._log(
                    f"Ignoring {', '.join(ignored)} for {verb.value} request.",
                    verbose=verbose,
                )
            open_url = build_open_url(url, cfg.params)
            body, content_type = None, None

        return RequestRecord(
            key=self._pending.next_key(url),
            verb=verb,
            url=url,
            open_url=open_url,
            params=cfg.params,
            body=body,
            headers=merge_headers(cfg.headers, content_type),
            callback=cfg.callback,
            on_error=cfg.on_error,
            send_url=self._send_url if cfg.send_url is None else cfg.send_url,
            verbose=verbose,
        )

    # =========================================================================
    # Send & Completion
    # =========================================================================

    async def _send(self, record: RequestRecord) -> DispatchResponse:
        self._pending.add(record)
        record.state = RequestState.SENT
        # open_url carries raw param values, so log the redacted params instead
        self._log(
            f"Making {record.verb.value} request to {record.url} "
            f"with params {redact_mapping(record.params)} "
            f"and headers {redact_mapping(record.headers)}",
            verbose=record.verbose,
        )

        try:
            try:
                response = await self._http.request(
                    record.verb.value,
                    record.open_url,
                    content=record.body,
                    headers=record.headers,
                )
            except httpx.TimeoutException as e:
                await self._fail(
                    record,
                    RequestTimeoutError(
                        f"{record.verb.value} {record.url} timed out", url=record.url
                    ),
                    e,
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                await self._fail(
                    record,
                    TransportError(f"{record.verb.value} {record.url} failed: {e}", url=record.url),
                    e,
                )

            if not 200 <= response.status_code < 300:
                await self._fail(
                    record,
                    ResponseStatusError(
                        f"{record.verb.value} {record.url} returned {response.status_code}",
                        url=record.url,
                        status_code=response.status_code,
                        body=response.text,
                    ),
                )

            result = await self.complete(record.key, response)
            if result is None:
                record.state = RequestState.LOST
                raise TransportError(
                    f"{record.verb.value} {record.url} completed with no pending record",
                    url=record.url,
                    status_code=response.status_code,
                )
            return result
        except asyncio.CancelledError:
            record.state = RequestState.CANCELLED
            self._log(f"Request {record.key} cancelled before completion.", verbose=record.verbose)
            raise
        finally:
            # No-op unless an unexpected error escaped before cleanup
            self._pending.pop(record.key)

    async def complete(self, key: str, response: httpx.Response) -> DispatchResponse | None:
        """Handle a completion notification for the request stored under `key`.

        A notification with no matching record is logged and ignored.
        """
        record = self._pending.pop(key)
        if record is None:
            self._log(f"Orphan response: no state retained for '{key}'.", verbose=True)
            return None
        return await self._deliver(record, response)

    async def _deliver(self, record: RequestRecord, response: httpx.Response) -> DispatchResponse:
        """Pass a response to the record's callback. The record is already out of the table."""
        record.state = RequestState.COMPLETED
        body = response.text
        self._log(f"Received response from {record.url}: {body}", verbose=record.verbose)

        result = DispatchResponse(
            key=record.key,
            url=record.url,
            verb=record.verb,
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )

        if record.callback is not None:
            self._log("Sending response to callback function.", verbose=record.verbose)
            if record.send_url:
                await _invoke(record.callback, body, record.url)
            else:
                await _invoke(record.callback, body)
        else:
            self._log("No callback function.", verbose=record.verbose)

        return result

    async def _fail(
        self,
        record: RequestRecord,
        error: TransportError,
        cause: BaseException | None = None,
    ) -> NoReturn:
        self._pending.pop(record.key)
        record.state = RequestState.FAILED
        self._log(f"Request {record.key} failed: {error}", verbose=record.verbose)
        if record.on_error is not None:
            try:
                await _invoke(record.on_error, error)
            except Exception as handler_error:
                # The transport error wins; the handler's error stays as __context__
                self._log(f"on_error handler failed: {handler_error!r}", verbose=True)
                raise error from cause
        raise error from cause


async def _invoke(fn: Callable[..., Any], *args: Any) -> None:
    """Call a sync or async callback."""
    outcome = fn(*args)
    if inspect.isawaitable(outcome):
        await outcome
