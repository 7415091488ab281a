"""Pydantic models for request configs, in-flight records and results."""

import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Enumerations
# =============================================================================


class Verb(str, Enum):
    """HTTP verbs the dispatcher knows how to shape."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (Verb.POST, Verb.PUT)


class PayloadKind(str, Enum):
    """Which config field supplies the request payload."""

    PARAMS = "params"
    JSON = "json"
    RAW_DATA = "raw_data"


class RequestState(str, Enum):
    """Lifecycle of a single dispatched request."""

    CREATED = "created"
    SENT = "sent"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    LOST = "lost"


# =============================================================================
# Request Config
# =============================================================================


class RequestConfig(BaseModel):
    """Per-call request configuration.

    Required fields:
        url: Target URL. A config without one is never sent.

    Payload fields (at most one):
        params: Mapping encoded into the query string (GET/DELETE) or a
            form body (POST/PUT).
        json: Any JSON-serializable value, POST/PUT only.
        raw_data: Pre-encoded body sent unmodified, POST/PUT only.

    Optional fields:
        headers: Extra request headers, merged over the defaults.
        callback: Receives (body) or (body, url) on success.
        on_error: Receives the TransportError on failure.
        send_url: Pass the URL to the callback. None uses the client default.
        verbose: Log this request's lifecycle. None uses the client default.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    url: str | None = None
    params: dict[str, Any] | None = None
    json_body: Any = Field(default=None, alias="json")
    raw_data: str | bytes | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    callback: Callable[..., Any] | None = None
    on_error: Callable[..., Any] | None = None
    send_url: bool | None = None
    verbose: bool | None = None

    @model_validator(mode="after")
    def single_payload_source(self) -> "RequestConfig":
        kinds = self.payload_kinds
        if len(kinds) > 1:
            names = ", ".join(kind.value for kind in kinds)
            raise ValueError(f"only one payload source may be set, got: {names}")
        return self

    @property
    def payload_kinds(self) -> list[PayloadKind]:
        """All payload sources that are set, in params/json/raw_data order."""
        kinds = []
        if self.params:
            kinds.append(PayloadKind.PARAMS)
        if self.json_body is not None:
            kinds.append(PayloadKind.JSON)
        if self.raw_data:
            kinds.append(PayloadKind.RAW_DATA)
        return kinds

    @property
    def payload_kind(self) -> PayloadKind | None:
        kinds = self.payload_kinds
        return kinds[0] if kinds else None


# =============================================================================
# In-flight Record
# =============================================================================


class RequestRecord(BaseModel):
    """One in-flight request, stored in the pending table under `key`."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str
    verb: Verb
    url: str
    open_url: str
    params: dict[str, Any] | None = None
    body: str | bytes | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    callback: Callable[..., Any] | None = None
    on_error: Callable[..., Any] | None = None
    send_url: bool = True
    verbose: bool = False
    state: RequestState = RequestState.CREATED
    created_at: float = Field(default_factory=time.monotonic)


# =============================================================================
# Result
# =============================================================================


class DispatchResponse(BaseModel):
    """Successful response handed back to the caller."""

    key: str
    url: str
    verb: Verb
    status_code: int
    body: str
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
