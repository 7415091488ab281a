"""Request dispatch: config models, wire encoding and the pending-request table."""

from httpdispatch._internal.dispatch.client import RequestDispatcher
from httpdispatch._internal.dispatch.models import (
    DispatchResponse,
    PayloadKind,
    RequestConfig,
    RequestRecord,
    RequestState,
    Verb,
)
from httpdispatch._internal.dispatch.pending import PendingRequests

__all__ = [
    "RequestDispatcher",
    "PendingRequests",
    "RequestConfig",
    "RequestRecord",
    "RequestState",
    "DispatchResponse",
    "PayloadKind",
    "Verb",
]
