"""httpdispatch: async HTTP requests with per-request callbacks.

Public API:
    HttpClient - Verb-named entry points (get, post, put, delete)
    fetch - One-shot GET helper
    RequestConfig - Per-call configuration
    DispatchResponse - Successful response

Internal:
    _internal.dispatch - Request dispatcher and pending-request table
"""

from httpdispatch._internal.dispatch.models import (
    DispatchResponse,
    PayloadKind,
    RequestConfig,
    Verb,
)
from httpdispatch._version import __version__
from httpdispatch.client import HttpClient, fetch, get_http_client
from httpdispatch.exceptions import (
    HttpDispatchConfigError,
    HttpDispatchError,
    MissingURLError,
    RequestConfigError,
    RequestTimeoutError,
    ResponseStatusError,
    TransportError,
)

__all__ = [
    "__version__",
    "HttpClient",
    "fetch",
    "get_http_client",
    "RequestConfig",
    "DispatchResponse",
    "PayloadKind",
    "Verb",
    "HttpDispatchError",
    "HttpDispatchConfigError",
    "MissingURLError",
    "RequestConfigError",
    "TransportError",
    "ResponseStatusError",
    "RequestTimeoutError",
]
