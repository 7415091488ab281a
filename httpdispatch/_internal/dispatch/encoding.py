"""Wire encoding for query strings, request bodies and headers."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from httpdispatch._internal.dispatch.models import PayloadKind, RequestConfig

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"

REQUESTED_WITH_HEADER = "X-Requested-With"
REQUESTED_WITH_VALUE = "XMLHttpRequest"

# Characters encodeURIComponent leaves alone, besides alphanumerics.
_UNRESERVED = "-_.!~*'()"


def encode_component(value: Any) -> str:
    """Percent-encode a single key or value."""
    return quote(str(value), safe=_UNRESERVED)


def to_param_string(params: Mapping[str, Any] | None) -> str:
    """Serialize params as `key=value` pairs joined by `&`, in insertion order."""
    if not params:
        return ""
    return "&".join(
        f"{encode_component(key)}={encode_component(value)}" for key, value in params.items()
    )


def build_open_url(url: str, params: Mapping[str, Any] | None) -> str:
    """Append params to the URL as a query string."""
    query = to_param_string(params)
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def encode_body(config: RequestConfig) -> tuple[str | bytes | None, str | None]:
    """Encode the config's payload for a POST/PUT body.

    Returns:
        (body, content_type). content_type is None for raw data and for
        configs with no payload.
    """
    kind = config.payload_kind
    if kind is PayloadKind.PARAMS:
        return to_param_string(config.params), FORM_CONTENT_TYPE
    if kind is PayloadKind.JSON:
        return json.dumps(config.json_body, separators=(",", ":")), JSON_CONTENT_TYPE
    if kind is PayloadKind.RAW_DATA:
        return config.raw_data, None
    return None, None


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


def merge_headers(
    caller: Mapping[str, str] | None,
    content_type: str | None = None,
) -> dict[str, str]:
    """Build request headers from the caller's headers.

    X-Requested-With is always present and Content-Type is filled from the
    payload, unless the caller already set either one.
    """
    merged = dict(caller or {})
    if not _has_header(merged, REQUESTED_WITH_HEADER):
        merged[REQUESTED_WITH_HEADER] = REQUESTED_WITH_VALUE
    if content_type is not None and not _has_header(merged, "Content-Type"):
        merged["Content-Type"] = content_type
    return merged
