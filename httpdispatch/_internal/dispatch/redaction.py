"""Redaction of sensitive header and param values in diagnostic output."""

from collections.abc import Mapping
from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "api_key",
    "token",
    "access_token",
    "refresh_token",
    "secret",
    "password",
    "credentials",
})

REDACTED_VALUE = "[REDACTED]"


def redact_mapping(values: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of `values` with sensitive entries replaced.

    Keys are matched case-insensitively. The input is never mutated.
    Nested mappings and lists are walked so JSON payloads can be logged too.
    """
    if not values:
        return {}
    return _redact(dict(values))


def _redact(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        result = {}
        for key, value in obj.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = _redact(value)
        return result
    elif isinstance(obj, list):
        return [_redact(item) for item in obj]
    else:
        return obj


def redact_value(value: Any) -> Any:
    """Redact any loggable value: mappings and lists are walked, scalars returned as-is."""
    return _redact(value)
