"""Log-safe rendering of product source requests and responses.

Request headers may carry the storefront bearer token, and a products
response can hold thousands of records.  DEBUG logs get the headers with
credentials masked and only the first few products.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
        "token",
    }
)


def redact_for_log(value: Any, *, max_string: int = 512, max_items: int = 20) -> Any:
    """Return a copy of *value* with credentials masked and bulk trimmed.

    Handles the JSON shapes the products endpoint deals in: header
    mappings, product lists and their nested objects.
    """
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"

    if isinstance(value, Mapping):
        return {
            str(key): "<redacted>"
            if str(key).lower() in _SENSITIVE_KEYS
            else redact_for_log(item, max_string=max_string, max_items=max_items)
            for key, item in value.items()
        }

    if isinstance(value, list):
        shown = [redact_for_log(item, max_string=max_string, max_items=max_items) for item in value[:max_items]]
        if len(value) > max_items:
            shown.append(f"<{len(value) - max_items} more>")
        return shown

    # Numbers, booleans and None are logged as-is.
    return value
