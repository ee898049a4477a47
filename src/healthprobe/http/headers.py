# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

HTTP header field names are case-insensitive (RFC 9110). Probe headers are kept as
plain dicts in the casing the caller declared, so lookups here scan case-insensitively.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models.handler import HTTPHeader
from .models import Headers


def build_headers(header_list: Iterable[HTTPHeader] | None) -> Headers:
    """
    Turn declared ``<name, value>`` pairs into a header dict.

    Repeated names are combined into one comma-separated value.
    """
    headers: Headers = {}
    for header in header_list or ():
        if header.name in headers:
            headers[header.name] = f"{headers[header.name]}, {header.value}"
        else:
            headers[header.name] = header.value
    return headers


def _find_key(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    if name in headers:
        return name
    lower = name.lower()
    for key in headers:
        if key.lower() == lower:
            return key
    return None


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    """Return True when the header is present, even with an empty value."""
    return _find_key(headers, name) is not None


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    key = _find_key(headers, name)
    if key is None or headers is None:
        return default
    value = headers[key]
    return default if value is None else str(value).strip()


__all__ = ["build_headers", "has_header", "header_value"]
