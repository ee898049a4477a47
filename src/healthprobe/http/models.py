# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the HTTP probes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    # Overrides the Host header sent on the wire without changing the dial target.
    host: str | None = None


@dataclass
class HttpResponse:
    """Normalized HTTP response; ``ok`` is False when no response was received."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    exception: Exception | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def truncated(self) -> bool:
        return bool(self.meta.get("body_truncated"))

    @classmethod
    def from_exception(cls, exc: Exception) -> HttpResponse:
        return cls(
            ok=False,
            error_message=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            exception=exc,
        )
