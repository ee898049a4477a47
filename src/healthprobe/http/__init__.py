# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import build_headers, has_header, header_value
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .redirects import (
    MAX_REDIRECTS,
    FollowAllRedirects,
    FollowLocalRedirects,
    RedirectPolicy,
    build_redirect_policy,
)
from .url import format_url, join_host_port

__all__ = [
    "MAX_REDIRECTS",
    "FollowAllRedirects",
    "FollowLocalRedirects",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "RedirectPolicy",
    "StubHttpClient",
    "build_headers",
    "build_redirect_policy",
    "create_default_http_client",
    "format_url",
    "has_header",
    "header_value",
    "join_host_port",
]
