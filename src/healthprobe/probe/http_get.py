# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP GET probe."""

from __future__ import annotations

from ..config import ProbeSettings, load_probe_settings
from ..http.client import HttpClient
from ..http.httpx_client import HttpxClient
from ..http.models import Headers, HttpRequest
from ..http.redirects import build_redirect_policy
from ..models.result import ProbeOutcome
from .http_probe import do_http_probe


def build_probe_client(settings: ProbeSettings, follow_non_local_redirects: bool | None = None) -> HttpClient:
    """Create the httpx client a probe reuses for its whole lifetime."""
    follow = settings.follow_non_local_redirects if follow_non_local_redirects is None else follow_non_local_redirects
    return HttpxClient(settings, redirect_policy=build_redirect_policy(follow))


class HttpGetProber:
    """Checks whether a GET to a URL answers with a 2xx status."""

    def __init__(
        self,
        client: HttpClient | None = None,
        *,
        settings: ProbeSettings | None = None,
        follow_non_local_redirects: bool | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.client = client or build_probe_client(self.settings, follow_non_local_redirects)

    def probe(self, url: str, headers: Headers | None = None, timeout: float | None = None) -> ProbeOutcome:
        return do_http_get_probe(url, headers, self.client, timeout=timeout, user_agent=self.settings.user_agent)

    def close(self) -> None:
        self.client.close()


def do_http_get_probe(
    url: str,
    headers: Headers | None,
    client: HttpClient,
    *,
    timeout: float | None = None,
    user_agent: str | None = None,
) -> ProbeOutcome:
    """Probe ``url`` with a bodiless GET request."""
    request = HttpRequest(url=url, method="GET", headers=dict(headers or {}), timeout=timeout)
    if user_agent:
        return do_http_probe(request, client, user_agent=user_agent)
    return do_http_probe(request, client)


__all__ = ["HttpGetProber", "build_probe_client", "do_http_get_probe"]
