# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP POST probe."""

from __future__ import annotations

from urllib.parse import urlencode

from ..config import ProbeSettings, load_probe_settings
from ..http.client import HttpClient
from ..http.headers import has_header
from ..http.models import Headers, HttpRequest
from ..models.handler import FormValues
from ..models.result import ProbeOutcome
from .http_get import build_probe_client
from .http_probe import do_http_probe

CONTENT_TYPE = "Content-Type"
CONTENT_FORM = "application/x-www-form-urlencoded"
CONTENT_JSON = "application/json"


def encode_form(form: FormValues) -> str:
    """URL-encode form values with keys in sorted order."""
    return urlencode([(key, value) for key in sorted(form) for value in form[key]])


class HttpPostProber:
    """Checks whether a POST to a URL answers with a 2xx status."""

    def __init__(
        self,
        client: HttpClient | None = None,
        *,
        settings: ProbeSettings | None = None,
        follow_non_local_redirects: bool | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.client = client or build_probe_client(self.settings, follow_non_local_redirects)

    def probe(
        self,
        url: str,
        headers: Headers | None = None,
        form: FormValues | None = None,
        body: str = "",
        timeout: float | None = None,
    ) -> ProbeOutcome:
        return do_http_post_probe(
            url,
            headers,
            self.client,
            form=form,
            body=body,
            timeout=timeout,
            user_agent=self.settings.user_agent,
        )

    def close(self) -> None:
        self.client.close()


def do_http_post_probe(
    url: str,
    headers: Headers | None,
    client: HttpClient,
    *,
    form: FormValues | None = None,
    body: str = "",
    timeout: float | None = None,
    user_agent: str | None = None,
) -> ProbeOutcome:
    """
    Probe ``url`` with a POST request.

    Form data wins over a raw body. A caller-supplied Content-Type is kept as is.
    """
    request_headers = dict(headers or {})
    content: str | None = None
    content_type: str | None = None
    if form is not None:
        content = encode_form(form)
        content_type = CONTENT_FORM
    elif body:
        content = body
        content_type = CONTENT_JSON

    if content_type and not has_header(request_headers, CONTENT_TYPE):
        request_headers[CONTENT_TYPE] = content_type

    request = HttpRequest(url=url, method="POST", headers=request_headers, body=content, timeout=timeout)
    if user_agent:
        return do_http_probe(request, client, user_agent=user_agent)
    return do_http_probe(request, client)


__all__ = ["HttpPostProber", "do_http_post_probe", "encode_form"]
