# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import RedirectLoopError
from .client import HttpClient
from .headers import has_header
from .models import HttpRequest, HttpResponse
from .redirects import RedirectPolicy, build_redirect_policy

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper for probes.

    Redirects are followed by hand so the configured ``RedirectPolicy`` decides every
    hop. The whole exchange (all hops plus the body read) shares one deadline, and the
    body is read up to ``settings.max_body_bytes``.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        redirect_policy: RedirectPolicy | None = None,
        client: httpx.Client | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.redirect_policy = redirect_policy or build_redirect_policy(self.settings.follow_non_local_redirects)
        if client is None:
            # Probes must not pick up the host's proxy settings or reuse connections.
            client = httpx.Client(
                follow_redirects=False,
                timeout=self.settings.timeout,
                verify=self.settings.verify_ssl,
                trust_env=False,
                limits=httpx.Limits(max_keepalive_connections=0),
            )
            client.headers.pop("User-Agent", None)
        self._client = client

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        if not has_header(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent
        if request.host:
            for key in [key for key in headers if key.lower() == "host"]:
                del headers[key]
            headers["Host"] = request.host

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        deadline = time.monotonic() + timeout

        try:
            outgoing = self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
            )
            via: list[str] = []
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise httpx.TimeoutException(f"deadline of {timeout}s exceeded", request=outgoing)
                outgoing.extensions = {**outgoing.extensions, "timeout": httpx.Timeout(remaining).as_dict()}
                resp = self._client.send(outgoing, stream=True, follow_redirects=False)
                via.append(str(outgoing.url))

                next_request = resp.next_request
                if next_request is None:
                    break
                try:
                    follow = self.redirect_policy.check(str(next_request.url), via)
                except RedirectLoopError as exc:
                    resp.close()
                    if self.redirect_policy.reports_loops:
                        raise
                    raise httpx.TooManyRedirects(str(exc), request=next_request) from exc
                if not follow:
                    logger.debug("Not following redirect from %s to %s", outgoing.url, next_request.url)
                    break
                resp.close()
                outgoing = next_request

            try:
                content, truncated = self._read_bounded(resp, deadline, timeout)
            finally:
                resp.close()

            encoding = resp.encoding or "utf-8"
            try:
                text = content.decode(encoding, errors="replace")
            except LookupError:
                text = content.decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=content,
                url=str(resp.url),
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                    "body_bytes_limit": self.settings.max_body_bytes,
                    "redirects": len(via) - 1,
                },
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("HTTP request to %s failed: %s (%s)", request.url, exc, type(exc).__name__)
            return HttpResponse.from_exception(exc)

    def _read_bounded(self, resp: httpx.Response, deadline: float, timeout: float) -> tuple[bytes, bool]:
        max_body_bytes = self.settings.max_body_bytes
        content = bytearray()
        truncated = False
        for chunk in resp.iter_bytes():
            # Socket timeouts bound each read, not the whole body.
            if time.monotonic() >= deadline:
                raise httpx.ReadTimeout(f"deadline of {timeout}s exceeded reading body", request=resp.request)
            if not chunk:
                continue
            remaining = max_body_bytes - len(content)
            if len(chunk) > remaining:
                content.extend(chunk[:remaining])
                truncated = True
                break
            content.extend(chunk)
        return bytes(content), truncated

    def close(self) -> None:
        self._client.close()
