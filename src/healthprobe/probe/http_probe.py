# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request execution and response classification shared by the HTTP GET and POST probes."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config import DEFAULT_USER_AGENT
from ..errors import RedirectLoopError
from ..http.client import HttpClient
from ..http.headers import has_header, header_value
from ..http.models import HttpRequest
from ..models.result import ProbeOutcome, Result

logger = logging.getLogger(__name__)


def classify_status(status_code: int) -> Result:
    """2xx is success, 3xx a redirect that was not followed, anything else failure."""
    if 200 <= status_code < 300:
        return Result.SUCCESS
    if 300 <= status_code < 400:
        return Result.WARNING
    return Result.FAILURE


def do_http_probe(
    request: HttpRequest,
    client: HttpClient,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
) -> ProbeOutcome:
    """
    Send a probe request and reduce the response to a ProbeOutcome.

    Transport errors (timeouts, refused connections, TLS failures) are reported as
    ``Result.FAILURE`` with the error text as output and no error attached. Only a
    redirect loop under the follow-all policy carries its error through.
    """
    headers = dict(request.headers or {})
    if not has_header(headers, "User-Agent"):
        # Set explicitly so the transport's own default never leaks into probes.
        headers["User-Agent"] = user_agent
    host = header_value(headers, "Host")
    request = replace(request, headers=headers, host=host or request.host)

    response = client.request(request)
    if not response.ok:
        error = response.exception if isinstance(response.exception, RedirectLoopError) else None
        logger.info("Probe failed for %s: %s", request.url, response.error_message)
        return ProbeOutcome(Result.FAILURE, response.error_message or "", error)

    if response.truncated:
        logger.info(
            "Non fatal body truncation for %s, status %s, kept %s bytes",
            request.url,
            response.status_code,
            response.meta.get("body_bytes_read"),
        )

    status_code = response.status_code or 0
    result = classify_status(status_code)
    if result is Result.SUCCESS:
        logger.info("Probe succeeded for %s, status %s", request.url, status_code)
        return ProbeOutcome(Result.SUCCESS, response.text)
    if result is Result.WARNING:
        logger.info("Probe terminated redirects for %s, status %s", request.url, status_code)
        return ProbeOutcome(Result.WARNING, response.text)

    logger.info(
        "Probe failed for %s with request headers %s, response body: %s",
        request.url,
        headers,
        response.text,
    )
    return ProbeOutcome(Result.FAILURE, f"HTTP probe failed with statuscode: {status_code}")


__all__ = ["classify_status", "do_http_probe"]
