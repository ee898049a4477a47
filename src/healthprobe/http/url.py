# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for building probe targets."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit


def join_host_port(host: str, port: int) -> str:
    """Combine host and port into ``host:port``, bracketing IPv6 literals."""
    if ":" in host and not host.startswith("["):
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def format_url(scheme: str, host: str, port: int, path: str) -> str:
    """
    Build the probe URL from its parts.

    The path may carry a query string and fragment, which are preserved. A path that
    cannot be parsed is appended verbatim: it is too late to reject it.
    """
    netloc = join_host_port(host, port)
    try:
        parts = urlsplit(path)
    except ValueError:
        return f"{scheme}://{netloc}{path}"
    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))


def hostname(url: str) -> str:
    """Return the lowercase hostname of a URL, without port or IPv6 brackets."""
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


__all__ = ["format_url", "hostname", "join_host_port"]
