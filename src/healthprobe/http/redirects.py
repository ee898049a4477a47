# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Redirect policies consulted by the HTTP client on every redirect response.

A policy sees the URL the redirect points to and the URLs already requested in the
chain (``via[0]`` is the original request). It returns True to follow, False to stop
and hand the 3xx response back to the caller, and raises ``RedirectLoopError`` once the
chain is too long. Only the unrestricted policy reports that loop to the probe caller;
for the local policy it is an ordinary failed exchange.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..errors import RedirectLoopError
from .url import hostname

MAX_REDIRECTS = 10


class RedirectPolicy(Protocol):
    reports_loops: bool

    def check(self, next_url: str, via: Sequence[str]) -> bool: ...


def _check_chain_length(via: Sequence[str], max_redirects: int) -> None:
    if len(via) >= max_redirects:
        raise RedirectLoopError(f"stopped after {max_redirects} redirects")


class FollowAllRedirects:
    """Follow every redirect regardless of the target host."""

    reports_loops = True

    def __init__(self, max_redirects: int = MAX_REDIRECTS):
        self.max_redirects = max_redirects

    def check(self, next_url: str, via: Sequence[str]) -> bool:  # noqa: ARG002
        _check_chain_length(via, self.max_redirects)
        return True


class FollowLocalRedirects:
    """Follow redirects only while they stay on the original hostname (any port)."""

    reports_loops = False

    def __init__(self, max_redirects: int = MAX_REDIRECTS):
        self.max_redirects = max_redirects

    def check(self, next_url: str, via: Sequence[str]) -> bool:
        if via and hostname(next_url) != hostname(via[0]):
            return False
        _check_chain_length(via, self.max_redirects)
        return True


def build_redirect_policy(follow_non_local_redirects: bool) -> RedirectPolicy:
    if follow_non_local_redirects:
        return FollowAllRedirects()
    return FollowLocalRedirects()


__all__ = [
    "MAX_REDIRECTS",
    "FollowAllRedirects",
    "FollowLocalRedirects",
    "RedirectPolicy",
    "build_redirect_policy",
]
