# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for healthprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"healthprobe/{__version__}"

# Upper bound on how much of a probe response body is kept.
DEFAULT_MAX_BODY_BYTES = 10 * 1024


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ProbeSettings:
    """Prober defaults shared by the HTTP and TCP probes."""

    timeout: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    follow_non_local_redirects: bool = False
    verify_ssl: bool = False

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("HEALTHPROBE_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        timeout = _float_env("HEALTHPROBE_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("HEALTHPROBE_USER_AGENT", cls.user_agent),
            max_body_bytes=max_body_bytes,
            follow_non_local_redirects=_bool_env(
                "HEALTHPROBE_FOLLOW_NON_LOCAL_REDIRECTS", cls.follow_non_local_redirects
            ),
            verify_ssl=_bool_env("HEALTHPROBE_VERIFY_SSL", cls.verify_ssl),
        )


def load_probe_settings() -> ProbeSettings:
    """Load prober settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
