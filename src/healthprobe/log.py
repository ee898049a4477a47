# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the healthprobe CLI."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "HEALTHPROBE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name (or ``$HEALTHPROBE_LOG_LEVEL``) to a logging level; unknown names give WARNING."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> int:
    resolved = resolve_log_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("healthprobe").setLevel(resolved)
    # httpx logs every request line at INFO.
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))
    return resolved


__all__ = ["resolve_log_level", "setup_logging"]
