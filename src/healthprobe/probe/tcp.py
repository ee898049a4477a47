# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""TCP connect probe."""

from __future__ import annotations

import logging
import socket

from ..config import ProbeSettings, load_probe_settings
from ..errors import InvalidPortError, InvalidTargetError
from ..models.result import ProbeOutcome, Result

logger = logging.getLogger(__name__)


class TcpProber:
    """Opens a TCP connection and closes it straight away; connecting is success."""

    def __init__(self, settings: ProbeSettings | None = None):
        self.settings = settings or load_probe_settings()

    def probe(self, host: str, port: int, timeout: float | None = None) -> ProbeOutcome:
        if not host:
            return ProbeOutcome(Result.UNKNOWN, "", InvalidTargetError("tcp probe has no host"))
        if not 0 < port < 65536:
            return ProbeOutcome(Result.UNKNOWN, "", InvalidPortError(port))
        return do_tcp_probe(host, port, self.settings.timeout if timeout is None else timeout)


def do_tcp_probe(host: str, port: int, timeout: float) -> ProbeOutcome:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            pass
    except OSError as exc:
        logger.info("TCP probe failed for %s:%s: %s", host, port, exc)
        return ProbeOutcome(Result.FAILURE, str(exc) or type(exc).__name__)
    logger.info("TCP probe succeeded for %s:%s", host, port)
    return ProbeOutcome(Result.SUCCESS)


__all__ = ["TcpProber", "do_tcp_probe"]
