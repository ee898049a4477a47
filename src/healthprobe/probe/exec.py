# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Exec probe boundary.

The dispatcher only hands the command and target to an ``ExecProber``; running it
inside the workload (a container exec, an SSH session, ...) is the implementation's
business. ``SubprocessExecProber`` runs the command on the local host.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import Protocol

from ..errors import ConfigurationError
from ..models.result import ProbeOutcome, Result
from ..models.workload import Workload

logger = logging.getLogger(__name__)

MAX_OUTPUT_CHARS = 10 * 1024


class ExecProber(Protocol):
    def probe(
        self,
        workload: Workload | None,
        container_name: str,
        command: Sequence[str],
        timeout: float | None = None,
    ) -> ProbeOutcome: ...


class SubprocessExecProber:
    """Runs the command locally; exit status 0 is success."""

    def probe(
        self,
        workload: Workload | None,  # noqa: ARG002
        container_name: str,  # noqa: ARG002
        command: Sequence[str],
        timeout: float | None = None,
    ) -> ProbeOutcome:
        if not command:
            return ProbeOutcome(Result.UNKNOWN, "", ConfigurationError("exec probe has no command"))
        try:
            completed = subprocess.run(
                list(command),
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return ProbeOutcome(Result.FAILURE, f"command timed out after {timeout}s")
        except OSError as exc:
            return ProbeOutcome(Result.UNKNOWN, "", exc)

        output = ((completed.stdout or "") + (completed.stderr or ""))[:MAX_OUTPUT_CHARS]
        if completed.returncode == 0:
            return ProbeOutcome(Result.SUCCESS, output)
        logger.info("Exec probe %s exited with %s", list(command), completed.returncode)
        return ProbeOutcome(Result.FAILURE, output)


__all__ = ["ExecProber", "SubprocessExecProber"]
