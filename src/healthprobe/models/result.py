# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe result states and the per-invocation outcome."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Result(str, Enum):
    UNKNOWN = "unknown"
    SUCCESS = "success"
    FAILURE = "failure"
    WARNING = "warning"


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Outcome of a single probe attempt.

    ``output`` carries a best-effort diagnostic even on success (usually the response
    body). ``error`` is only set when the probe could not run as configured.
    """

    result: Result
    output: str = ""
    error: Exception | None = None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.result, self.output, self.error))

    @property
    def ok(self) -> bool:
        return self.result is Result.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result.value,
            "output": self.output,
            "error": str(self.error) if self.error is not None else None,
            "error_type": type(self.error).__name__ if self.error is not None else None,
        }
