# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for healthprobe."""

from .handler import (
    ExecAction,
    HTTPGetAction,
    HTTPHeader,
    HTTPPostAction,
    PortRef,
    ProbeHandler,
    TCPSocketAction,
    handler_from_mapping,
)
from .result import ProbeOutcome, Result
from .workload import Container, ContainerPort, Workload

__all__ = [
    "Container",
    "ContainerPort",
    "ExecAction",
    "HTTPGetAction",
    "HTTPHeader",
    "HTTPPostAction",
    "PortRef",
    "ProbeHandler",
    "ProbeOutcome",
    "Result",
    "TCPSocketAction",
    "Workload",
    "handler_from_mapping",
]
