# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Port resolution against a workload's declared container ports."""

from __future__ import annotations

import re

from ..errors import InvalidPortError, InvalidTargetError, PortNotFoundError
from ..models.handler import PortRef
from ..models.workload import Container, Workload

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def find_port_by_name(container: Container, port_name: str) -> int:
    """Return the first declared port whose name matches exactly."""
    for port in container.ports:
        if port.name == port_name:
            return port.container_port
    raise PortNotFoundError(f"port {port_name} not found")


def extract_port(port: PortRef, workload: Workload | None, container_name: str) -> int:
    """
    Resolve a numeric or named port reference to a port number.

    Numeric references skip the container lookup. Named references fall back to the
    name parsed as a decimal integer. The range check runs after the lookup on every
    path, so a port found by name can still be rejected as out of range.
    """
    if workload is None:
        raise InvalidTargetError("failed to extract port. invalid pod")
    container = workload.container(container_name)
    if container is None:
        raise InvalidTargetError("failed to extract port. container not found")

    if isinstance(port, bool):
        raise PortNotFoundError(f"port reference has no kind: {port!r}")
    if isinstance(port, int):
        value = port
    elif isinstance(port, str):
        try:
            value = find_port_by_name(container, port)
        except PortNotFoundError:
            if not _DECIMAL_RE.fullmatch(port):
                raise
            value = int(port)
    else:
        raise PortNotFoundError(f"port reference has no kind: {port!r}")

    if 0 < value < 65536:
        return value
    raise InvalidPortError(value)


__all__ = ["extract_port", "find_port_by_name"]
