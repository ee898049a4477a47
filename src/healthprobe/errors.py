# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy for probe configuration and redirect handling.

Network failures (refused connections, timeouts, TLS errors, non-2xx answers) are
deliberately absent: probes fold them into ``Result.FAILURE`` instead of raising.
"""


class ProbeError(Exception):
    """Base class for errors reported alongside a probe outcome."""


class ConfigurationError(ProbeError):
    """The probe could not be attempted because its inputs are incomplete."""


class MissingHandlerError(ConfigurationError):
    """No handler variant was supplied."""


class InvalidTargetError(ConfigurationError):
    """The workload record (or the named container) needed for resolution is absent."""


class PortResolutionError(ProbeError):
    """A port reference could not be turned into a usable port number."""


class PortNotFoundError(PortResolutionError):
    """A named port matched no declared port and is not a decimal integer."""


class InvalidPortError(PortResolutionError):
    """A resolved port is outside ``0 < port < 65536``."""

    def __init__(self, port: int):
        super().__init__(f"invalid port number: {port}")
        self.port = port


class RedirectLoopError(ProbeError):
    """A redirect chain exceeded the hop cap."""


__all__ = [
    "ConfigurationError",
    "InvalidPortError",
    "InvalidTargetError",
    "MissingHandlerError",
    "PortNotFoundError",
    "PortResolutionError",
    "ProbeError",
    "RedirectLoopError",
]
