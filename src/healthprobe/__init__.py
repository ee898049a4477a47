# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
healthprobe package entrypoint.

Runs one declarative health probe (exec, HTTP GET, HTTP POST or TCP socket) against a
workload and reduces the outcome to a Result. Scheduling, retries and aggregation are
left to the caller. HTTP behavior sits behind an injectable client interface.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import (
    ConfigurationError,
    InvalidPortError,
    InvalidTargetError,
    MissingHandlerError,
    PortNotFoundError,
    PortResolutionError,
    ProbeError,
    RedirectLoopError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import (
    Container,
    ContainerPort,
    ExecAction,
    HTTPGetAction,
    HTTPHeader,
    HTTPPostAction,
    ProbeHandler,
    ProbeOutcome,
    Result,
    TCPSocketAction,
    Workload,
    handler_from_mapping,
)
from .runtime import Prober
from .version import __version__

__all__ = [
    "ConfigurationError",
    "Container",
    "ContainerPort",
    "ExecAction",
    "HTTPGetAction",
    "HTTPHeader",
    "HTTPPostAction",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidPortError",
    "InvalidTargetError",
    "MissingHandlerError",
    "PortNotFoundError",
    "PortResolutionError",
    "ProbeError",
    "ProbeHandler",
    "ProbeOutcome",
    "ProbeSettings",
    "Prober",
    "RedirectLoopError",
    "Result",
    "TCPSocketAction",
    "Workload",
    "create_default_http_client",
    "handler_from_mapping",
    "load_probe_settings",
    "setup_logging",
    "__version__",
]
