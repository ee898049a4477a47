# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe implementations and the helpers they share."""

from .exec import ExecProber, SubprocessExecProber
from .http_get import HttpGetProber, do_http_get_probe
from .http_post import HttpPostProber, do_http_post_probe
from .http_probe import classify_status, do_http_probe
from .ports import extract_port, find_port_by_name
from .tcp import TcpProber, do_tcp_probe

__all__ = [
    "ExecProber",
    "HttpGetProber",
    "HttpPostProber",
    "SubprocessExecProber",
    "TcpProber",
    "classify_status",
    "do_http_get_probe",
    "do_http_post_probe",
    "do_http_probe",
    "do_tcp_probe",
    "extract_port",
    "find_port_by_name",
]
