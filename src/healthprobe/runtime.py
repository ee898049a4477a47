# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Prober facade: picks the handler's probe and runs it once."""

from __future__ import annotations

import logging
from .config import ProbeSettings, load_probe_settings
from .errors import InvalidTargetError, MissingHandlerError, ProbeError
from .http.client import HttpClient
from .http.headers import build_headers
from .http.url import format_url
from .models.handler import ExecAction, HTTPGetAction, HTTPPostAction, ProbeHandler, TCPSocketAction
from .models.result import ProbeOutcome, Result
from .models.workload import Workload, describe_workload
from .probe.exec import ExecProber, SubprocessExecProber
from .probe.http_get import HttpGetProber, build_probe_client
from .probe.http_post import HttpPostProber
from .probe.ports import extract_port
from .probe.tcp import TcpProber

logger = logging.getLogger(__name__)


class Prober:
    """
    Runs exec, HTTP GET, HTTP POST and TCP probes described by a handler.

    One HTTP client (and its redirect policy) is built at construction and shared by the
    GET and POST probes. Nothing else is kept between calls, so a Prober can be used from
    several threads at once.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        exec_prober: ExecProber | None = None,
        tcp_prober: TcpProber | None = None,
        follow_non_local_redirects: bool | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or build_probe_client(self.settings, follow_non_local_redirects)
        self.http_get = HttpGetProber(self.http_client, settings=self.settings)
        self.http_post = HttpPostProber(self.http_client, settings=self.settings)
        self.tcp = tcp_prober or TcpProber(self.settings)
        self.exec = exec_prober or SubprocessExecProber()

    def run_probe(
        self,
        handler: ProbeHandler | None,
        workload: Workload | None,
        container_name: str,
        timeout: float | None = None,
    ) -> ProbeOutcome:
        """
        Run the probe once.

        Configuration problems (no handler, missing workload or container, bad port) come
        back as ``Result.UNKNOWN`` with the error attached; they are never raised.
        """
        effective_timeout = self.settings.timeout if timeout is None else timeout
        try:
            return self._dispatch(handler, workload, container_name, effective_timeout)
        except ProbeError as exc:
            return ProbeOutcome(Result.UNKNOWN, "", exc)

    def _dispatch(
        self,
        handler: ProbeHandler | None,
        workload: Workload | None,
        container_name: str,
        timeout: float,
    ) -> ProbeOutcome:
        if isinstance(handler, ExecAction):
            logger.debug(
                "Exec-Probe Pod: %s, Container: %s, Command: %s",
                describe_workload(workload),
                container_name,
                list(handler.command),
            )
            return self.exec.probe(workload, container_name, handler.command, timeout)

        if isinstance(handler, (HTTPGetAction, HTTPPostAction)):
            port = extract_port(handler.port, workload, container_name)
            host = _target_host(handler.host, workload)
            scheme = (handler.scheme or "http").lower()
            logger.debug("HTTP-Probe Host: %s://%s, Port: %s, Path: %s", scheme, host, port, handler.path)
            url = format_url(scheme, host, port, handler.path)
            headers = build_headers(handler.http_headers)
            logger.debug("HTTP-Probe Headers: %s", headers)
            if isinstance(handler, HTTPGetAction):
                return self.http_get.probe(url, headers, timeout)
            return self.http_post.probe(url, headers, form=handler.form, body=handler.body, timeout=timeout)

        if isinstance(handler, TCPSocketAction):
            port = extract_port(handler.port, workload, container_name)
            host = _target_host(handler.host, workload)
            logger.debug("TCP-Probe Host: %s, Port: %s, Timeout: %s", host, port, timeout)
            return self.tcp.probe(host, port, timeout)

        logger.warning("Failed to find probe handler for container: %s", container_name)
        raise MissingHandlerError(f"missing probe handler for {describe_workload(workload)}:{container_name}")

    def close(self) -> None:
        try:
            self.http_client.close()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Closing HTTP client failed: %s (%s)", exc, type(exc).__name__)

    def __enter__(self) -> "Prober":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


def _target_host(host: str, workload: Workload | None) -> str:
    if host:
        return host
    if workload is None or not workload.pod_ip:
        raise InvalidTargetError(f"no host for probe: {describe_workload(workload)} has no address")
    return workload.pod_ip


__all__ = ["Prober"]
