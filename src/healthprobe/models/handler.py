# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Declarative probe handlers.

A handler is exactly one of four action types. The JSON form mirrors the Kubernetes
``Handler`` shape (``exec``/``httpGet``/``httpPost``/``tcpSocket``); when several keys
are populated the first one in that order wins.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from ..errors import ConfigurationError

PortRef = Union[int, str]
FormValues = Mapping[str, Sequence[str]]


@dataclass(frozen=True)
class HTTPHeader:
    name: str
    value: str


@dataclass(frozen=True)
class ExecAction:
    command: tuple[str, ...] = ()


@dataclass(frozen=True)
class HTTPGetAction:
    port: PortRef
    path: str = ""
    host: str = ""
    scheme: str = "HTTP"
    http_headers: tuple[HTTPHeader, ...] = ()


@dataclass(frozen=True)
class HTTPPostAction:
    port: PortRef
    path: str = ""
    host: str = ""
    scheme: str = "HTTP"
    http_headers: tuple[HTTPHeader, ...] = ()
    body: str = ""
    form: FormValues | None = field(default=None, hash=False)


@dataclass(frozen=True)
class TCPSocketAction:
    port: PortRef
    host: str = ""


ProbeHandler = Union[ExecAction, HTTPGetAction, HTTPPostAction, TCPSocketAction]


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    raw = data.get(key)
    if not raw:
        return None
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{key} must be an object, got {type(raw).__name__}")
    return raw


def _port_ref(raw: Any, key: str) -> PortRef:
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ConfigurationError(f"{key}.port must be an integer or a port name, got {raw!r}")
    return raw


def _string(section: Mapping[str, Any], key: str, default: str = "") -> str:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f"{key} must be a string, got {type(value).__name__}")
    return value or default


def _headers(raw: Any) -> tuple[HTTPHeader, ...]:
    if not raw:
        return ()
    if not isinstance(raw, (list, tuple)) or not all(isinstance(item, Mapping) for item in raw):
        raise ConfigurationError("httpHeaders must be a list of {name, value} objects")
    return tuple(HTTPHeader(name=str(item.get("name", "")), value=str(item.get("value", ""))) for item in raw)


def _form(raw: Any) -> dict[str, list[str]] | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"form must be an object, got {type(raw).__name__}")
    form: dict[str, list[str]] = {}
    for key, value in raw.items():
        if isinstance(value, (list, tuple)):
            form[str(key)] = [str(v) for v in value]
        else:
            form[str(key)] = [str(value)]
    return form


def handler_from_mapping(data: Mapping[str, Any] | None) -> ProbeHandler | None:
    """
    Parse a JSON-style handler mapping, returning None when no variant is set.

    A document of the wrong shape raises ``ConfigurationError``.
    """
    if not data:
        return None
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"handler must be an object, got {type(data).__name__}")

    exec_data = _section(data, "exec")
    if exec_data:
        command = exec_data.get("command") or ()
        if isinstance(command, str) or not isinstance(command, (list, tuple)):
            raise ConfigurationError("exec.command must be a list of strings")
        return ExecAction(command=tuple(str(part) for part in command))

    for key, action in (("httpGet", HTTPGetAction), ("httpPost", HTTPPostAction)):
        http_data = _section(data, key)
        if not http_data:
            continue
        fields: dict[str, Any] = {
            "port": _port_ref(http_data.get("port"), key),
            "path": _string(http_data, "path"),
            "host": _string(http_data, "host"),
            "scheme": _string(http_data, "scheme", "HTTP"),
            "http_headers": _headers(http_data.get("httpHeaders")),
        }
        if action is HTTPPostAction:
            fields["body"] = _string(http_data, "body")
            fields["form"] = _form(http_data.get("form"))
        return action(**fields)

    tcp_data = _section(data, "tcpSocket")
    if tcp_data:
        return TCPSocketAction(
            port=_port_ref(tcp_data.get("port"), "tcpSocket"),
            host=_string(tcp_data, "host"),
        )

    return None
