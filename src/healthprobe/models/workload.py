# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Workload (pod) records used to resolve named ports and default hosts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import ConfigurationError


@dataclass(frozen=True)
class ContainerPort:
    container_port: int
    name: str = ""


@dataclass(frozen=True)
class Container:
    name: str
    ports: tuple[ContainerPort, ...] = ()


@dataclass(frozen=True)
class Workload:
    name: str = ""
    namespace: str = ""
    uid: str = ""
    containers: tuple[Container, ...] = ()
    pod_ip: str = ""

    def container(self, name: str) -> Container | None:
        for container in self.containers:
            if container.name == name:
                return container
        return None

    def describe(self) -> str:
        # Underscore is not valid in a pod name, so it cannot be mistaken for part of one.
        return f"{self.name}_{self.namespace}({self.uid})"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Workload:
        """Build a Workload from a Kubernetes-style pod mapping."""
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"pod must be an object, got {type(data).__name__}")
        try:
            return cls._from_pod(data)
        except (AttributeError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"malformed pod document: {exc}") from exc

    @classmethod
    def _from_pod(cls, data: Mapping[str, Any]) -> Workload:
        metadata = data.get("metadata") or {}
        spec = data.get("spec") or {}
        status = data.get("status") or {}
        containers = []
        for raw in spec.get("containers") or ():
            ports = tuple(
                ContainerPort(container_port=int(port.get("containerPort", 0)), name=port.get("name") or "")
                for port in raw.get("ports") or ()
            )
            containers.append(Container(name=raw.get("name") or "", ports=ports))
        return cls(
            name=metadata.get("name") or "",
            namespace=metadata.get("namespace") or "",
            uid=metadata.get("uid") or "",
            containers=tuple(containers),
            pod_ip=status.get("podIP") or "",
        )


def describe_workload(workload: Workload | None) -> str:
    if workload is None:
        return "<nil>"
    return workload.describe()
