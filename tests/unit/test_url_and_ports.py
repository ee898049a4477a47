# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from healthprobe.errors import InvalidPortError, InvalidTargetError, PortNotFoundError
from healthprobe.http.url import format_url, hostname, join_host_port
from healthprobe.models.workload import Container, ContainerPort, Workload
from healthprobe.probe.ports import extract_port, find_port_by_name


@pytest.mark.parametrize(
    ("scheme", "host", "port", "path", "expected"),
    [
        ("http", "localhost", 93, "", "http://localhost:93"),
        ("https", "localhost", 93, "/path", "https://localhost:93/path"),
        ("http", "localhost", 93, "?foo", "http://localhost:93?foo"),
        ("https", "localhost", 93, "/path?bar", "https://localhost:93/path?bar"),
        ("http", "::1", 8080, "/healthz", "http://[::1]:8080/healthz"),
    ],
)
def test_format_url(scheme, host, port, path, expected):
    assert format_url(scheme, host, port, path) == expected


def test_format_url_keeps_unparseable_path_verbatim():
    assert format_url("http", "localhost", 80, "//[broken") == "http://localhost:80//[broken"


def test_join_host_port_brackets_ipv6_once():
    assert join_host_port("10.0.0.1", 80) == "10.0.0.1:80"
    assert join_host_port("fe80::1", 80) == "[fe80::1]:80"
    assert join_host_port("[fe80::1]", 80) == "[fe80::1]:80"


def test_hostname_ignores_port_and_case():
    assert hostname("http://Example.COM:8080/x") == "example.com"
    assert hostname("http://[::1]:80/") == "::1"


@pytest.fixture
def workload():
    return Workload(
        name="web",
        namespace="default",
        uid="uid-1",
        pod_ip="10.1.2.3",
        containers=(
            Container(name="foo", ports=(ContainerPort(8080, "foo-port"), ContainerPort(8081, "foo-port"))),
            Container(name="bar", ports=(ContainerPort(9090, "bar-port"),)),
            Container(name="fizz", ports=(ContainerPort(65538, "fizz-port"),)),
        ),
    )


def test_find_port_by_name_returns_first_match(workload):
    assert find_port_by_name(workload.container("foo"), "foo-port") == 8080
    with pytest.raises(PortNotFoundError, match="port nope not found"):
        find_port_by_name(workload.container("foo"), "nope")


def test_extract_port_numeric_bypasses_container_lookup(workload):
    assert extract_port(1234, workload, "foo") == 1234


def test_extract_port_by_name(workload):
    assert extract_port("foo-port", workload, "foo") == 8080


def test_extract_port_falls_back_to_numeric_string(workload):
    assert extract_port("8443", workload, "foo") == 8443


def test_extract_port_unknown_name(workload):
    with pytest.raises(PortNotFoundError):
        extract_port("metrics", workload, "foo")


def test_extract_port_found_by_name_but_out_of_range(workload):
    with pytest.raises(InvalidPortError, match="invalid port number: 65538"):
        extract_port("fizz-port", workload, "fizz")


@pytest.mark.parametrize("port", [0, -1, 65536, "0", "70000"])
def test_extract_port_rejects_out_of_range(workload, port):
    with pytest.raises(InvalidPortError):
        extract_port(port, workload, "foo")


@pytest.mark.parametrize("port", [8080, "foo-port"])
def test_extract_port_requires_workload(port):
    with pytest.raises(InvalidTargetError, match="failed to extract port. invalid pod"):
        extract_port(port, None, "foo")


def test_extract_port_requires_known_container(workload):
    with pytest.raises(InvalidTargetError, match="failed to extract port. container not found"):
        extract_port(8080, workload, "buzz")
