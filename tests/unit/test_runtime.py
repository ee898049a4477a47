# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

import pytest

from healthprobe.config import ProbeSettings
from healthprobe.errors import (
    ConfigurationError,
    InvalidPortError,
    InvalidTargetError,
    MissingHandlerError,
    PortNotFoundError,
)
from healthprobe.http.adapters import StubHttpClient
from healthprobe.http.models import HttpResponse
from healthprobe.models.handler import (
    ExecAction,
    HTTPGetAction,
    HTTPHeader,
    HTTPPostAction,
    TCPSocketAction,
    handler_from_mapping,
)
from healthprobe.models.result import ProbeOutcome, Result
from healthprobe.models.workload import Container, ContainerPort, Workload
from healthprobe.runtime import Prober

POD = Workload(
    name="web",
    namespace="default",
    uid="uid-1",
    pod_ip="127.0.0.1",
    containers=(
        Container(name="foo", ports=(ContainerPort(8920, "foo-port"),)),
        Container(name="fizz", ports=(ContainerPort(65538, "fizz-port"),)),
    ),
)


class RecordingExec:
    def __init__(self):
        self.calls = []

    def probe(self, workload, container_name, command, timeout=None):
        self.calls.append((workload, container_name, tuple(command), timeout))
        return ProbeOutcome(Result.SUCCESS, "exec ok")


class RecordingTcp:
    def __init__(self):
        self.calls = []

    def probe(self, host, port, timeout=None):
        self.calls.append((host, port, timeout))
        return ProbeOutcome(Result.SUCCESS)


@pytest.fixture
def stub():
    return StubHttpClient()


@pytest.fixture
def prober(stub):
    return Prober(
        ProbeSettings(user_agent="UA/1.0"),
        http_client=stub,
        exec_prober=RecordingExec(),
        tcp_prober=RecordingTcp(),
    )


def test_http_get_defaults_host_to_workload_address(prober, stub):
    stub.add("http://127.0.0.1:8920/success", HttpResponse(ok=True, status_code=200, text="ok"))
    handler = HTTPGetAction(port="foo-port", path="/success", http_headers=(HTTPHeader("X-Probe", "1"),))
    outcome = prober.run_probe(handler, POD, "foo", timeout=30)
    assert outcome.result is Result.SUCCESS
    assert outcome.output == "ok"
    sent = stub.requests[0]
    assert sent.method == "GET"
    assert sent.timeout == 30
    assert sent.headers["X-Probe"] == "1"
    assert sent.headers["User-Agent"] == "UA/1.0"


def test_http_get_explicit_host_and_scheme(prober, stub):
    stub.add("https://10.0.0.9:8443/ready?full=1", HttpResponse(ok=True, status_code=400))
    handler = HTTPGetAction(port=8443, path="/ready?full=1", host="10.0.0.9", scheme="HTTPS")
    outcome = prober.run_probe(handler, POD, "foo")
    assert outcome.result is Result.FAILURE
    assert outcome.output == "HTTP probe failed with statuscode: 400"
    assert outcome.error is None


def test_http_post_passes_payload(prober, stub):
    stub.add("http://127.0.0.1:8920/post", HttpResponse(ok=True, status_code=201))
    handler = HTTPPostAction(port=8920, path="/post", body='{"foo":"bar"}')
    outcome = prober.run_probe(handler, POD, "foo")
    assert outcome.result is Result.SUCCESS
    sent = stub.requests[0]
    assert sent.method == "POST"
    assert sent.body == '{"foo":"bar"}'
    assert sent.headers["Content-Type"] == "application/json"


def test_tcp_defaults_host_and_resolves_named_port(prober):
    outcome = prober.run_probe(TCPSocketAction(port="foo-port"), POD, "foo", timeout=3)
    assert outcome.result is Result.SUCCESS
    assert prober.tcp.calls == [("127.0.0.1", 8920, 3)]


def test_exec_receives_command_and_target(prober):
    outcome = prober.run_probe(ExecAction(command=("cat", "/tmp/healthy")), POD, "foo", timeout=4)
    assert outcome.result is Result.SUCCESS
    assert prober.exec.calls == [(POD, "foo", ("cat", "/tmp/healthy"), 4)]


def test_timeout_defaults_to_settings(prober):
    prober.run_probe(TCPSocketAction(port=8920, host="127.0.0.1"), POD, "foo")
    assert prober.tcp.calls[0][2] == 1.0


def test_exec_wins_over_http_get(prober, stub):
    handler = handler_from_mapping(
        {
            "exec": {"command": ["true"]},
            "httpGet": {"port": 8920, "path": "/success"},
        }
    )
    outcome = prober.run_probe(handler, POD, "foo")
    assert outcome.output == "exec ok"
    assert len(prober.exec.calls) == 1
    assert stub.requests == []


def test_missing_handler_names_workload_and_container(prober):
    outcome = prober.run_probe(None, POD, "foo")
    assert outcome.result is Result.UNKNOWN
    assert isinstance(outcome.error, MissingHandlerError)
    assert str(outcome.error) == "missing probe handler for web_default(uid-1):foo"

    outcome = prober.run_probe(handler_from_mapping({}), None, "foo")
    assert str(outcome.error) == "missing probe handler for <nil>:foo"


@pytest.mark.parametrize(
    "handler",
    [
        HTTPGetAction(port=8920, host="127.0.0.1"),
        HTTPPostAction(port="foo-port", host="127.0.0.1"),
        TCPSocketAction(port="foo-port", host="127.0.0.1"),
    ],
)
def test_missing_workload_is_unknown(prober, handler):
    outcome = prober.run_probe(handler, None, "foo")
    assert outcome.result is Result.UNKNOWN
    assert isinstance(outcome.error, InvalidTargetError)
    assert str(outcome.error) == "failed to extract port. invalid pod"


def test_unknown_container_is_unknown(prober):
    outcome = prober.run_probe(HTTPGetAction(port="bar-port"), POD, "bar")
    assert outcome.result is Result.UNKNOWN
    assert str(outcome.error) == "failed to extract port. container not found"


def test_port_errors_are_unknown(prober):
    outcome = prober.run_probe(TCPSocketAction(port="fizz-port"), POD, "fizz")
    assert outcome.result is Result.UNKNOWN
    assert isinstance(outcome.error, InvalidPortError)
    assert str(outcome.error) == "invalid port number: 65538"

    outcome = prober.run_probe(TCPSocketAction(port="metrics"), POD, "foo")
    assert isinstance(outcome.error, PortNotFoundError)


def test_handler_from_mapping_parses_variants():
    get = handler_from_mapping(
        {
            "httpGet": {
                "port": "http",
                "path": "/healthz",
                "scheme": "HTTPS",
                "httpHeaders": [{"name": "Host", "value": "example.org"}],
            }
        }
    )
    assert get == HTTPGetAction(
        port="http",
        path="/healthz",
        scheme="HTTPS",
        http_headers=(HTTPHeader("Host", "example.org"),),
    )

    post = handler_from_mapping({"httpPost": {"port": 80, "form": {"name": "x", "tags": ["a", "b"]}}})
    assert isinstance(post, HTTPPostAction)
    assert post.form == {"name": ["x"], "tags": ["a", "b"]}

    tcp = handler_from_mapping({"tcpSocket": {"port": 5432, "host": "db"}})
    assert tcp == TCPSocketAction(port=5432, host="db")

    assert handler_from_mapping({"exec": None, "tcpSocket": {}}) is None
    with pytest.raises(ConfigurationError):
        handler_from_mapping({"tcpSocket": {"port": 1.5}})


def test_workload_from_pod_mapping():
    workload = Workload.from_mapping(
        {
            "metadata": {"name": "web", "namespace": "prod", "uid": "abc"},
            "spec": {"containers": [{"name": "app", "ports": [{"name": "http", "containerPort": 8080}]}]},
            "status": {"podIP": "10.0.0.5"},
        }
    )
    assert workload.describe() == "web_prod(abc)"
    assert workload.pod_ip == "10.0.0.5"
    assert workload.container("app").ports == (ContainerPort(8080, "http"),)
    assert workload.container("db") is None


def test_prober_context_manager_closes_client(stub):
    with Prober(ProbeSettings(), http_client=stub) as prober:
        assert prober.http_get.client is stub
        assert prober.http_post.client is stub
    assert stub.closed is True


@pytest.mark.parametrize(
    "document",
    [
        {"exec": ["true"]},
        {"exec": {"command": "cat /tmp/healthy"}},
        {"httpGet": {"path": "/healthz"}},
        {"httpGet": {"port": None}},
        {"httpPost": {"port": 80, "form": ["a"]}},
        {"httpGet": {"port": 80, "httpHeaders": {"Host": "x"}}},
        {"tcpSocket": {"port": True}},
        ["exec"],
    ],
)
def test_handler_from_mapping_rejects_malformed_documents(document):
    with pytest.raises(ConfigurationError):
        handler_from_mapping(document)


@pytest.mark.parametrize("document", [["web"], {"spec": {"containers": [{"ports": [{"containerPort": "x"}]}]}}])
def test_workload_from_mapping_rejects_malformed_documents(document):
    with pytest.raises(ConfigurationError):
        Workload.from_mapping(document)


@pytest.mark.parametrize(
    "handler",
    [
        HTTPGetAction(port=8920),
        HTTPPostAction(port=8920),
        TCPSocketAction(port=8920),
    ],
)
def test_workload_without_address_is_unknown(prober, stub, handler):
    workload = Workload(name="web", namespace="default", uid="uid-1", containers=(Container(name="foo"),))
    outcome = prober.run_probe(handler, workload, "foo")
    assert outcome.result is Result.UNKNOWN
    assert isinstance(outcome.error, InvalidTargetError)
    assert str(outcome.error) == "no host for probe: web_default(uid-1) has no address"
    assert stub.requests == []
    assert prober.tcp.calls == []


def test_prober_close_logs_client_errors(caplog):
    class BrokenClose(StubHttpClient):
        def close(self):
            raise RuntimeError("already closed")

    prober = Prober(ProbeSettings(), http_client=BrokenClose())
    with caplog.at_level(logging.DEBUG, logger="healthprobe.runtime"):
        prober.close()
    assert "already closed" in caplog.text
