"""End-to-end tests of dispatch against a local stub server."""

import json
from dataclasses import replace

import pytest
from aiohttp import test_utils, web

from sapi.adapters.driven.http.client import HttpClient
from sapi.core.dispatch import dispatch_request
from sapi.core.errors import TransportError
from sapi.core.run_loop import RunOutcome, run_requests
from sapi.ports.request import RequestSpec
from sapi.ports.response import ResponseRecord

__all__ = []


class Recorder:
    """Stub application that remembers every request it receives."""

    def __init__(self) -> None:
        self.seen: list[tuple[str, str | None, bytes]] = []
        self.app = web.Application()
        self.app.router.add_get("/ping", self.ping)
        self.app.router.add_route("*", "/echo", self.echo)
        self.app.router.add_get("/binary", self.binary)

    async def ping(self, request: web.Request) -> web.Response:
        """Answer pong."""
        return web.Response(text="pong")

    async def echo(self, request: web.Request) -> web.Response:
        """Record method, Content-Type and body."""
        body = await request.read()
        self.seen.append((request.method, request.headers.get("Content-Type"), body))
        return web.Response(text="ok")

    async def binary(self, request: web.Request) -> web.Response:
        """Answer with bytes that are not valid UTF-8."""
        return web.Response(body=b"\xff\xfe\xfa", content_type="text/plain", charset="utf-8")


def make_spec(port: int, endpoint: str, method: str, **extra: object) -> RequestSpec:
    """Create a spec targeting the stub server."""
    return RequestSpec(target="127.0.0.1", port=port, endpoint=endpoint, method=method, **extra)


@pytest.mark.asyncio
async def test_get_ping_yields_pong_record() -> None:
    """A GET against the stub should be recorded with its status and body."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        record = await dispatch_request(make_spec(server.port, "/ping", "GET"), http.request)

    assert record is not None
    assert record.status == 200
    assert record.status_text == "OK"
    assert record.method == "GET"
    assert record.url == f"http://127.0.0.1:{server.port}/ping"
    assert record.response_body == "pong"
    assert record.server_response_time_ms >= 0


@pytest.mark.asyncio
async def test_json_body_reaches_server() -> None:
    """The transmitted JSON body should decode to the data mapping."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        spec = make_spec(
            server.port,
            "/echo",
            "POST",
            headers={"Content-Type": "application/json"},
            data={"a": "1", "b": "2"},
        )
        await dispatch_request(spec, http.request)

    method, content_type, body = stub.seen[0]
    assert method == "POST"
    assert content_type == "application/json"
    assert json.loads(body) == {"a": "1", "b": "2"}


@pytest.mark.asyncio
async def test_plain_text_body_reaches_server_verbatim() -> None:
    """The transmitted text/plain body should be exactly the txt value."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        spec = make_spec(
            server.port,
            "/echo",
            "PUT",
            headers={"Content-Type": "text/plain"},
            data={"txt": "hello"},
        )
        await dispatch_request(spec, http.request)

    assert stub.seen[0][2] == b"hello"


@pytest.mark.asyncio
async def test_form_body_reaches_server_urlencoded() -> None:
    """Form fields should arrive as key=value pairs with the declared Content-Type."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        spec = make_spec(
            server.port,
            "/echo",
            "PATCH",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data={"user": "alice", "role": "admin"},
        )
        await dispatch_request(spec, http.request)

    _, content_type, body = stub.seen[0]
    assert content_type == "application/x-www-form-urlencoded"
    assert body == b"user=alice&role=admin"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "DELETE"])
async def test_data_without_content_type_sends_empty_body(method: str) -> None:
    """Data without a Content-Type should not be transmitted."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        spec = make_spec(server.port, "/echo", method, data={"a": "1"})
        record = await dispatch_request(spec, http.request)

    assert record is not None
    assert stub.seen[0] == (method, None, b"")


@pytest.mark.asyncio
async def test_undecodable_body_is_recorded_empty() -> None:
    """Invalid UTF-8 should be recorded as an empty body."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        record = await dispatch_request(make_spec(server.port, "/binary", "GET"), http.request)

    assert record is not None
    assert record.status == 200
    assert record.response_body == ""


@pytest.mark.asyncio
async def test_batch_counts_not_found_and_skips_unsupported() -> None:
    """404s are records; unsupported verbs are not."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        specs = [
            make_spec(server.port, "/ping", "GET"),
            make_spec(server.port, "/missing", "GET"),
            make_spec(server.port, "/ping", "OPTIONS"),
            make_spec(server.port, "/ping", "HEAD"),
        ]
        outcome = await run_requests(specs, request_fn=http.request)

    assert [r.status for r in outcome.records] == [200, 404, 200]
    assert outcome.records[1].status_text == "Not Found"
    assert outcome.records[2].method == "HEAD"
    assert outcome.records[2].response_body == ""


@pytest.mark.asyncio
async def test_repeated_runs_differ_only_in_timing() -> None:
    """Same document against the same stub should give the same records."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        specs = [
            make_spec(server.port, "/ping", "GET"),
            make_spec(
                server.port,
                "/echo",
                "POST",
                headers={"Content-Type": "text/plain"},
                data={"txt": "x"},
            ),
        ]
        first = await run_requests(specs, request_fn=http.request)
        second = await run_requests(specs, request_fn=http.request)

    def untimed(outcome: RunOutcome) -> list[ResponseRecord]:
        return [replace(r, server_response_time_ms=0) for r in outcome.records]

    assert untimed(first) == untimed(second)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("endpoint", "headers"),
    [
        ("ping", None),  # no leading slash: port becomes "<port>ping"
        ("/ping", {"X-A": "a\nb"}),  # control character in header value
    ],
)
async def test_request_refused_by_transport_ends_run_with_prior_records(
    endpoint: str, headers: dict[str, str] | None
) -> None:
    """Input aiohttp cannot send should stop the run like a connection failure."""
    stub = Recorder()
    async with test_utils.TestServer(stub.app, host="127.0.0.1") as server, HttpClient() as http:
        specs = [
            make_spec(server.port, "/ping", "GET"),
            make_spec(server.port, endpoint, "GET", headers=headers),
            make_spec(server.port, "/ping", "GET"),
        ]
        outcome = await run_requests(specs, request_fn=http.request)

    assert [r.response_body for r in outcome.records] == ["pong"]
    assert isinstance(outcome.transport_error, TransportError)
    assert isinstance(outcome.transport_error.cause, ValueError)


@pytest.mark.asyncio
async def test_refused_connection_raises_transport_error() -> None:
    """Nothing listening on the port should be a transport failure."""
    port = test_utils.unused_port()
    async with HttpClient() as http:
        with pytest.raises(TransportError):
            await dispatch_request(make_spec(port, "/ping", "GET"), http.request)
