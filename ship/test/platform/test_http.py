"""Tests for ship.platform.http - HTTP client abstraction."""

from __future__ import annotations

import socket
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from ship.core.result import Err, Ok
from ship.platform.http import (
    HttpClient,
    HttpError,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)


class TestHttpError:
    def test_str(self) -> None:
        error = HttpError(url="http://localhost:8080/x", message="Connection refused")
        assert str(error) == "Connection refused (http://localhost:8080/x)"

    def test_is_frozen(self) -> None:
        error = HttpError(url="https://example.com", message="Timeout")
        with pytest.raises(AttributeError):
            error.message = "other"  # type: ignore[misc]


class TestHttpResponse:
    def test_ok_range(self) -> None:
        assert HttpResponse(url="u", status=200, text="").ok
        assert HttpResponse(url="u", status=201, text="").ok
        assert not HttpResponse(url="u", status=404, text="").ok

    def test_json(self) -> None:
        response = HttpResponse(url="u", status=200, text='{"status": "live"}')
        assert response.json() == {"status": "live"}

    def test_json_invalid_returns_none(self) -> None:
        assert HttpResponse(url="u", status=200, text="<html>").json() is None


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_real_client_implements_protocol(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_scripted_response(self) -> None:
        client = MockHttpClient()
        client.respond("GET", "http://localhost:8080/ping", 200, "pong")

        result = client.request("GET", "http://localhost:8080/ping")

        assert isinstance(result, Ok)
        assert result.value.text == "pong"

    def test_unscripted_url_is_transport_error(self) -> None:
        result = MockHttpClient().request("GET", "http://nowhere")
        assert isinstance(result, Err)

    def test_queue_consumed_then_last_repeats(self) -> None:
        client = MockHttpClient()
        client.respond("GET", "u", 200, "a")
        client.respond("GET", "u", 200, "b")

        texts = [client.request("GET", "u").unwrap().text for _ in range(3)]

        assert texts == ["a", "b", "b"]

    def test_method_is_part_of_the_key(self) -> None:
        client = MockHttpClient()
        client.respond("POST", "u", 201, "created")

        assert isinstance(client.request("GET", "u"), Err)
        assert isinstance(client.request("POST", "u"), Ok)

    def test_scripted_failure(self) -> None:
        client = MockHttpClient()
        client.fail("GET", "u", "Connection refused")

        result = client.request("GET", "u")

        assert isinstance(result, Err)
        assert result.error.message == "Connection refused"

    def test_records_calls(self) -> None:
        client = MockHttpClient()
        client.respond("PUT", "u", 200)

        client.request("PUT", "u", headers={"X": "1"}, body="payload")

        assert len(client.calls) == 1
        call = client.calls[0]
        assert (call.method, call.url, call.headers, call.body) == ("PUT", "u", {"X": "1"}, "payload")


class TestRealHttpClient:
    def test_malformed_url_is_transport_error(self) -> None:
        result = RealHttpClient(timeout=1.0).request("GET", "not a url")

        assert isinstance(result, Err)
        assert result.error.url == "not a url"

    def test_error_status_is_a_settled_response(self, not_found_server: str) -> None:
        result = RealHttpClient(timeout=5.0).request("GET", f"{not_found_server}/missing")

        assert isinstance(result, Ok)
        assert result.value.status == 404
        assert result.value.text == "no route /missing"
        assert not result.value.ok

    def test_non_http_peer_is_transport_error(self, ssh_banner_port: int) -> None:
        url = f"http://127.0.0.1:{ssh_banner_port}/get-test"

        result = RealHttpClient(timeout=5.0).request("GET", url)

        assert isinstance(result, Err)
        assert result.error.url == url
        assert result.error.message

    def test_connection_refused_is_transport_error(self) -> None:
        url = f"http://127.0.0.1:{_closed_port()}/get-test"

        result = RealHttpClient(timeout=5.0).request("GET", url)

        assert isinstance(result, Err)


class _NotFoundHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:
        body = f"no route {self.path}".encode()
        self.send_response(404)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture
def not_found_server() -> Iterator[str]:
    server = ThreadingHTTPServer(("127.0.0.1", 0), _NotFoundHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def _serve_banner(listener: socket.socket) -> None:
    conn, _ = listener.accept()
    with conn:
        conn.recv(65536)
        conn.sendall(b"SSH-2.0-OpenSSH_9.6\r\n")


@pytest.fixture
def ssh_banner_port() -> Iterator[int]:
    """A listener that answers like an SSH daemon instead of an HTTP server."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    thread = threading.Thread(target=_serve_banner, args=(listener,), daemon=True)
    thread.start()
    try:
        yield listener.getsockname()[1]
    finally:
        thread.join(timeout=5)
        listener.close()


def _closed_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
