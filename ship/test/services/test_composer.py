"""Tests for services/composer.py."""

from __future__ import annotations

import socket
import threading
from collections.abc import Iterator

import pytest

from ship.platform.http import MockHttpClient, RealHttpClient
from ship.services.composer import (
    ERROR_PREFIX,
    RequestComposer,
    RequestDescriptor,
    ResponseSnapshot,
    build_request,
)


class TestBuildRequest:
    def test_local_url(self) -> None:
        request = build_request(
            RequestDescriptor(method="GET", route="/get-test", port="5000"), api_url=None
        )
        assert request.url == "http://localhost:5000/get-test"

    def test_override_ignores_port(self) -> None:
        request = build_request(
            RequestDescriptor(method="POST", route="/api/acm/industry", body="{}", port="5000"),
            api_url="https://cicd-demo-backend-beta.onrender.com",
        )
        assert request.url == "https://cicd-demo-backend-beta.onrender.com/api/acm/industry"
        assert request.body == "{}"

    def test_get_never_has_body(self) -> None:
        request = build_request(
            RequestDescriptor(method="GET", route="/x", body="ignored"), api_url=None
        )
        assert request.body is None


class TestRequestComposer:
    def test_success_keeps_text_verbatim(self) -> None:
        http = MockHttpClient()
        http.respond("GET", "http://localhost:8080/get-test", 200, '{"ok": true}\n')
        composer = RequestComposer(http)

        snapshot = composer.submit(RequestDescriptor(method="GET", route="/get-test"))

        assert snapshot == ResponseSnapshot(text='{"ok": true}\n')
        assert composer.snapshot == snapshot
        assert http.calls[0].body is None

    def test_error_status_body_is_not_an_error(self) -> None:
        http = MockHttpClient()
        http.respond("DELETE", "http://localhost:8080/items/1", 404, "Not Found")
        composer = RequestComposer(http)

        snapshot = composer.submit(RequestDescriptor(method="DELETE", route="/items/1"))

        assert snapshot == ResponseSnapshot(text="Not Found")

    def test_transport_error_is_prefixed(self) -> None:
        http = MockHttpClient()
        http.fail("POST", "http://localhost:8080/x", "Connection refused")
        composer = RequestComposer(http)

        snapshot = composer.submit(RequestDescriptor(method="POST", route="/x", body="a"))

        assert snapshot is not None
        assert snapshot.is_error
        assert snapshot.text == f"{ERROR_PREFIX}Connection refused"
        assert http.calls[0].body == "a"

    def test_blank_route_sends_nothing_and_keeps_snapshot(self) -> None:
        http = MockHttpClient()
        http.respond("GET", "http://localhost:8080/a", 200, "first")
        composer = RequestComposer(http)
        composer.submit(RequestDescriptor(method="GET", route="/a"))

        assert composer.submit(RequestDescriptor(method="GET", route="   ")) is None
        assert composer.snapshot == ResponseSnapshot(text="first")
        assert len(http.calls) == 1

    def test_each_submission_replaces_snapshot(self) -> None:
        http = MockHttpClient()
        http.respond("GET", "https://api.example/a", 200, "one")
        http.respond("GET", "https://api.example/b", 200, "two")
        composer = RequestComposer(http, api_url="https://api.example")

        composer.submit(RequestDescriptor(method="GET", route="/a", port="1"))
        composer.submit(RequestDescriptor(method="GET", route="/b", port="2"))

        assert composer.snapshot == ResponseSnapshot(text="two")

    def test_peer_that_is_not_http_is_shown_as_error(self, banner_port: int) -> None:
        composer = RequestComposer(RealHttpClient(timeout=5.0))

        snapshot = composer.submit(
            RequestDescriptor(method="GET", route="/get-test", port=str(banner_port))
        )

        assert snapshot is not None
        assert snapshot.is_error
        assert snapshot.text.startswith(ERROR_PREFIX)


@pytest.fixture
def banner_port() -> Iterator[int]:
    """A local port that greets with a non-HTTP banner and hangs up."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)

    def serve() -> None:
        conn, _ = listener.accept()
        with conn:
            conn.recv(65536)
            conn.sendall(b"SSH-2.0-OpenSSH_9.6\r\n")

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield listener.getsockname()[1]
    finally:
        thread.join(timeout=5)
        listener.close()
