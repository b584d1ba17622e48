"""HTTP client abstraction.

This module provides:
- HttpClient: Protocol for HTTP calls (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Scripted implementation for testing

A response that settles with any status code, 4xx and 5xx included, is an
Ok(HttpResponse): callers decide what a status means. Err(HttpError) is
reserved for calls that never produced a response (DNS, refused
connection, timeout, malformed URL).
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ship.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """A call that produced no response.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A settled HTTP response."""

    url: str
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> object | None:
        """Parse the body as JSON, or None if it is not JSON."""
        try:
            obj: object = json.loads(self.text)
        except json.JSONDecodeError:
            return None
        return obj


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP calls."""

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Issue one HTTP call.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            url: Absolute URL
            headers: Extra request headers
            body: Request body, sent as UTF-8 (None sends no body)

        Returns:
            Ok with the settled response, or Err if no response was received
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib."""

    def __init__(self, timeout: float = 30.0, user_agent: str = "ship/0.1.0") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> Result[HttpResponse, HttpError]:
        all_headers = {"User-Agent": self.user_agent, **(headers or {})}
        data = body.encode("utf-8") if body is not None else None
        try:
            req = urllib.request.Request(url, data=data, headers=all_headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
                return Ok(HttpResponse(url=url, status=response.status, text=_decode(raw)))
        except urllib.error.HTTPError as e:
            # Error statuses still carry a body the caller wants to see.
            try:
                text = _decode(e.read())
            except (http.client.HTTPException, OSError) as read_error:
                return Err(HttpError(url=url, message=_describe(read_error)))
            return Ok(HttpResponse(url=url, status=e.code, text=text))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, message=str(e)))
        except http.client.HTTPException as e:
            # Peer answered, but not with HTTP (BadStatusLine, IncompleteRead, ...).
            return Err(HttpError(url=url, message=_describe(e)))


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class RecordedCall:
    method: str
    url: str
    headers: dict[str, str]
    body: str | None


def _empty_calls() -> list[RecordedCall]:
    return []


def _empty_script() -> dict[tuple[str, str], list[HttpResponse | HttpError]]:
    return {}


@dataclass
class MockHttpClient:
    """Scripted HTTP client for testing.

    Each (method, url) has a queue of outcomes; calls consume the queue and
    the last outcome repeats once the queue is down to one entry.

    Usage:
        client = MockHttpClient()
        client.respond("GET", "http://localhost:8080/ping", 200, "pong")
        result = client.request("GET", "http://localhost:8080/ping")
        assert result.unwrap().text == "pong"
    """

    calls: list[RecordedCall] = field(default_factory=_empty_calls)
    _script: dict[tuple[str, str], list[HttpResponse | HttpError]] = field(
        default_factory=_empty_script
    )

    def respond(self, method: str, url: str, status: int, text: str = "") -> None:
        self._script.setdefault((method, url), []).append(
            HttpResponse(url=url, status=status, text=text)
        )

    def respond_json(self, method: str, url: str, status: int, payload: object) -> None:
        self.respond(method, url, status, json.dumps(payload))

    def fail(self, method: str, url: str, message: str) -> None:
        self._script.setdefault((method, url), []).append(HttpError(url=url, message=message))

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(RecordedCall(method, url, dict(headers or {}), body))

        queue = self._script.get((method, url))
        if not queue:
            return Err(HttpError(url=url, message="no scripted response (mock)"))

        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, HttpError):
            return Err(outcome)
        return Ok(outcome)

    def calls_to(self, method: str, url: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == method and c.url == url]
