"""Request composer: send one HTTP request, keep the raw response text.

The composer holds a single response snapshot. Each submission replaces it;
a submission with a blank route does nothing at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

from ship.core.result import Err
from ship.platform.http import HttpClient

__all__ = [
    "ERROR_PREFIX",
    "HTTP_METHODS",
    "HttpMethod",
    "NO_BODY_METHOD",
    "OutboundRequest",
    "RequestComposer",
    "RequestDescriptor",
    "ResponseSnapshot",
    "build_request",
    "local_base_url",
]

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
HTTP_METHODS: tuple[HttpMethod, ...] = get_args(HttpMethod)

# GET requests never carry a body.
NO_BODY_METHOD: HttpMethod = "GET"

ERROR_PREFIX = "Received an error: "


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    method: HttpMethod
    route: str
    body: str = ""
    port: str = "8080"


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    method: HttpMethod
    url: str
    body: str | None


@dataclass(frozen=True, slots=True)
class ResponseSnapshot:
    text: str
    is_error: bool = False


def local_base_url(port: str) -> str:
    return f"http://localhost:{port}"


def build_request(descriptor: RequestDescriptor, *, api_url: str | None) -> OutboundRequest:
    """Resolve a form descriptor into the concrete request.

    An api_url override replaces the local base entirely; the port is then
    ignored.
    """
    base = api_url if api_url is not None else local_base_url(descriptor.port)
    body = None if descriptor.method == NO_BODY_METHOD else descriptor.body
    return OutboundRequest(method=descriptor.method, url=f"{base}{descriptor.route}", body=body)


class RequestComposer:
    """Issues requests and keeps the latest response."""

    def __init__(self, http: HttpClient, *, api_url: str | None = None) -> None:
        self._http = http
        self.api_url = api_url
        self.snapshot: ResponseSnapshot | None = None

    def submit(self, descriptor: RequestDescriptor) -> ResponseSnapshot | None:
        """Send the request and replace the snapshot.

        Returns:
            The new snapshot, or None if the route was blank (nothing sent,
            previous snapshot kept)
        """
        if not descriptor.route.strip():
            return None

        request = build_request(descriptor, api_url=self.api_url)
        result = self._http.request(request.method, request.url, body=request.body)
        if isinstance(result, Err):
            self.snapshot = ResponseSnapshot(
                text=f"{ERROR_PREFIX}{result.error.message}", is_error=True
            )
        else:
            self.snapshot = ResponseSnapshot(text=result.value.text)
        return self.snapshot
