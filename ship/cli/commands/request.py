from __future__ import annotations

from typing import Protocol

import typer

from ship.cli.context import build_context
from ship.cli.selector import SelectorOption, is_interactive_terminal, select_one
from ship.core.config import load_composer_config
from ship.output.console import ConsoleProtocol, Style
from ship.platform.http import RealHttpClient
from ship.services.composer import (
    HTTP_METHODS,
    NO_BODY_METHOD,
    HttpMethod,
    RequestComposer,
    RequestDescriptor,
)

QUIT_ROUTE = ":q"


class RequestForm(Protocol):
    """Where the composer's fields come from.

    Each method returns None when the operator wants to stop.
    """

    def port(self, default: str) -> str | None: ...

    def route(self) -> str | None: ...

    def method(self, default: HttpMethod) -> HttpMethod | None: ...

    def body(self) -> str | None: ...


class TerminalForm:
    """Reads the form fields with typer prompts."""

    def port(self, default: str) -> str | None:
        return typer.prompt("Port (optional)", default=default)

    def route(self) -> str | None:
        route: str = typer.prompt(
            "Route (e.g. /api/acm/industry, :q to quit)", default="", show_default=False
        )
        return None if route.strip() == QUIT_ROUTE else route

    def method(self, default: HttpMethod) -> HttpMethod | None:
        if not is_interactive_terminal():
            while True:
                answer: str = typer.prompt(f"Method ({'/'.join(HTTP_METHODS)})", default=default)
                method = _as_method(answer.strip().upper())
                if method is not None:
                    return method

        options = [SelectorOption(value=m, label=m) for m in HTTP_METHODS]
        picked = select_one(
            title="Method",
            options=options,
            initial_index=HTTP_METHODS.index(default),
        )
        return picked.value if picked.action == "select" else None

    def body(self) -> str | None:
        return typer.prompt("Body", default="", show_default=False)


def _as_method(value: str) -> HttpMethod | None:
    for m in HTTP_METHODS:
        if m == value:
            return m
    return None


def run_session(
    *,
    composer: RequestComposer,
    form: RequestForm,
    console: ConsoleProtocol,
    default_port: str,
) -> None:
    """Prompt, send, show; repeat until the form is abandoned."""
    port = default_port
    method: HttpMethod = NO_BODY_METHOD

    if composer.api_url is not None:
        console.print(f"Sending to {composer.api_url} (port is ignored)", Style.DIM)

    while True:
        new_port = form.port(port)
        if new_port is None:
            return
        port = new_port.strip() or port

        route = form.route()
        if route is None:
            return

        new_method = form.method(method)
        if new_method is None:
            return
        method = new_method

        body = ""
        if method != NO_BODY_METHOD:
            new_body = form.body()
            if new_body is None:
                return
            body = new_body

        descriptor = RequestDescriptor(method=method, route=route, body=body, port=port)
        snapshot = composer.submit(descriptor)
        if snapshot is None:
            continue
        console.panel(snapshot.text, "Responses")


def request() -> None:
    """Compose HTTP requests against a local or configured backend.

    The base URL is NEXT_PUBLIC_API_URL when set, otherwise
    http://localhost:<port>.
    """
    ctx = build_context()
    config = load_composer_config(ctx.root, ctx.environ)
    composer = RequestComposer(RealHttpClient(), api_url=config.api_url)

    try:
        run_session(
            composer=composer,
            form=TerminalForm(),
            console=ctx.console,
            default_port=config.default_port,
        )
    except typer.Abort:
        ctx.console.newline()
