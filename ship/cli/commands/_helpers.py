"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn

import typer

from ship.cli.selector import confirm_yn, is_interactive_terminal


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)


def _confirm(question: str) -> bool:
    return confirm_yn(prompt=question)


def terminal_confirm() -> Callable[[str], bool] | None:
    """A y/n prompt when attached to a terminal, otherwise None."""
    return _confirm if is_interactive_terminal() else None
