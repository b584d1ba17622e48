"""Single-key terminal prompts: an arrow-key picker and a y/n confirm."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SelectorOption(Generic[T]):
    value: T
    label: str


@dataclass(frozen=True, slots=True)
class SelectorResult(Generic[T]):
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal():
        return False
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled() or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _read_char() -> str:
    if os.name == "nt":
        import msvcrt

        return msvcrt.getwch()

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch == "\x1b":
            # Arrow keys arrive as ESC [ A / ESC [ B.
            if sys.stdin.read(1) == "[":
                return {"A": "up", "B": "down"}.get(sys.stdin.read(1), "other")
            return "cancel"
        return ch
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_key() -> str:
    ch = _read_char()
    if ch in ("\r", "\n"):
        return "enter"
    if ch in ("q", "Q", "\x03"):
        return "cancel"
    if ch in ("\x00", "\xe0"):
        # Windows arrow prefix.
        return {"H": "up", "P": "down"}.get(_read_char(), "other")
    if ch in ("up", "down", "cancel"):
        return ch
    return "other"


def _render(*, title: str, options: list[SelectorOption[object]], index: int) -> None:
    # Move back over the previous rendering instead of clearing the screen,
    # so earlier output (the last response) stays visible.
    sys.stdout.write(_paint(title, "1", "96") + "\n")
    for i, opt in enumerate(options):
        if i == index:
            sys.stdout.write(_paint(f" > {opt.label}", "1", "30", "46") + "\n")
        else:
            sys.stdout.write(f"   {opt.label}\n")
    sys.stdout.write(_paint("Up/Down + Enter, q: cancel", "2", "37") + "\n")
    sys.stdout.flush()


def _erase(lines: int) -> None:
    sys.stdout.write(f"\x1b[{lines}F\x1b[J")


def select_one(
    *,
    title: str,
    options: list[SelectorOption[T]],
    initial_index: int = 0,
) -> SelectorResult[T]:
    if not options:
        raise ValueError("selector requires at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    idx = max(0, min(initial_index, len(options) - 1))
    casted: list[SelectorOption[object]] = [
        SelectorOption(value=o.value, label=o.label) for o in options
    ]
    height = len(options) + 2

    _render(title=title, options=casted, index=idx)
    while True:
        key = _read_key()
        if key == "enter":
            return SelectorResult(action="select", value=options[idx].value, index=idx)
        if key == "cancel":
            return SelectorResult(action="cancel", value=None, index=idx)
        if key == "up":
            idx = (idx - 1) % len(options)
        elif key == "down":
            idx = (idx + 1) % len(options)
        else:
            continue
        _erase(height)
        _render(title=title, options=casted, index=idx)


def confirm_yn(*, prompt: str) -> bool:
    """Single keypress y/n; anything but y declines."""
    if not is_interactive_terminal():
        raise RuntimeError("interactive confirmation requires a TTY")

    sys.stdout.write(f"{prompt} ({_paint('y', '1', '32')}/{_paint('n', '1', '31')}) ")
    sys.stdout.flush()
    ch = _read_char()
    sys.stdout.write("\n")
    return ch.lower() == "y"
