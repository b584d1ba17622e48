"""Tests for ship.output.console module."""

from __future__ import annotations

import pytest

from ship.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.DEFAULT) == "default"


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_labels(self) -> None:
        console = MockConsole()
        console.info("Detecting current git branch...")
        console.success("Current branch: main")
        console.warning("Render CLI not found")
        console.error("Vercel CLI not found")

        assert console.messages == [
            "[INFO] Detecting current git branch...",
            "[SUCCESS] Current branch: main",
            "[WARNING] Render CLI not found",
            "[ERROR] Vercel CLI not found",
        ]

    def test_styles_recorded(self) -> None:
        console = MockConsole()
        console.print("dim", Style.DIM)
        console.error("bad")

        assert console.outputs[0] == OutputRecord("dim", Style.DIM)
        assert console.has_error()
        assert not console.has_warning()
        assert console.count(Style.ERROR) == 1

    def test_panel(self) -> None:
        console = MockConsole()
        console.panel("pong", "Responses")
        assert console.messages == ["Responses\npong"]

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.info("Backend URL: https://a")
        console.info("Frontend URL: https://b")

        assert len(console.find("URL")) == 2
        console.clear()
        assert console.messages == []

    def test_text_joins_lines(self) -> None:
        console = MockConsole()
        console.print("a")
        console.newline()
        console.print("b")
        assert console.text == "a\n\nb"


class TestRichConsole:
    def test_labeled_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        console: ConsoleProtocol = RichConsole()
        console.warning("Timed out waiting for Render deployment to finish.")

        out = capsys.readouterr().out
        assert "[WARNING] Timed out waiting for Render deployment to finish." in out

    def test_print_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("[bold]literal[/bold]")

        assert "[bold]literal[/bold]" in capsys.readouterr().out
