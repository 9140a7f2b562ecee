"""Tests for cikit.output.console module."""

from __future__ import annotations

import pytest

from cikit.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("dry run: CI is not set", Style.WARNING)
        assert console.outputs[0].message == "dry run: CI is not set"
        assert console.outputs[0].style == Style.WARNING

    def test_shorthands(self) -> None:
        console = MockConsole()
        console.success("v1.2.3: published")
        console.info("version 1.2.3")
        console.error("git push --tags: denied")

        assert console.messages == [
            "OK v1.2.3: published",
            "info: version 1.2.3",
            "error: git push --tags: denied",
        ]
        assert console.has_error()

    def test_find(self) -> None:
        console = MockConsole()
        console.print("a")
        console.print("tag v1.2.3")
        assert [o.message for o in console.find("v1.2.3")] == ["tag v1.2.3"]


class TestRichConsole:
    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("can't find `version` in Cargo.toml")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error:" in captured.err
        assert "can't find `version` in Cargo.toml" in captured.err

    def test_markup_in_messages_is_not_interpreted(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        console = RichConsole()
        console.info("[bold]literal[/bold]")
        console.print("[dim]also literal[/dim]", Style.DIM)

        err = capsys.readouterr().err
        assert "[bold]literal[/bold]" in err
        assert "[dim]also literal[/dim]" in err
