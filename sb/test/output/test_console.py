"""Tests for sb.output.console module."""

from __future__ import annotations

import io

import pytest

from sb.output.console import (
    ActionsConsole,
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
    console_for_env,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DEBUG) == "debug"
        assert str(Style.DEFAULT) == "default"


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("cached")
        console.error("failed")
        console.warning("careful")
        console.info("finding")
        console.debug("detail")

        assert console.messages == [
            "OK cached",
            "error: failed",
            "warning: careful",
            "info: finding",
            "debug: detail",
        ]

    def test_has_error(self) -> None:
        console = MockConsole()
        console.info("fine")
        assert not console.has_error()
        console.error("bad")
        assert console.has_error()

    def test_find_and_text(self) -> None:
        console = MockConsole()
        console.info("Found Blender release: blender-4.0.2-linux-x64.tar.xz")
        console.print("done")

        assert len(console.find("blender-4.0.2")) == 1
        assert console.text.endswith("\ndone")

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.info("typed")


class TestRichConsole:
    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.info("Finding [latest]")
        console.error("boom")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "info: Finding [latest]" in captured.err
        assert "error: boom" in captured.err

    def test_debug_hidden_unless_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("quiet")
        RichConsole(verbose=True).debug("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "debug: loud" in err


class TestActionsConsole:
    def _console(self) -> tuple[ActionsConsole, io.StringIO]:
        stream = io.StringIO()
        return ActionsConsole(stream=stream), stream

    def test_workflow_commands(self) -> None:
        console, stream = self._console()
        console.error("Bad version string: badver")
        console.warning("slow mirror")
        console.debug("Ok('x')")

        assert stream.getvalue().splitlines() == [
            "::error::Bad version string: badver",
            "::warning::slow mirror",
            "::debug::Ok('x')",
        ]

    def test_plain_lines(self) -> None:
        console, stream = self._console()
        console.info("Finding Blender version")
        console.success("cached")
        console.print("blender-version=4.0.2")

        assert stream.getvalue() == "Finding Blender version\ncached\nblender-version=4.0.2\n"

    def test_escapes_newlines_and_percent(self) -> None:
        console, stream = self._console()
        console.error("100%\nfailed")
        assert stream.getvalue() == "::error::100%25%0Afailed\n"

    def test_styled_print_routes(self) -> None:
        console, stream = self._console()
        console.print("oops", Style.ERROR)
        assert stream.getvalue() == "::error::oops\n"


class TestConsoleForEnv:
    def test_actions(self) -> None:
        assert isinstance(console_for_env({"GITHUB_ACTIONS": "true"}), ActionsConsole)

    def test_terminal(self) -> None:
        assert isinstance(console_for_env({}), RichConsole)
