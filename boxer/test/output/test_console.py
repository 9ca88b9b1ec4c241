"""Tests for boxer.output.console and boxer.output.errors."""

from __future__ import annotations

from boxer.core.errors import BoxerError
from boxer.output.console import ConsoleProtocol, MockConsole, RichConsole, Style
from boxer.output.errors import boxer_error_exit_code, print_boxer_error


class TestMockConsole:
    def test_captures_styles(self) -> None:
        console = MockConsole()
        console.success("done")
        console.warning("careful")
        console.info("fyi")
        console.debug("EXEC: vagrant package")

        assert console.messages == [
            "OK done",
            "warning: careful",
            "notice: fyi",
            "EXEC: vagrant package",
        ]
        assert console.count(Style.DEBUG) == 1
        assert not console.has_error()

    def test_find(self) -> None:
        console = MockConsole()
        console.print("version: 1.0.1")
        console.print("url: http://x")
        assert [o.message for o in console.find("version")] == ["version: 1.0.1"]

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.header("boxer")


class TestRichConsole:
    def test_debug_hidden_unless_verbose(self, capsys) -> None:  # type: ignore[no-untyped-def]
        RichConsole(verbose=False).debug("hidden line")
        RichConsole(verbose=True).debug("shown line")

        out = capsys.readouterr().out
        assert "hidden line" not in out
        assert "shown line" in out

    def test_errors_go_to_stderr(self, capsys) -> None:  # type: ignore[no-untyped-def]
        RichConsole().error("bad thing")

        captured = capsys.readouterr()
        assert "bad thing" in captured.err
        assert "bad thing" not in captured.out


class TestPrintBoxerError:
    def test_includes_stage_and_hint(self) -> None:
        console = MockConsole()
        error = BoxerError(
            "external_tool_failure",
            "vagrant package failed, exit code=1",
            hint="Command: vagrant package --base dev",
            stage="version_computed",
        )

        print_boxer_error(error, console)

        assert console.has_error()
        assert "error: vagrant package failed, exit code=1" in console.messages
        assert "release aborted at stage: version_computed" in console.messages
        assert "hint: Command: vagrant package --base dev" in console.messages

    def test_kind_prefix(self) -> None:
        console = MockConsole()
        print_boxer_error(BoxerError("invalid_input", "Invalid metadata"), console)
        assert console.messages == ["error: Invalid input: Invalid metadata"]

    def test_exit_code(self) -> None:
        assert boxer_error_exit_code(BoxerError("io_failure", "x")) == 5
