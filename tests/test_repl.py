import builtins
from collections.abc import Callable

import pytest

from movetag.movetag_repl import handle_mode_command, print_traceback, start_repl


def feed(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    calls = iter(lines)
    monkeypatch.setattr(builtins, "input", lambda _: next(calls))


def raising(exc: type[BaseException]) -> Callable[[str], str]:
    def _input(_: str) -> str:
        raise exc

    return _input


def test_repl_quit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "movetag REPL [mode=type-tag]" in out
    assert "Exiting movetag REPL" in out


def test_repl_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "exit")
    start_repl()
    assert "Exiting movetag REPL" in capsys.readouterr().out


@pytest.mark.parametrize("exc", [EOFError, KeyboardInterrupt])  # type: ignore[misc]
def test_repl_interrupt(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], exc: type[BaseException]
) -> None:
    monkeypatch.setattr(builtins, "input", raising(exc))
    start_repl()
    assert "Exiting movetag REPL" in capsys.readouterr().out


def test_repl_parses_type_tag(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "0x01::M::S<u8,>", "quit")
    start_repl()
    assert "0x1::M::S<u8>" in capsys.readouterr().out


def test_repl_skips_blank_and_comment_lines(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "   ", "# u8", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error]" not in out
    assert "u8" not in out.split("\n", 1)[1]


def test_repl_multiline_type_parameters(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "0x1::M::S<", "u8,", "bool>", "quit")
    start_repl()
    assert "0x1::M::S<u8, bool>" in capsys.readouterr().out


def test_repl_reports_errors(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "vector u8", "u8 u8", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>> Expected token LT" in out
    assert "[error] >>> Unexpected trailing input" in out


def test_repl_mode_switch(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "mode arguments", "255u8, true", "mode", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[mode] >>> Parsing arguments" in out
    assert "255u8, true" in out
    assert "[mode] >>> Current mode: arguments" in out


def test_repl_unknown_mode(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "mode expression", "u8", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>> Unknown mode: expression" in out
    assert "\nu8\n" in out


def test_repl_names_starting_with_mode(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "module_a, modes", "quit")
    start_repl(kind="names")
    assert "module_a, modes" in capsys.readouterr().out


def test_repl_verbose_toggle(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "verbose-mode", "u8", "1u8", "verbose-mode", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[mode] >>> Verbose mode ON" in out
    assert "[tokens] >>> [Token(U8_TYPE, u8)]" in out
    assert "Traceback" in out
    assert "[mode] >>> Verbose mode OFF" in out


def test_repl_help(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "help", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "mode <kind>" in out
    assert "struct-tag" in out


def test_repl_respects_max_depth(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "vector<u8>", "quit")
    start_repl(max_depth=1)
    assert "Exceeded TypeTag nesting limit" in capsys.readouterr().out


def test_handle_mode_command_ignores_other_input() -> None:
    assert handle_mode_command("u8", "type-tag") is None
    assert handle_mode_command("moderate", "names") is None


def test_handle_mode_command_switches(capsys: pytest.CaptureFixture[str]) -> None:
    assert handle_mode_command("mode struct-tag", "type-tag") == "struct-tag"
    assert handle_mode_command("MODE names", "type-tag") == "names"


def test_print_traceback(capsys: pytest.CaptureFixture[str]) -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        print_traceback()
    out = capsys.readouterr().out
    assert "[error] >>>" in out
    assert "ValueError: boom" in out
