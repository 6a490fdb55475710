from __future__ import annotations

from pathlib import Path

import pytest

import pentiment
from pentiment import Byte, Label, Position, RenderOptions, Report, Search, SourceText, compact


def _parse_error() -> Report:
    return (
        Report.error("Parse error")
        .with_code("P001")
        .with_source("input.txt")
        .with_label(Label.primary(Position(10, 5), "unexpected token"))
    )


def test_compact_with_code_and_location() -> None:
    assert compact.format_diagnostic(_parse_error()) == "[P001] Parse error (input.txt:10:5)"


def test_compact_without_code() -> None:
    r = Report.error("Something failed").with_source("test.py").with_label(Label.primary(Position(1, 1), "here"))
    assert compact.format_diagnostic(r) == "Something failed (test.py:1:1)"


def test_compact_without_labels_or_source() -> None:
    assert compact.format_diagnostic(Report.warning("careful")) == "careful"
    r = Report.error("e").with_label(Label.primary(Position(3, 4)))
    assert compact.format_diagnostic(r) == "e (line 3:4)"


def test_compact_byte_fallback() -> None:
    with_source = Report.error("e").with_source("a.bin").with_label(Label.primary(Byte(42, 3)))
    assert compact.format_diagnostic(with_source) == "e (a.bin:byte 42)"
    without = Report.error("e").with_label(Label.primary((7, 1)))
    assert compact.format_diagnostic(without) == "e (byte 7)"


def test_compact_search_uses_anchor() -> None:
    r = Report.error("e").with_source("s").with_label(Label.primary(Search(line=4, pattern="x", after_column=6)))
    assert compact.format_diagnostic(r) == "e (s:4:6)"


def test_compact_format_all_joins_lines() -> None:
    out = compact.format_all([_parse_error(), Report.warning("w")])
    assert out == "[P001] Parse error (input.txt:10:5)\nw"
    assert compact.format_all([]) == ""


def test_top_level_compact_helpers() -> None:
    assert pentiment.format_compact(_parse_error()) == "[P001] Parse error (input.txt:10:5)"
    assert pentiment.format_all_compact([_parse_error()]) == "[P001] Parse error (input.txt:10:5)"


def test_api_format_with_source_text() -> None:
    src = SourceText.from_string("input.txt", "\n".join(f"row {i}" for i in range(1, 13)))
    out = pentiment.format(_parse_error(), src, colors=False)
    assert out.startswith("error[P001]: Parse error\n   ╭─[input.txt:10:5]")
    assert "10 │ row 10" in out


def test_api_format_reads_path(tmp_path: Path) -> None:
    p = tmp_path / "input.txt"
    p.write_text("first\nsecond\n", encoding="utf-8")
    r = Report.error("e").with_source("input.txt").with_label(Label.primary(Position(2, 1, 2, 7), "here"))
    out = pentiment.format(r, p, RenderOptions(colors=False))
    assert "  ╭─[input.txt:2:1]" in out
    assert "2 │ second" in out


def test_api_format_path_without_diagnostic_source(tmp_path: Path) -> None:
    p = tmp_path / "input.txt"
    p.write_text("only\n", encoding="utf-8")
    r = Report.error("e").with_source(str(p)).with_label(Label.primary(Position(1, 1)))
    out = pentiment.format(r, str(p), colors=False)
    assert "1 │ only" in out


def test_api_format_missing_path_degrades(tmp_path: Path) -> None:
    out = pentiment.format(_parse_error(), tmp_path / "nope.txt", colors=False)
    assert "line 10:5" in out


def test_api_format_overlong_path_string_degrades() -> None:
    out = pentiment.format(_parse_error(), "x" * 300, colors=False)
    assert "line 10:5" in out


def test_api_format_path_keeps_crlf_offsets(tmp_path: Path) -> None:
    p = tmp_path / "win.txt"
    p.write_bytes(b"ab\r\ncd\r\nef")
    r = Report.error("e").with_source("win.txt").with_label(Label.primary(Byte(8, 2)))
    out = pentiment.format(r, p, colors=False)
    assert "  ╭─[win.txt:3:1]" in out


def test_api_format_all_with_path_maps_every_source(tmp_path: Path) -> None:
    p = tmp_path / "shared.txt"
    p.write_text("a\nb\nc\n", encoding="utf-8")
    reports = [
        Report.error("one").with_source("x").with_label(Label.primary(Position(1, 1))),
        Report.warning("two").with_source("y").with_label(Label.primary(Position(2, 1))),
    ]
    out = pentiment.format_all(reports, p, colors=False)
    assert "  ╭─[x:1:1]" in out
    assert "  ╭─[y:2:1]" in out
    assert out.endswith("1 error, 1 warning emitted")


def test_api_defaults_follow_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("PENTIMENT_CONTEXT_LINES", "0")
    src = SourceText.from_string("s", "a\nb\nc")
    r = Report.error("e").with_source("s").with_label(Label.primary(Position(2, 1)))
    out = pentiment.format(r, src)
    assert "\x1b[" not in out
    assert "1 │ a" not in out
    assert "2 │ b" in out


def test_render_options_from_env() -> None:
    assert RenderOptions.from_env({}) == RenderOptions(colors=True, context_lines=2)
    assert RenderOptions.from_env({"NO_COLOR": ""}).colors is False
    assert RenderOptions.from_env({"PENTIMENT_CONTEXT_LINES": "5"}).context_lines == 5
    assert RenderOptions.from_env({"PENTIMENT_CONTEXT_LINES": "-1"}).context_lines == 2


def test_render_options_reject_negative_context() -> None:
    with pytest.raises(ValueError):
        RenderOptions(context_lines=-1)
