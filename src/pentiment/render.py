"""Rich, multi-line diagnostic formatting.

Output looks like::

    error[E0001]: type mismatch
      ╭─[calc.py:2:20]
      │
    1 │ def add(x, y):
    2 │     return x + y + 1.5
      •                    ─┬─
      •                     ╰── expected `int`, found `float`
    3 │
      │
      ╰─────
        help: use `int(1.5)`

Formatting never fails on missing sources, unknown source ids, lines past
the end of the text or patterns that cannot be found; those cases fall back
to point positions or drop the affected section.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from .diagnostic import Diagnostic, Severity, severity_of
from .labels import Label, Priority
from .options import RenderOptions
from .source import SourceText
from .spans import Byte, Position, Search


logger = logging.getLogger(__name__)

SourceLookup = Union[SourceText, Mapping[str, Union[SourceText, str]], None]

_VERTICAL = "│"
_HORIZONTAL = "─"
_TOP_LEFT = "╭"
_BOTTOM_LEFT = "╰"
_DOT = "•"
_TEE_DOWN = "┬"
_ELLIPSIS = "…"

_MAX_SOURCE_WIDTH = 80
_MIN_CONTENT_WIDTH = 20

_BACKTICK_RE = re.compile(r"`([^`]+)`")


@dataclass(frozen=True, slots=True)
class _Palette:
    error: str
    warning: str
    info: str
    hint: str
    note: str
    help: str
    bold: str
    dim: str
    reset: str

    def severity(self, severity: Severity) -> str:
        return getattr(self, severity.value)

    def priority(self, priority: Priority) -> str:
        return self.error if priority is Priority.PRIMARY else self.warning


_ANSI = _Palette(
    error="\x1b[31m",
    warning="\x1b[33m",
    info="\x1b[36m",
    hint="\x1b[34m",
    note="\x1b[36m",
    help="\x1b[32m",
    bold="\x1b[1m",
    dim="\x1b[2m",
    reset="\x1b[0m",
)
_PLAIN = _Palette(error="", warning="", info="", hint="", note="", help="", bold="", dim="", reset="")

# A label paired with its span after search/byte resolution. Byte spans stay
# unresolved only when there is no source to resolve them against.
_Placed = tuple[Label, Union[Position, Byte]]


def format_diagnostic(
    diagnostic: Diagnostic,
    sources: SourceLookup,
    options: RenderOptions | None = None,
    *,
    colors: bool | None = None,
    context_lines: int | None = None,
) -> str:
    opts = _merge_options(options, colors, context_lines)
    pal = _ANSI if opts.colors else _PLAIN

    source = resolve_source(diagnostic.source, sources)
    placed = _place_labels(diagnostic.labels, source)
    width = _line_num_width(placed, opts.context_lines)

    sections = [
        _format_header(diagnostic, pal),
        _format_location(placed, source, width, pal),
        _format_source_context(placed, source, opts.context_lines, width, pal),
        _format_trailer("note", diagnostic.notes, width, pal.note, pal),
        _format_trailer("help", diagnostic.help, width, pal.help, pal),
    ]
    return "\n".join(s for s in sections if s is not None)


def format_all(
    diagnostics: Iterable[Diagnostic],
    sources: SourceLookup,
    options: RenderOptions | None = None,
    *,
    colors: bool | None = None,
    context_lines: int | None = None,
) -> str:
    """Format each diagnostic against ``sources`` and add a count summary."""
    diags = list(diagnostics)
    if not diags:
        return ""
    opts = _merge_options(options, colors, context_lines)
    body = "\n\n".join(format_diagnostic(d, sources, opts) for d in diags)
    summary = _format_summary(diags, _ANSI if opts.colors else _PLAIN)
    if summary is None:
        return body
    return f"{body}\n\n{summary}"


def resolve_source(source_id: str | None, sources: SourceLookup) -> SourceText | None:
    """Pick the source a diagnostic refers to, or ``None`` if there is none."""
    if source_id is None or sources is None:
        return None
    if isinstance(sources, SourceText):
        if sources.name == source_id:
            return sources
        logger.debug("diagnostic source %r does not match %r", source_id, sources.name)
        return None
    found = sources.get(source_id)
    if isinstance(found, SourceText):
        return found
    if isinstance(found, str):
        return SourceText.from_string(source_id, found)
    logger.debug("no source registered for %r", source_id)
    return None


def _merge_options(options: RenderOptions | None, colors: bool | None, context_lines: int | None) -> RenderOptions:
    base = options or RenderOptions()
    if colors is None and context_lines is None:
        return base
    return RenderOptions(
        colors=base.colors if colors is None else colors,
        context_lines=base.context_lines if context_lines is None else context_lines,
    )


def _place_labels(labels: Iterable[Label], source: SourceText | None) -> list[_Placed]:
    out: list[_Placed] = []
    for label in labels:
        span = label.resolved_span()
        if isinstance(span, Search):
            span = span.resolve(source)
        elif isinstance(span, Byte) and source is not None:
            span = span.resolve(source)
        out.append((label, span))
    return out


def _line_num_width(placed: list[_Placed], context_lines: int) -> int:
    highest = max(
        (span.start_line + context_lines if isinstance(span, Position) else 1 for _, span in placed),
        default=1,
    )
    return len(str(highest))


def _emphasize(text: str, pal: _Palette) -> str:
    if not pal.bold:
        return text
    return _BACKTICK_RE.sub(lambda m: f"`{pal.bold}{m.group(1)}{pal.reset}`", text)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _format_header(diagnostic: Diagnostic, pal: _Palette) -> str:
    severity = severity_of(diagnostic)
    code_part = f"[{diagnostic.code}]" if diagnostic.code else ""
    message = _emphasize(diagnostic.message, pal)
    return f"{pal.severity(severity)}{pal.bold}{severity.value}{code_part}{pal.reset}: {message}"


def _format_location(placed: list[_Placed], source: SourceText | None, width: int, pal: _Palette) -> str | None:
    if not placed:
        return None
    span = placed[0][1]
    if isinstance(span, Byte):
        span = span.resolve(None)
    location = location_string(source.name if source else None, span.start_line, span.start_column)
    pad = " " * width
    return f"{pad} {pal.dim}{_TOP_LEFT}{_HORIZONTAL}[{pal.reset}{location}{pal.dim}]{pal.reset}"


def location_string(name: str | None, line: int, column: int) -> str:
    if name is None:
        return f"line {line}:{column}"
    return f"{name}:{line}:{column}"


def _format_source_context(
    placed: list[_Placed],
    source: SourceText | None,
    context_lines: int,
    width: int,
    pal: _Palette,
) -> str | None:
    if source is None:
        return None
    positioned = [(label, span) for label, span in placed if isinstance(span, Position)]
    if not positioned:
        return None

    positioned.sort(key=lambda item: item[1].start_line)
    by_line: dict[int, list[tuple[Label, Position]]] = {}
    for label, span in positioned:
        by_line.setdefault(span.start_line, []).append((label, span))

    min_line = max(1, positioned[0][1].start_line - context_lines)
    max_line = positioned[-1][1].start_line + context_lines

    rows: list[str] = []
    for line_num, text in source.line_range(min_line, max_line):
        on_line = by_line.get(line_num)
        if on_line is None:
            rows.append(_format_context_line(line_num, text, width, pal))
            continue
        rows.append(_format_labelled_line(line_num, text, width, pal))
        for label, span in on_line:
            rows.extend(_format_pointer(label, span, width, pal))

    if not rows:
        return None

    pad = " " * width
    separator = f"{pad} {pal.dim}{_VERTICAL}{pal.reset}"
    closing = f"{pad} {pal.dim}{_BOTTOM_LEFT}{_HORIZONTAL * 5}{pal.reset}"
    return "\n".join([separator, *rows, separator, closing])


def _format_context_line(line_num: int, text: str, width: int, pal: _Palette) -> str:
    shown = _truncate(text, width + 3)
    return f"{pal.dim}{line_num:>{width}} {_VERTICAL}{pal.reset} {shown}"


def _format_labelled_line(line_num: int, text: str, width: int, pal: _Palette) -> str:
    shown = _truncate(text, width + 3)
    return f"{pal.dim}{line_num:>{width}}{pal.reset} {pal.dim}{_VERTICAL}{pal.reset} {shown}"


def _format_pointer(label: Label, span: Position, width: int, pal: _Palette) -> list[str]:
    col = span.start_column
    span_width = 1
    if span.end_column is not None and span.end_column > col:
        span_width = span.end_column - col
    underline, tee = _underline(span_width)

    pad = " " * width
    gutter = f"{pad} {pal.dim}{_DOT}{pal.reset} "
    color = pal.priority(label.priority)
    text = label.message or ""
    return [
        f"{gutter}{' ' * (col - 1)}{color}{underline}{pal.reset}",
        f"{gutter}{' ' * (col - 1 + tee)}{color}{_BOTTOM_LEFT}{_HORIZONTAL * 2} {text}{pal.reset}",
    ]


def _underline(width: int) -> tuple[str, int]:
    """Dashes with a downward tee at the centre; returns ``(text, tee_index)``."""
    if width <= 1:
        return _TEE_DOWN, 0
    center = (width - 1) // 2
    return _HORIZONTAL * center + _TEE_DOWN + _HORIZONTAL * (width - center - 1), center


def _truncate(text: str, prefix_width: int) -> str:
    budget = max(_MAX_SOURCE_WIDTH - prefix_width, _MIN_CONTENT_WIDTH)
    if len(text) > budget:
        return text[: budget - 1] + _ELLIPSIS
    return text


def _format_trailer(kind: str, items: Iterable[str], width: int, color: str, pal: _Palette) -> str | None:
    pad = " " * (width + 3)
    out = [f"{pad}{color}{kind}{pal.reset}: {_emphasize(item, pal)}" for item in items]
    if not out:
        return None
    return "\n".join(out)


def _format_summary(diagnostics: list[Diagnostic], pal: _Palette) -> str | None:
    severities = [severity_of(d) for d in diagnostics]
    errors = severities.count(Severity.ERROR)
    warnings = severities.count(Severity.WARNING)

    parts: list[str] = []
    if errors:
        parts.append(_plural(errors, "error"))
    if warnings:
        parts.append(_plural(warnings, "warning"))
    if not parts:
        return None
    return f"{pal.bold}{', '.join(parts)} emitted{pal.reset}"


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"
