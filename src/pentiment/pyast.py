"""Spans for nodes produced by Python's ``ast`` module.

``ast`` reports ``col_offset``/``end_col_offset`` as UTF-8 byte offsets
into the line. When the source is at hand they are turned into code-point
columns; otherwise the byte offset is used as-is, which is exact for ASCII.
"""

from __future__ import annotations

import ast

from .source import SourceText
from .spans import Position


def span_from_node(node: ast.AST, source: SourceText | None = None) -> Position | None:
    line = getattr(node, "lineno", None)
    if not isinstance(line, int) or line < 1:
        return None
    col = _column(source, line, getattr(node, "col_offset", 0) or 0)

    end_line = getattr(node, "end_lineno", None)
    end_offset = getattr(node, "end_col_offset", None)
    if end_line is None or end_offset is None:
        return Position(line, col)
    return Position(line, col, end_line, _column(source, end_line, end_offset))


def leftmost_span(first: ast.AST | None, second: ast.AST | None, source: SourceText | None = None) -> Position | None:
    """The span of ``first`` if it has one, else the span of ``second``."""
    for node in (first, second):
        if node is None:
            continue
        span = span_from_node(node, source)
        if span is not None:
            return span
    return None


def _column(source: SourceText | None, line: int, byte_offset: int) -> int:
    text = source.line(line) if source is not None else None
    if text is None:
        return byte_offset + 1
    head = text.encode("utf-8")[:byte_offset]
    return len(head.decode("utf-8", errors="ignore")) + 1
