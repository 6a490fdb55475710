from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from .errors import SpanError
from .source import SourceText


logger = logging.getLogger(__name__)


def _is_int(v: object) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise SpanError(msg)


@dataclass(frozen=True, slots=True)
class Position:
    """A line/column span, 1-indexed.

    With no end coordinates the span is a single point; it renders one
    column wide starting at ``(start_line, start_column)``.
    """

    start_line: int
    start_column: int = 1
    end_line: int | None = None
    end_column: int | None = None

    def __post_init__(self) -> None:
        _require(_is_int(self.start_line) and self.start_line >= 1, f"start_line must be an int >= 1, got {self.start_line!r}")
        _require(
            _is_int(self.start_column) and self.start_column >= 1,
            f"start_column must be an int >= 1, got {self.start_column!r}",
        )
        _require(
            (self.end_line is None) == (self.end_column is None),
            "end_line and end_column must be given together",
        )
        if self.end_line is not None:
            _require(_is_int(self.end_line) and self.end_line >= 1, f"end_line must be an int >= 1, got {self.end_line!r}")
            _require(
                _is_int(self.end_column) and self.end_column >= 1,
                f"end_column must be an int >= 1, got {self.end_column!r}",
            )

    @property
    def is_point(self) -> bool:
        return self.end_line is None

    def single_line_range(self) -> tuple[int, int, int] | None:
        """``(line, start_col, end_col)`` when the span sits on one line."""
        if self.end_line is None:
            return (self.start_line, self.start_column, self.start_column + 1)
        if self.end_line == self.start_line and self.end_column is not None:
            return (self.start_line, self.start_column, self.end_column)
        return None

    def resolve(self, source: SourceText | None = None) -> "Position":
        return self


@dataclass(frozen=True, slots=True)
class Byte:
    """Half-open byte range ``[start, start + length)`` into a source."""

    start: int
    length: int

    def __post_init__(self) -> None:
        _require(_is_int(self.start) and self.start >= 0, f"byte start must be an int >= 0, got {self.start!r}")
        _require(_is_int(self.length) and self.length >= 1, f"byte length must be an int >= 1, got {self.length!r}")

    @property
    def end(self) -> int:
        return self.start + self.length

    def resolve(self, source: SourceText | None) -> Position:
        if source is None:
            return Position(1, 1)
        start = source.byte_to_position(self.start)
        if start is None:
            logger.debug("byte offset %d is outside %s, using 1:1", self.start, source.name)
            return Position(1, 1)
        end = source.byte_to_position(self.end)
        if end is None:
            logger.debug("byte span %d+%d runs past the end of %s", self.start, self.length, source.name)
            return Position(start[0], start[1])
        return Position(start[0], start[1], end[0], end[1])


@dataclass(frozen=True, slots=True)
class Search:
    """A deferred span: find ``pattern`` near ``line`` when formatting.

    Only the first line is searched from ``after_column``; the following
    ``max_lines - 1`` lines are searched from their start. Matching is a
    literal, leftmost substring search over code points.
    """

    line: int
    pattern: str
    after_column: int = 1
    max_lines: int = 1

    def __post_init__(self) -> None:
        _require(_is_int(self.line) and self.line >= 1, f"search line must be an int >= 1, got {self.line!r}")
        _require(isinstance(self.pattern, str) and self.pattern != "", "search pattern must be a non-empty string")
        _require(
            _is_int(self.after_column) and self.after_column >= 1,
            f"after_column must be an int >= 1, got {self.after_column!r}",
        )
        _require(_is_int(self.max_lines) and self.max_lines >= 1, f"max_lines must be an int >= 1, got {self.max_lines!r}")

    def fallback(self) -> Position:
        return Position(self.line, self.after_column)

    def resolve(self, source: SourceText | None) -> Position:
        if source is None:
            return self.fallback()

        for line_num in range(self.line, self.line + self.max_lines):
            text = source.line(line_num)
            if text is None:
                break
            offset = self.after_column - 1 if line_num == self.line else 0
            idx = text.find(self.pattern, offset)
            if idx >= 0:
                col = idx + 1
                return Position(line_num, col, line_num, col + len(self.pattern))

        logger.debug(
            "pattern %r not found in %s lines %d..%d",
            self.pattern,
            source.name,
            self.line,
            self.line + self.max_lines - 1,
        )
        return self.fallback()


Span = Union[Byte, Position, Search]


@runtime_checkable
class SupportsSpan(Protocol):
    """Anything that knows how to describe itself as a span."""

    def to_span(self) -> Span: ...


def byte(start: int, length: int) -> Byte:
    return Byte(start, length)


def position(
    start_line: int,
    start_column: int = 1,
    end_line: int | None = None,
    end_column: int | None = None,
) -> Position:
    return Position(start_line, start_column, end_line, end_column)


def search(*, line: int, pattern: str, after_column: int = 1, max_lines: int = 1) -> Search:
    return Search(line=line, pattern=pattern, after_column=after_column, max_lines=max_lines)


def to_span(value: object) -> Span:
    """Convert a span-like value into a span.

    Accepted forms:

    - ``Byte``, ``Position`` and ``Search`` values (returned unchanged);
    - ``(start, length)``: a byte span;
    - ``(start_line, start_col, end_line, end_col)``: a position range;
    - ``range(start, stop)`` with step 1: the bytes ``start..stop-1``;
    - any object with a ``to_span()`` method.

    A 2-tuple is always a byte span; build a point with ``position(line, col)``.
    """
    if isinstance(value, (Byte, Position, Search)):
        return value

    if isinstance(value, tuple):
        if len(value) == 2 and all(_is_int(v) for v in value):
            start, length = value
            if start >= 0 and length >= 1:
                return Byte(start, length)
        elif len(value) == 4 and all(_is_int(v) and v >= 1 for v in value):
            return Position(*value)
        raise SpanError(
            f"cannot convert tuple to span: {value!r}; "
            "expected (start, length) with start >= 0 and length >= 1, "
            "or (start_line, start_col, end_line, end_col) with all values >= 1"
        )

    if isinstance(value, range):
        if value.step == 1 and value.start >= 0 and value.stop > value.start:
            return Byte(value.start, value.stop - value.start)
        raise SpanError(
            f"cannot convert range to span: {value!r}; "
            "ranges must be non-empty, ascending, step 1, and start at >= 0"
        )

    if isinstance(value, SupportsSpan):
        out = value.to_span()
        if not isinstance(out, (Byte, Position, Search)):
            raise SpanError(f"{type(value).__name__}.to_span() returned {type(out).__name__}, not a span")
        return out

    raise SpanError(f"cannot convert {type(value).__name__} to span: {value!r}")
