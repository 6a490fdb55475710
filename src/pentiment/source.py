from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _utf8_width(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead >> 5 == 0b110:
        return 2
    if lead >> 4 == 0b1110:
        return 3
    if lead >> 3 == 0b11110:
        return 4
    return 1


@dataclass(frozen=True, slots=True)
class SourceText:
    """A named text buffer that diagnostics point into.

    ``content`` is ``None`` for sources that only carry a name (the text is
    supplied later, at format time). ``lines`` is derived from ``content``
    by splitting on ``"\\n"``, so a trailing newline yields a final empty
    line and ``""`` yields ``("",)``.
    """

    name: str
    content: str | None = None
    lines: tuple[str, ...] | None = field(init=False, default=None)
    _data: bytes | None = field(init=False, default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.content is not None:
            object.__setattr__(self, "lines", tuple(self.content.split("\n")))
            # Lone surrogates (from surrogateescape reads) encode to 3 bytes each.
            object.__setattr__(self, "_data", self.content.encode("utf-8", "surrogatepass"))

    @classmethod
    def from_string(cls, name: str, content: str) -> "SourceText":
        return cls(name=name, content=content)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "SourceText":
        return cls(name=os.fspath(path), content=read_source(path))

    @classmethod
    def named(cls, name: str) -> "SourceText":
        return cls(name=name)

    def has_content(self) -> bool:
        return self.content is not None

    def line_count(self) -> int | None:
        if self.lines is None:
            return None
        return len(self.lines)

    def byte_length(self) -> int | None:
        if self._data is None:
            return None
        return len(self._data)

    def line(self, n: int) -> str | None:
        """Return line ``n`` (1-indexed), or ``None`` past the end."""
        _check_line_number(n, "line")
        if self.lines is None or n > len(self.lines):
            return None
        return self.lines[n - 1]

    def line_range(self, start: int, end: int) -> list[tuple[int, str]]:
        """Return ``(number, text)`` pairs for lines ``start..end`` inclusive.

        Lines past the end of the source are dropped.
        """
        _check_line_number(start, "start")
        _check_line_number(end, "end")
        if end < start:
            raise ValueError(f"line_range() end ({end}) must be >= start ({start})")
        if self.lines is None:
            return []
        last = min(end, len(self.lines))
        return [(n, self.lines[n - 1]) for n in range(start, last + 1)]

    def byte_to_position(self, offset: int) -> tuple[int, int] | None:
        """Convert a UTF-8 byte offset into a 1-indexed ``(line, column)``.

        Columns count code points, not bytes. ``offset == byte_length()`` is
        the position just past the last character. An offset inside a
        multi-byte sequence maps to the start of that code point.
        """
        data = self._data
        if data is None or offset < 0 or offset > len(data):
            return None

        line, column = 1, 1
        i = 0
        while i < offset:
            b = data[i]
            if b == 0x0A:
                line += 1
                column = 1
                i += 1
                continue
            width = _utf8_width(b)
            if i + width > offset:
                break
            column += 1
            i += width
        return line, column


def read_source(path: str | os.PathLike[str]) -> str:
    """Read a file as UTF-8 without newline translation.

    Byte offsets reported by other tools refer to the file as stored, so
    ``\r\n`` must survive the read.
    """
    return Path(path).read_bytes().decode("utf-8")


def _check_line_number(n: int, what: str) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"{what} must be an int, got {type(n).__name__}")
    if n < 1:
        raise ValueError(f"{what} must be >= 1, got {n}")
