from __future__ import annotations

from dataclasses import dataclass


class SpanError(ValueError):
    """Raised when a span is built from out-of-domain values."""


@dataclass(slots=True)
class DiagnosticFileError(Exception):
    path: str
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.path}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base
