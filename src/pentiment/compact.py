from __future__ import annotations

from typing import Iterable

from .diagnostic import Diagnostic
from .render import location_string
from .spans import Byte, Search


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """One-line form: ``[E0001] type mismatch (calc.py:2:20)``."""
    code_part = f"[{diagnostic.code}] " if diagnostic.code else ""
    location = _location(diagnostic)
    if location is None:
        return f"{code_part}{diagnostic.message}"
    return f"{code_part}{diagnostic.message} ({location})"


def format_all(diagnostics: Iterable[Diagnostic]) -> str:
    return "\n".join(format_diagnostic(d) for d in diagnostics)


def _location(diagnostic: Diagnostic) -> str | None:
    if not diagnostic.labels:
        return None
    span = diagnostic.labels[0].resolved_span()
    if isinstance(span, Search):
        span = span.fallback()
    if isinstance(span, Byte):
        if diagnostic.source:
            return f"{diagnostic.source}:byte {span.start}"
        return f"byte {span.start}"
    return location_string(diagnostic.source, span.start_line, span.start_column)
