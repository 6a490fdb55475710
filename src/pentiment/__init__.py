from __future__ import annotations

from .api import format, format_all, format_all_compact, format_compact
from .diagnostic import Diagnostic, Report, Severity
from .errors import DiagnosticFileError, SpanError
from .labels import Label, Priority
from .options import RenderOptions
from .source import SourceText
from .spans import Byte, Position, Search, Span, SupportsSpan, byte, position, search, to_span

__all__ = [
    "Byte",
    "Diagnostic",
    "DiagnosticFileError",
    "Label",
    "Position",
    "Priority",
    "RenderOptions",
    "Report",
    "Search",
    "Severity",
    "SourceText",
    "Span",
    "SpanError",
    "SupportsSpan",
    "byte",
    "format",
    "format_all",
    "format_all_compact",
    "format_compact",
    "position",
    "search",
    "to_span",
]
