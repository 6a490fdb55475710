"""Load reports from a JSON diagnostics document.

The document is a list of report objects, or ``{"diagnostics": [...]}``::

    [
      {
        "severity": "error",
        "code": "E0001",
        "message": "unknown key `colour`",
        "source": "app.toml",
        "labels": [
          {"span": {"search": {"line": 3, "pattern": "colour"}}, "message": "here"}
        ],
        "help": ["did you mean `color`?"]
      }
    ]

Spans are one of ``{"byte": [start, length]}``, ``{"position": [line, col]}``,
``{"position": [line, col, end_line, end_col]}`` or ``{"search": {...}}``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .diagnostic import Report, Severity
from .errors import DiagnosticFileError, SpanError
from .labels import Label, Priority
from .spans import Byte, Position, Search, Span


def load_reports(path: str | os.PathLike[str]) -> list[Report]:
    p = Path(path)
    try:
        doc = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DiagnosticFileError(
            path=str(p),
            message=f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
        ) from e
    return parse_reports(doc, path=str(p))


def parse_reports(doc: Any, *, path: str = "<memory>") -> list[Report]:
    if isinstance(doc, dict) and "diagnostics" in doc:
        doc = doc["diagnostics"]
    if not isinstance(doc, list):
        raise DiagnosticFileError(
            path=path,
            message="expected a list of diagnostics",
            hint='wrap reports in [...] or {"diagnostics": [...]}',
        )
    return [_report(obj, path=path, where=f"diagnostics[{i}]") for i, obj in enumerate(doc)]


def _fail(path: str, where: str, message: str, hint: str | None = None) -> DiagnosticFileError:
    return DiagnosticFileError(path=path, message=f"{where}: {message}", hint=hint)


def _report(obj: Any, *, path: str, where: str) -> Report:
    if not isinstance(obj, dict):
        raise _fail(path, where, "expected an object")
    message = obj.get("message")
    if not isinstance(message, str):
        raise _fail(path, where, "missing string field 'message'")

    sev = obj.get("severity", "error")
    try:
        severity = Severity(sev)
    except ValueError:
        raise _fail(
            path, where, f"unknown severity {sev!r}", hint="use one of: error, warning, info, hint"
        ) from None

    labels = obj.get("labels", [])
    if not isinstance(labels, list):
        raise _fail(path, where, "'labels' must be a list")

    return Report(
        message=message,
        severity=severity,
        code=_opt_str(obj, "code", path=path, where=where),
        source=_opt_str(obj, "source", path=path, where=where),
        labels=tuple(_label(lab, path=path, where=f"{where}.labels[{i}]") for i, lab in enumerate(labels)),
        help=_str_list(obj, "help", path=path, where=where),
        notes=_str_list(obj, "notes", path=path, where=where),
    )


def _label(obj: Any, *, path: str, where: str) -> Label:
    if not isinstance(obj, dict) or "span" not in obj:
        raise _fail(path, where, "expected an object with a 'span'")
    prio = obj.get("priority", "primary")
    try:
        priority = Priority(prio)
    except ValueError:
        raise _fail(path, where, f"unknown priority {prio!r}", hint="use primary or secondary") from None
    return Label(
        span=_span(obj["span"], path=path, where=f"{where}.span"),
        message=_opt_str(obj, "message", path=path, where=where),
        priority=priority,
        source=_opt_str(obj, "source", path=path, where=where),
    )


def _span(obj: Any, *, path: str, where: str) -> Span:
    if not isinstance(obj, dict) or len(obj) != 1:
        raise _fail(path, where, "expected exactly one of 'byte', 'position' or 'search'")
    ((kind, args),) = obj.items()
    try:
        if kind == "byte" and isinstance(args, list) and len(args) == 2:
            return Byte(*args)
        if kind == "position" and isinstance(args, list) and len(args) in (2, 4):
            return Position(*args)
        if kind == "search" and isinstance(args, dict):
            return Search(**args)
    except (SpanError, TypeError) as e:
        raise _fail(path, where, f"invalid {kind} span: {e}") from e
    raise _fail(path, where, f"malformed {kind!r} span: {args!r}")


def _opt_str(obj: dict[str, Any], key: str, *, path: str, where: str) -> str | None:
    v = obj.get(key)
    if v is not None and not isinstance(v, str):
        raise _fail(path, where, f"'{key}' must be a string")
    return v


def _str_list(obj: dict[str, Any], key: str, *, path: str, where: str) -> tuple[str, ...]:
    v = obj.get(key, [])
    if not isinstance(v, list) or not all(isinstance(s, str) for s in v):
        raise _fail(path, where, f"'{key}' must be a list of strings")
    return tuple(v)
