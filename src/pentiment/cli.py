from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.text import Text

from . import compact, render
from .diagnostic import Report, Severity
from .documents import load_reports
from .errors import DiagnosticFileError
from .options import RenderOptions
from .source import SourceText, read_source


def _parse_source_arg(raw: str) -> tuple[str, str]:
    name, sep, path = raw.partition("=")
    if not sep or not name or not path:
        raise argparse.ArgumentTypeError(f"expected NAME=PATH, got {raw!r}")
    return name, path


def _collect_sources(reports: list[Report], explicit: list[tuple[str, str]]) -> dict[str, SourceText]:
    sources: dict[str, SourceText] = {}
    for name, path in explicit:
        sources[name] = SourceText.from_string(name, read_source(path))
    for r in reports:
        if r.source is None or r.source in sources:
            continue
        p = Path(r.source)
        if p.is_file():
            sources[r.source] = SourceText.from_string(r.source, read_source(p))
    return sources


def main(argv: list[str] | None = None, *, console: Console | None = None) -> int:
    ap = argparse.ArgumentParser(prog="pentiment", description="Render diagnostics from a JSON document")
    ap.add_argument("document", help="JSON file with a list of diagnostics")
    ap.add_argument(
        "-s",
        "--source",
        action="append",
        default=[],
        type=_parse_source_arg,
        metavar="NAME=PATH",
        help="Read source NAME from PATH (repeatable)",
    )
    ap.add_argument("-C", "--context-lines", type=int, default=None, help="Lines of context around labels")
    ap.add_argument("--compact", action="store_true", help="One line per diagnostic")
    ap.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log degraded rendering decisions")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    if args.context_lines is not None and args.context_lines < 0:
        ap.error("--context-lines must be >= 0")

    console = console or Console(highlight=False)
    try:
        reports = load_reports(args.document)
        sources = _collect_sources(reports, args.source)
    except (DiagnosticFileError, OSError, UnicodeDecodeError) as e:
        ap.error(str(e))

    if args.compact:
        out = compact.format_all(reports)
    else:
        env = RenderOptions.from_env()
        opts = RenderOptions(
            colors=env.colors and console.is_terminal and not console.no_color and not args.no_color,
            context_lines=env.context_lines if args.context_lines is None else args.context_lines,
        )
        out = render.format_all(reports, sources, opts)

    if out:
        console.print(Text.from_ansi(out), soft_wrap=True)
    return 1 if any(r.severity is Severity.ERROR for r in reports) else 0


if __name__ == "__main__":
    raise SystemExit(main())
