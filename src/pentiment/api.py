from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping, Union

from . import compact, render
from .diagnostic import Diagnostic
from .options import RenderOptions
from .source import SourceText, read_source

logger = logging.getLogger(__name__)

Sources = Union[SourceText, Mapping[str, Union[SourceText, str]], str, os.PathLike, None]


def format(
    diagnostic: Diagnostic,
    sources: Sources,
    options: RenderOptions | None = None,
    *,
    colors: bool | None = None,
    context_lines: int | None = None,
) -> str:
    """Render one diagnostic with source context.

    ``sources`` may be a ``SourceText``, a mapping of source ids to
    ``SourceText`` values or raw strings, or a path to read from disk.
    Without ``options`` the defaults come from the environment.
    """
    lookup = _normalize_sources(sources, [diagnostic.source])
    return render.format_diagnostic(
        diagnostic,
        lookup,
        options or RenderOptions.from_env(),
        colors=colors,
        context_lines=context_lines,
    )


def format_all(
    diagnostics: Iterable[Diagnostic],
    sources: Sources,
    options: RenderOptions | None = None,
    *,
    colors: bool | None = None,
    context_lines: int | None = None,
) -> str:
    diags = list(diagnostics)
    lookup = _normalize_sources(sources, [d.source for d in diags])
    return render.format_all(
        diags,
        lookup,
        options or RenderOptions.from_env(),
        colors=colors,
        context_lines=context_lines,
    )


def format_compact(diagnostic: Diagnostic) -> str:
    return compact.format_diagnostic(diagnostic)


def format_all_compact(diagnostics: Iterable[Diagnostic]) -> str:
    return compact.format_all(diagnostics)


def _normalize_sources(sources: Sources, source_ids: list[str | None]) -> render.SourceLookup:
    if sources is None:
        return {}
    if isinstance(sources, (SourceText, Mapping)):
        return sources

    path = Path(sources)
    try:
        if not path.is_file():
            return {}
    except OSError:
        # e.g. ENAMETOOLONG for a long string that was never meant as a path
        logger.debug("cannot stat %r as a source path", sources)
        return {}
    content = read_source(path)
    ids = [s for s in dict.fromkeys(source_ids) if s is not None] or [os.fspath(sources)]
    return {name: SourceText.from_string(name, content) for name in ids}
