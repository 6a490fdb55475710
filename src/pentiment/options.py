from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class RenderOptions:
    colors: bool = True
    context_lines: int = 2

    def __post_init__(self) -> None:
        if self.context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {self.context_lines}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RenderOptions":
        """Defaults honouring ``NO_COLOR`` and ``PENTIMENT_CONTEXT_LINES``."""
        env = os.environ if environ is None else environ
        colors = "NO_COLOR" not in env
        context_lines = 2
        raw = env.get("PENTIMENT_CONTEXT_LINES", "").strip()
        if raw.isdigit():
            context_lines = int(raw)
        return cls(colors=colors, context_lines=context_lines)
