from __future__ import annotations

from .corpus import Case, generate_cases

__all__ = ["Case", "generate_cases"]
