from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span, to_span


class Priority(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True, slots=True)
class Label:
    """A span annotated with a message.

    ``span`` may be a span value or any span-like literal accepted by
    ``to_span``; it is converted when the label is rendered. A list span
    (as decoded from JSON) is stored as a tuple so labels stay hashable.
    ``source`` names another source for cross-file annotations.
    """

    span: object
    message: str | None = None
    priority: Priority = Priority.PRIMARY
    source: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.span, list):
            object.__setattr__(self, "span", tuple(self.span))

    @classmethod
    def primary(cls, span: object, message: str | None = None, *, source: str | None = None) -> "Label":
        return cls(span=span, message=message, priority=Priority.PRIMARY, source=source)

    @classmethod
    def secondary(cls, span: object, message: str | None = None, *, source: str | None = None) -> "Label":
        return cls(span=span, message=message, priority=Priority.SECONDARY, source=source)

    @property
    def is_primary(self) -> bool:
        return self.priority is Priority.PRIMARY

    @property
    def is_secondary(self) -> bool:
        return self.priority is Priority.SECONDARY

    def resolved_span(self) -> Span:
        return to_span(self.span)
