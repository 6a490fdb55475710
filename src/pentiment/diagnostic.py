from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Protocol, Sequence, runtime_checkable

from .labels import Label


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@runtime_checkable
class Diagnostic(Protocol):
    """What the formatters need from a diagnostic.

    ``Report`` is the stock implementation; any object exposing these
    attributes can be formatted. ``severity`` may be a ``Severity`` or its
    string value.
    """

    @property
    def message(self) -> str: ...

    @property
    def code(self) -> str | None: ...

    @property
    def severity(self) -> Severity | str: ...

    @property
    def source(self) -> str | None: ...

    @property
    def labels(self) -> Sequence[Label]: ...

    @property
    def help(self) -> Sequence[str]: ...

    @property
    def notes(self) -> Sequence[str]: ...


def severity_of(diagnostic: Diagnostic) -> Severity:
    return Severity(diagnostic.severity)


@dataclass(frozen=True, slots=True)
class Report:
    """An immutable diagnostic with a chaining builder API.

    Every ``with_*`` call returns a new report::

        report = (
            Report.error("unexpected token")
            .with_code("P001")
            .with_source("input.txt")
            .with_label(Label.primary(position(3, 7), "here"))
        )
    """

    message: str
    severity: Severity = Severity.ERROR
    code: str | None = None
    source: str | None = None
    labels: tuple[Label, ...] = ()
    help: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity(self.severity))
        object.__setattr__(self, "labels", tuple(self.labels))
        object.__setattr__(self, "help", tuple(self.help))
        object.__setattr__(self, "notes", tuple(self.notes))

    @classmethod
    def build(cls, severity: Severity | str, message: str) -> "Report":
        return cls(message=message, severity=Severity(severity))

    @classmethod
    def error(cls, message: str) -> "Report":
        return cls.build(Severity.ERROR, message)

    @classmethod
    def warning(cls, message: str) -> "Report":
        return cls.build(Severity.WARNING, message)

    @classmethod
    def info(cls, message: str) -> "Report":
        return cls.build(Severity.INFO, message)

    @classmethod
    def hint(cls, message: str) -> "Report":
        return cls.build(Severity.HINT, message)

    def with_code(self, code: str) -> "Report":
        return replace(self, code=code)

    def with_source(self, source: str) -> "Report":
        return replace(self, source=source)

    def with_label(self, label: Label) -> "Report":
        return replace(self, labels=self.labels + (label,))

    def with_labels(self, labels: Iterable[Label]) -> "Report":
        return replace(self, labels=self.labels + tuple(labels))

    def with_help(self, message: str) -> "Report":
        return replace(self, help=self.help + (message,))

    def with_note(self, message: str) -> "Report":
        return replace(self, notes=self.notes + (message,))
