from dataclasses import dataclass
from enum import Enum

from nullfix.domain.location import NULL_TEXT, Location
from nullfix.domain.violations import Violation


class InjectionOutcome(Enum):
    """What applying a Fix means for the text at its site."""

    INSERT = "insert"
    """The annotation is absent and must be written."""
    ALREADY_COMPATIBLE = "already_compatible"
    """The site already carries the proposed annotation."""
    ALREADY_CONFLICTING = "already_conflicting"
    """The site carries the opposite polarity; the proposal only records provenance."""


@dataclass(frozen=True)
class Fix:
    """
    A proposed single-site annotation edit.

    `reason` is the violation-kind identifier that produced it. The ledger's
    `inject` column is derived from `outcome` so existing consumers keep
    reading a boolean.
    """

    location: Location
    annotation: str
    reason: str
    outcome: InjectionOutcome = InjectionOutcome.INSERT

    @property
    def inject(self) -> bool:
        return self.outcome is InjectionOutcome.INSERT

    def columns(self) -> list[str]:
        return Fix.header_columns()

    def values(self) -> list[str]:
        return [
            self.reason,
            *self.location.values(),
            self.annotation,
            "true" if self.inject else "false",
        ]

    def display(self, delimiter: str) -> str:
        return delimiter.join(self.values())

    def header(self, delimiter: str) -> str:
        return delimiter.join(self.columns())

    @staticmethod
    def header_columns() -> list[str]:
        return [
            "reason", "location", "pkg", "class", "method", "param", "index", "uri",
            "annotation", "inject",
        ]


@dataclass(frozen=True)
class ErrorInfo:
    """Error-ledger record for one violation, optionally with its enclosing class and method."""

    violation: Violation
    deep: bool = False

    def columns(self) -> list[str]:
        return ErrorInfo.header_columns()

    def values(self) -> list[str]:
        enclosing_class = NULL_TEXT
        enclosing_method = NULL_TEXT
        if self.deep:
            location = self.violation.location
            enclosing_class = str(location.clazz)
            if location.method is not None:
                enclosing_method = str(location.method)
        return [
            self.violation.kind.value,
            self.violation.message,
            enclosing_class,
            enclosing_method,
        ]

    def display(self, delimiter: str) -> str:
        return delimiter.join(self.values())

    def header(self, delimiter: str) -> str:
        return delimiter.join(self.columns())

    @staticmethod
    def header_columns() -> list[str]:
        return ["message_type", "message", "encClass", "encMethod"]
