"""Polarity annotations (nullable / non-null markers) and how to recognise them."""

from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_NULLABLE: str = "javax.annotation.Nullable"
DEFAULT_NONNULL: str = "javax.annotation.Nonnull"


@dataclass(frozen=True)
class Annotation:
    """A fully qualified annotation name."""

    name: str

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def matches(self, written: str) -> bool:
        """
        True if `written` (as it appears on a declaration) denotes this annotation.

        Accepts the qualified or simple name, with an optional leading '@' and
        trailing '()'.
        """
        text = written.strip()
        if text.startswith("@"):
            text = text[1:]
        if text.endswith("()"):
            text = text[:-2]
        return text == self.name or text == self.simple_name or text.endswith("." + self.simple_name)


class AnnotationFactory:
    """Holds the configured nullable and non-null markers."""

    def __init__(self, nullable: str = DEFAULT_NULLABLE, nonnull: str = DEFAULT_NONNULL) -> None:
        self._nullable = Annotation(nullable)
        self._nonnull = Annotation(nonnull)

    def get_nullable(self) -> Annotation:
        return self._nullable

    def get_non_null(self) -> Annotation:
        return self._nonnull

    def carries_non_null(self, written: Iterable[str]) -> bool:
        return any(self._nonnull.matches(a) for a in written)

    def carries_nullable(self, written: Iterable[str]) -> bool:
        return any(self._nullable.matches(a) for a in written)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationFactory):
            return NotImplemented
        return (self._nullable, self._nonnull) == (other._nullable, other._nonnull)

    def __hash__(self) -> int:
        return hash((self._nullable, self._nonnull))

    def __repr__(self) -> str:
        return f"AnnotationFactory(nullable={self._nullable.name!r}, nonnull={self._nonnull.name!r})"
