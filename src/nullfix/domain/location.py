"""
Host-independent identity of a program site that a fix can target.

A Location never holds live parser objects. Adapters in the infrastructure
layer translate native tree handles into the stable identifiers below.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from nullfix.domain.errors import LocationError

NULL_TEXT: str = "null"
PARAM_INDEX_NOT_FOUND: int = -1


class SeparatedValueDisplay(Protocol):
    """Anything a ledger can record: one header row, one data row per instance."""

    def display(self, delimiter: str) -> str: ...

    def header(self, delimiter: str) -> str: ...

    def columns(self) -> list[str]: ...

    def values(self) -> list[str]: ...


class LocationKind(Enum):
    """The four site kinds a nullability annotation can be attached to."""

    CLASS_FIELD = "CLASS_FIELD"
    METHOD_PARAM = "METHOD_PARAM"
    METHOD_RETURN = "METHOD_RETURN"
    METHOD_LOCAL_VAR = "METHOD_LOCAL_VAR"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceUnit:
    """The compilation unit (module) a site lives in."""

    package: str
    uri: str


@dataclass(frozen=True)
class ClassRef:
    """Enclosing class, by fully qualified name."""

    qualified_name: str

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def is_anonymous(self) -> bool:
        """Synthetic classes (`<anonymous ...>`, `<lambda>`) are named with a leading '<'."""
        return self.simple_name.startswith("<") or self.qualified_name.startswith("<")

    def __str__(self) -> str:
        return self.qualified_name


@dataclass(frozen=True)
class SymbolRef:
    """A field, parameter or local variable: its name plus what its declaration carries."""

    name: str
    annotations: tuple[str, ...] = ()
    modifiers: frozenset[str] = frozenset()

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class MethodRef:
    """A method with its declared parameter list and the annotations on its declaration."""

    name: str
    parameters: tuple[SymbolRef, ...] = ()
    annotations: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({', '.join(p.name for p in self.parameters)})"

    def index_of(self, symbol: SymbolRef) -> int:
        """0-based position of the first declared parameter equal to `symbol`."""
        for index, parameter in enumerate(self.parameters):
            if parameter == symbol:
                return index
        return PARAM_INDEX_NOT_FOUND

    def find_parameter(self, symbol: SymbolRef) -> Optional[SymbolRef]:
        index = self.index_of(symbol)
        return None if index == PARAM_INDEX_NOT_FOUND else self.parameters[index]

    def __str__(self) -> str:
        return self.signature


@dataclass(frozen=True)
class Location:
    """
    Where a fix applies.

    Build through the factories (`for_field`, `for_parameter`, `for_return`,
    `for_local`); each one validates its parts. A parameter location always
    carries the index of its symbol in the method signature, whatever index
    the caller passed. Equality covers source, class, method, target
    symbol and kind; the index and the line/column are not part of identity.
    """

    kind: LocationKind
    source: SourceUnit
    clazz: ClassRef
    method: Optional[MethodRef] = None
    variable: Optional[SymbolRef] = None
    index: int = field(default=0, compare=False)
    line: Optional[int] = field(default=None, compare=False)
    column: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LocationKind):
            raise LocationError(f"Location.kind must be a LocationKind, got {self.kind!r}")
        if self.kind is LocationKind.CLASS_FIELD and self.method is not None:
            raise LocationError("A CLASS_FIELD location cannot have an enclosing method")
        if self.kind is not LocationKind.CLASS_FIELD and self.method is None:
            raise LocationError(f"A {self.kind.label} location requires its enclosing method")
        if self.kind is LocationKind.METHOD_PARAM:
            index = PARAM_INDEX_NOT_FOUND if self.variable is None else self.method.index_of(self.variable)
            object.__setattr__(self, "index", index)

    @classmethod
    def for_field(
        cls,
        source: SourceUnit,
        clazz: ClassRef,
        variable: SymbolRef,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "Location":
        return cls(LocationKind.CLASS_FIELD, source, clazz, None, variable, 0, line, column)

    @classmethod
    def for_parameter(
        cls,
        source: SourceUnit,
        clazz: ClassRef,
        method: MethodRef,
        variable: SymbolRef,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "Location":
        if method is None:
            raise LocationError("A METHOD_PARAM location requires its enclosing method")
        return cls(LocationKind.METHOD_PARAM, source, clazz, method, variable, line=line, column=column)

    @classmethod
    def for_return(
        cls,
        source: SourceUnit,
        clazz: ClassRef,
        method: MethodRef,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "Location":
        return cls(LocationKind.METHOD_RETURN, source, clazz, method, None, 0, line, column)

    @classmethod
    def for_local(
        cls,
        source: SourceUnit,
        clazz: ClassRef,
        method: MethodRef,
        variable: SymbolRef,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> "Location":
        return cls(LocationKind.METHOD_LOCAL_VAR, source, clazz, method, variable, 0, line, column)

    def columns(self) -> list[str]:
        return ["location", "pkg", "class", "method", "param", "index", "uri"]

    def values(self) -> list[str]:
        return [
            self.kind.label,
            self.source.package or NULL_TEXT,
            str(self.clazz) if self.clazz is not None else NULL_TEXT,
            str(self.method) if self.method is not None else NULL_TEXT,
            str(self.variable) if self.variable is not None else NULL_TEXT,
            str(self.index),
            self.source.uri or NULL_TEXT,
        ]

    def display(self, delimiter: str) -> str:
        return delimiter.join(self.values())

    def header(self, delimiter: str) -> str:
        return delimiter.join(self.columns())
