"""Run-wide auto-fix configuration. Immutable value object created at the composition root."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Mapping, Optional, TypeVar

from nullfix.domain.annotations import DEFAULT_NONNULL, DEFAULT_NULLABLE, AnnotationFactory

if TYPE_CHECKING:
    from nullfix.domain.protocols import TreeIndexProtocol

T = TypeVar("T")

KEY_SEPARATOR: str = ":"
WORK_LIST_WILDCARD: str = "*"
UNBOUNDED_INDEX: int = sys.maxsize
DEFAULT_OUTPUT_DIRECTORY: str = "/tmp/NullAwayFix"


class OutputFormat(Enum):
    """Record framing for the ledgers."""

    DELIMITED = "DELIMITED"
    JSONL = "JSONL"


def value_from_key(document: object, key: str, expected: type[T]) -> Optional[T]:
    """
    Resolve a dotted-path key ("SUGGEST:ACTIVE") inside a nested document.

    Returns None for a missing key, a non-mapping along the path, or a value of
    the wrong type. Never raises.
    """
    parts = key.split(KEY_SEPARATOR)
    if not key or any(not part for part in parts):
        return None
    current: object = document
    for part in parts:
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    # bool is an int subclass; keep the two apart in both directions.
    if expected is int and isinstance(current, bool):
        return None
    if not isinstance(current, expected):
        return None
    return current


def parse_work_list(raw: str) -> frozenset[str]:
    entries = frozenset(item.strip() for item in raw.split(",") if item.strip())
    if not entries or WORK_LIST_WILDCARD in entries:
        return frozenset({WORK_LIST_WILDCARD})
    return entries


@dataclass(frozen=True)
class FixerConfig:
    """
    Feature flags and scoping rules for one run.

    Every ACTIVE-style flag was ANDed with the master switch at load time and
    every DEEP flag with its base flag, so `suggest_deep` implies
    `suggest_enabled` and `log_error_deep` implies `log_error_enabled`.
    """

    suggest_enabled: bool = False
    suggest_deep: bool = False
    log_error_enabled: bool = False
    log_error_deep: bool = False
    make_method_inheritance_tree: bool = False
    make_call_graph: bool = False
    make_field_graph: bool = False
    param_test_enabled: bool = False
    param_index: int = UNBOUNDED_INDEX
    optimized: bool = False
    virtual_annotations_enabled: bool = False
    virtual_annotations_path: str = ""
    annotations: AnnotationFactory = field(default_factory=AnnotationFactory)
    work_list: frozenset[str] = frozenset({WORK_LIST_WILDCARD})
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    output_format: OutputFormat = OutputFormat.DELIMITED

    def __post_init__(self) -> None:
        # Direct construction gets the same dependency rules as load().
        if self.suggest_deep and not self.suggest_enabled:
            object.__setattr__(self, "suggest_deep", False)
        if self.log_error_deep and not self.log_error_enabled:
            object.__setattr__(self, "log_error_deep", False)

    @classmethod
    def disabled(cls) -> "FixerConfig":
        """Defaults with the master switch off: nothing is suggested or logged."""
        return cls()

    @classmethod
    def load(cls, document: Mapping[str, object], master_enabled: bool) -> "FixerConfig":
        """Build the config from a nested document; missing or malformed keys take their defaults."""

        def flag(key: str) -> bool:
            return bool(value_from_key(document, key, bool)) and master_enabled

        suggest_enabled = flag("SUGGEST:ACTIVE")
        log_error_enabled = flag("LOG_ERROR:ACTIVE")
        raw_format = value_from_key(document, "OUTPUT:FORMAT", str) or OutputFormat.DELIMITED.value
        try:
            output_format = OutputFormat(raw_format.upper())
        except ValueError:
            output_format = OutputFormat.DELIMITED

        return cls(
            suggest_enabled=suggest_enabled,
            suggest_deep=flag("SUGGEST:DEEP") and suggest_enabled,
            log_error_enabled=log_error_enabled,
            log_error_deep=flag("LOG_ERROR:DEEP") and log_error_enabled,
            make_method_inheritance_tree=flag("MAKE_METHOD_INHERITANCE_TREE"),
            make_call_graph=flag("MAKE_CALL_GRAPH"),
            make_field_graph=flag("MAKE_FIELD_GRAPH"),
            param_test_enabled=flag("METHOD_PARAM_TEST:ACTIVE"),
            param_index=_or_default(value_from_key(document, "METHOD_PARAM_TEST:INDEX", int), UNBOUNDED_INDEX),
            optimized=flag("OPTIMIZED"),
            virtual_annotations_enabled=flag("VIRTUAL:ACTIVE"),
            virtual_annotations_path=_or_default(value_from_key(document, "VIRTUAL:PATH", str), ""),
            annotations=AnnotationFactory(
                _or_default(value_from_key(document, "ANNOTATION:NULLABLE", str), DEFAULT_NULLABLE),
                _or_default(value_from_key(document, "ANNOTATION:NONNULL", str), DEFAULT_NONNULL),
            ),
            work_list=parse_work_list(
                _or_default(value_from_key(document, "WORK_LIST", str), WORK_LIST_WILDCARD)
            ),
            output_directory=_or_default(
                value_from_key(document, "OUTPUT_DIRECTORY", str), DEFAULT_OUTPUT_DIRECTORY
            ),
            output_format=output_format,
        )

    def work_list_contains(self, class_name: str) -> bool:
        if WORK_LIST_WILDCARD in self.work_list:
            return True
        return class_name in self.work_list

    def is_out_of_scope(self, class_name: str) -> bool:
        return not self.work_list_contains(class_name)

    def can_fix_element(self, tree_index: Optional["TreeIndexProtocol"], symbol: object) -> bool:
        """True only when suggestions are on and `symbol` resolves to a position in a source tree."""
        if not self.suggest_enabled:
            return False
        if tree_index is None or symbol is None:
            return False
        return tree_index.get_path(symbol) is not None


def _or_default(value: Optional[T], default: T) -> T:
    return default if value is None else value
