"""Programmatic builder for config documents, the inverse of FixerConfig.load."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from nullfix.domain.annotations import DEFAULT_NONNULL, DEFAULT_NULLABLE
from nullfix.domain.config import (
    DEFAULT_OUTPUT_DIRECTORY,
    WORK_LIST_WILDCARD,
    FixerConfig,
    OutputFormat,
)
from nullfix.domain.errors import ConfigurationError

if TYPE_CHECKING:
    from nullfix.domain.protocols import FileSystemProtocol, TelemetryPort

DEFAULT_WRITER_PARAM_INDEX: int = 10000


class FixerConfigWriter:
    """
    Fluent builder for the nested config document.

    Setters return the writer so calls chain:

        FixerConfigWriter().set_suggest(True, False).set_log_error(True, True).write(path, fs)
    """

    def __init__(self) -> None:
        self._make_method_inheritance_tree = False
        self._make_call_graph = False
        self._make_field_graph = False
        self._suggest_enabled = False
        self._suggest_deep = False
        self._param_test_enabled = False
        self._log_error_enabled = False
        self._log_error_deep = False
        self._optimized = False
        self._virtual_enabled = False
        self._virtual_path = ""
        self._param_index = DEFAULT_WRITER_PARAM_INDEX
        self._nullable = DEFAULT_NULLABLE
        self._nonnull = DEFAULT_NONNULL
        self._work_list: list[str] = [WORK_LIST_WILDCARD]
        self._output_directory = DEFAULT_OUTPUT_DIRECTORY
        self._output_format = OutputFormat.DELIMITED

    @classmethod
    def from_config(cls, config: "FixerConfig") -> "FixerConfigWriter":
        """Seed a writer with every value of an already loaded config."""
        writer = cls()
        writer._suggest_enabled = config.suggest_enabled
        writer._suggest_deep = config.suggest_deep
        writer._log_error_enabled = config.log_error_enabled
        writer._log_error_deep = config.log_error_deep
        writer._make_method_inheritance_tree = config.make_method_inheritance_tree
        writer._make_call_graph = config.make_call_graph
        writer._make_field_graph = config.make_field_graph
        writer._param_test_enabled = config.param_test_enabled
        writer._param_index = config.param_index
        writer._optimized = config.optimized
        writer._virtual_enabled = config.virtual_annotations_enabled
        writer._virtual_path = config.virtual_annotations_path
        writer._nullable = config.annotations.get_nullable().name
        writer._nonnull = config.annotations.get_non_null().name
        writer._work_list = sorted(config.work_list)
        writer._output_directory = config.output_directory
        writer._output_format = config.output_format
        return writer

    def set_suggest(self, value: bool, is_deep: bool) -> "FixerConfigWriter":
        """Enable suggestions; `is_deep` only sticks when suggestions are on."""
        self._suggest_enabled = value
        self._suggest_deep = is_deep if value else False
        return self

    def set_annotations(self, suggest: bool, nullable: str, nonnull: str) -> "FixerConfigWriter":
        if not suggest:
            raise ConfigurationError("SUGGEST must be activated to configure annotations")
        self._suggest_enabled = True
        self._nullable = nullable
        self._nonnull = nonnull
        return self

    def set_log_error(self, value: bool, is_deep: bool) -> "FixerConfigWriter":
        if not value and is_deep:
            raise ConfigurationError("Log error must be enabled to activate deep log error")
        self._log_error_enabled = value
        self._log_error_deep = is_deep
        return self

    def set_method_inheritance_tree(self, value: bool) -> "FixerConfigWriter":
        self._make_method_inheritance_tree = value
        return self

    def set_method_param_test(self, value: bool, index: Optional[int] = None) -> "FixerConfigWriter":
        self._param_test_enabled = value
        if value and index is not None:
            self._param_index = index
        return self

    def set_optimized(self, value: bool) -> "FixerConfigWriter":
        self._optimized = value
        return self

    def set_make_call_graph(self, value: bool) -> "FixerConfigWriter":
        self._make_call_graph = value
        return self

    def set_make_field_graph(self, value: bool) -> "FixerConfigWriter":
        self._make_field_graph = value
        return self

    def set_work_list(self, work_list: Iterable[str]) -> "FixerConfigWriter":
        entries = sorted({w.strip() for w in work_list if w.strip()})
        self._work_list = entries or [WORK_LIST_WILDCARD]
        return self

    def set_virtualization(self, active: bool, path: str) -> "FixerConfigWriter":
        self._virtual_enabled = active
        if active:
            self._virtual_path = path
        return self

    def set_output_directory(self, path: str) -> "FixerConfigWriter":
        self._output_directory = path
        return self

    def set_output_format(self, output_format: OutputFormat) -> "FixerConfigWriter":
        self._output_format = output_format
        return self

    def to_document(self) -> dict[str, object]:
        work_list = (
            WORK_LIST_WILDCARD if WORK_LIST_WILDCARD in self._work_list else ",".join(self._work_list)
        )
        return {
            "SUGGEST": {"ACTIVE": self._suggest_enabled, "DEEP": self._suggest_deep},
            "MAKE_METHOD_INHERITANCE_TREE": self._make_method_inheritance_tree,
            "OPTIMIZED": self._optimized,
            "ANNOTATION": {"NULLABLE": self._nullable, "NONNULL": self._nonnull},
            "LOG_ERROR": {"ACTIVE": self._log_error_enabled, "DEEP": self._log_error_deep},
            "METHOD_PARAM_TEST": {"ACTIVE": self._param_test_enabled, "INDEX": self._param_index},
            "VIRTUAL": {"ACTIVE": self._virtual_enabled, "PATH": self._virtual_path},
            "MAKE_CALL_GRAPH": self._make_call_graph,
            "MAKE_FIELD_GRAPH": self._make_field_graph,
            "WORK_LIST": work_list,
            "OUTPUT_DIRECTORY": self._output_directory,
            "OUTPUT": {"FORMAT": self._output_format.value},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_document(), indent=2)

    def write(
        self,
        path: str,
        filesystem: "FileSystemProtocol",
        telemetry: Optional["TelemetryPort"] = None,
    ) -> bool:
        """Write the document as JSON. Failures are reported, not raised; returns success."""
        try:
            filesystem.write_text(path, self.to_json() + "\n")
        except OSError as exc:
            if telemetry is not None:
                telemetry.error(f"Error happened in writing config at {path}: {exc}")
            return False
        return True
