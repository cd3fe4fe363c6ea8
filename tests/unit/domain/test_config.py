"""Unit tests for FixerConfig loading and scoping."""

import sys
from unittest.mock import MagicMock

import pytest

from nullfix.domain.annotations import DEFAULT_NONNULL, DEFAULT_NULLABLE
from nullfix.domain.config import (
    DEFAULT_OUTPUT_DIRECTORY,
    FixerConfig,
    OutputFormat,
    parse_work_list,
    value_from_key,
)

FULL_DOCUMENT = {
    "SUGGEST": {"ACTIVE": True, "DEEP": True},
    "LOG_ERROR": {"ACTIVE": True, "DEEP": True},
    "MAKE_METHOD_INHERITANCE_TREE": True,
    "MAKE_CALL_GRAPH": True,
    "MAKE_FIELD_GRAPH": True,
    "METHOD_PARAM_TEST": {"ACTIVE": True, "INDEX": 3},
    "OPTIMIZED": True,
    "VIRTUAL": {"ACTIVE": True, "PATH": "/tmp/virtual.json"},
    "ANNOTATION": {"NULLABLE": "typing.Optional", "NONNULL": "my.NonNull"},
    "WORK_LIST": "a.B, a.C",
    "OUTPUT_DIRECTORY": "/tmp/out",
    "OUTPUT": {"FORMAT": "jsonl"},
}


class TestValueFromKey:
    def test_nested_lookup(self) -> None:
        assert value_from_key({"SUGGEST": {"ACTIVE": True}}, "SUGGEST:ACTIVE", bool) is True

    @pytest.mark.parametrize(
        "document,key",
        [
            ({}, "SUGGEST:ACTIVE"),
            ({"SUGGEST": True}, "SUGGEST:ACTIVE"),
            ({"SUGGEST": {"ACTIVE": True}}, ""),
            ({"SUGGEST": {"ACTIVE": True}}, "SUGGEST::ACTIVE"),
            ({"SUGGEST": {"ACTIVE": "yes"}}, "SUGGEST:ACTIVE"),
            ({"SUGGEST": {"ACTIVE": 1}}, "SUGGEST:ACTIVE"),
        ],
    )
    def test_missing_or_malformed_returns_none(self, document, key) -> None:
        assert value_from_key(document, key, bool) is None

    def test_int_rejects_bool(self) -> None:
        assert value_from_key({"INDEX": True}, "INDEX", int) is None
        assert value_from_key({"INDEX": 7}, "INDEX", int) == 7


class TestLoad:
    def test_empty_document_takes_every_default(self) -> None:
        config = FixerConfig.load({}, master_enabled=True)
        assert config.suggest_enabled is False
        assert config.suggest_deep is False
        assert config.log_error_enabled is False
        assert config.log_error_deep is False
        assert config.make_method_inheritance_tree is False
        assert config.make_call_graph is False
        assert config.make_field_graph is False
        assert config.param_test_enabled is False
        assert config.param_index == sys.maxsize
        assert config.optimized is False
        assert config.virtual_annotations_enabled is False
        assert config.virtual_annotations_path == ""
        assert config.annotations.get_nullable().name == DEFAULT_NULLABLE
        assert config.annotations.get_non_null().name == DEFAULT_NONNULL
        assert config.work_list == frozenset({"*"})
        assert config.output_directory == DEFAULT_OUTPUT_DIRECTORY
        assert config.output_format is OutputFormat.DELIMITED

    def test_full_document(self) -> None:
        config = FixerConfig.load(FULL_DOCUMENT, master_enabled=True)
        assert config.suggest_enabled and config.suggest_deep
        assert config.log_error_enabled and config.log_error_deep
        assert config.make_call_graph and config.make_field_graph
        assert config.param_test_enabled
        assert config.param_index == 3
        assert config.virtual_annotations_path == "/tmp/virtual.json"
        assert config.annotations.get_nullable().name == "typing.Optional"
        assert config.work_list == frozenset({"a.B", "a.C"})
        assert config.output_directory == "/tmp/out"
        assert config.output_format is OutputFormat.JSONL

    def test_master_switch_off_disables_every_flag(self) -> None:
        config = FixerConfig.load(FULL_DOCUMENT, master_enabled=False)
        assert not config.suggest_enabled
        assert not config.suggest_deep
        assert not config.log_error_enabled
        assert not config.make_method_inheritance_tree
        assert not config.optimized
        assert not config.virtual_annotations_enabled
        # Non-flag values are still read.
        assert config.output_directory == "/tmp/out"

    @pytest.mark.parametrize("active", [False, "true", 1, None])
    def test_deep_requires_base_flag(self, active) -> None:
        document = {"SUGGEST": {"ACTIVE": active, "DEEP": True}, "LOG_ERROR": {"ACTIVE": active, "DEEP": True}}
        config = FixerConfig.load(document, master_enabled=True)
        assert config.suggest_deep is False
        assert config.log_error_deep is False

    def test_direct_construction_enforces_deep_rule(self) -> None:
        config = FixerConfig(suggest_deep=True, log_error_deep=True)
        assert config.suggest_deep is False
        assert config.log_error_deep is False

    def test_unknown_output_format_falls_back(self) -> None:
        config = FixerConfig.load({"OUTPUT": {"FORMAT": "XML"}}, master_enabled=True)
        assert config.output_format is OutputFormat.DELIMITED

    def test_disabled(self) -> None:
        assert FixerConfig.disabled() == FixerConfig()


class TestWorkList:
    def test_wildcard_puts_everything_in_scope(self) -> None:
        config = FixerConfig(work_list=parse_work_list("*"))
        assert not config.is_out_of_scope("a.B")
        assert not config.is_out_of_scope("anything.Else")

    def test_wildcard_wins_over_other_entries(self) -> None:
        config = FixerConfig(work_list=parse_work_list("a.B,*"))
        assert not config.is_out_of_scope("z.Z")

    def test_exact_membership(self) -> None:
        config = FixerConfig(work_list=parse_work_list("a.B"))
        assert not config.is_out_of_scope("a.B")
        assert config.is_out_of_scope("a.C")
        assert config.is_out_of_scope("a.b")

    def test_entries_are_stripped_and_empties_dropped(self) -> None:
        assert parse_work_list(" a.B , ,a.C,") == frozenset({"a.B", "a.C"})

    def test_blank_work_list_means_wildcard(self) -> None:
        assert parse_work_list(" , ") == frozenset({"*"})


class TestCanFixElement:
    def test_requires_suggestion(self) -> None:
        index = MagicMock()
        index.get_path.return_value = "/src/a.py"
        assert not FixerConfig().can_fix_element(index, object())

    def test_requires_both_arguments(self) -> None:
        config = FixerConfig(suggest_enabled=True)
        assert not config.can_fix_element(None, object())
        assert not config.can_fix_element(MagicMock(), None)

    def test_requires_tree_path(self) -> None:
        config = FixerConfig(suggest_enabled=True)
        index = MagicMock()
        index.get_path.return_value = None
        assert not config.can_fix_element(index, object())
        index.get_path.return_value = "/src/a.py"
        assert config.can_fix_element(index, object())
