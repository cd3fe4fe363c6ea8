"""Unit tests for the Fixer decision table."""

from unittest.mock import MagicMock

import pytest

from nullfix.domain.annotations import AnnotationFactory
from nullfix.domain.config import FixerConfig, parse_work_list
from nullfix.domain.entities import InjectionOutcome
from nullfix.domain.errors import IncompatibleFixError
from nullfix.domain.location import ClassRef, Location, MethodRef, SymbolRef
from nullfix.domain.violations import Violation, ViolationKind
from nullfix.use_cases.fixer import Fixer

NULLABLE = "javax.annotation.Nullable"


def make_fixer(**config_overrides) -> Fixer:
    values = {"suggest_enabled": True}
    values.update(config_overrides)
    return Fixer(FixerConfig(**values), MagicMock(), MagicMock())


class TestAbstention:
    def test_suggest_disabled(self, field_location) -> None:
        fixer = make_fixer(suggest_enabled=False)
        assert fixer.fix(Violation(ViolationKind.FIELD_NO_INIT, "m", field_location)) is None
        fixer.writer.save_fix.assert_not_called()

    def test_anonymous_class(self, source) -> None:
        location = Location.for_field(source, ClassRef("shop.<lambda>"), SymbolRef("x"))
        assert make_fixer().decide(Violation(ViolationKind.FIELD_NO_INIT, "m", location)) is None

    def test_out_of_scope_class(self, field_location) -> None:
        fixer = make_fixer(work_list=parse_work_list("shop.Other"))
        assert fixer.decide(Violation(ViolationKind.FIELD_NO_INIT, "m", field_location)) is None

    @pytest.mark.parametrize(
        "kind",
        [ViolationKind.DEREFERENCE_NULLABLE, ViolationKind.UNBOX_NULLABLE, ViolationKind.METHOD_NO_INIT],
    )
    def test_unmapped_kinds_produce_nothing(self, kind, field_location) -> None:
        fixer = make_fixer()
        fixer.suggest_suppression = MagicMock()
        violation = Violation(kind, "m", field_location)
        assert fixer.decide(violation) is None
        fixer.suggest_suppression.assert_called_once_with(violation)


class TestFieldFixes:
    def test_final_field_is_not_fixed(self, source, basket_class) -> None:
        location = Location.for_field(source, basket_class, SymbolRef("x", modifiers=frozenset({"final"})))
        assert make_fixer().fix(Violation(ViolationKind.FIELD_NO_INIT, "m", location)) is None

    def test_mutable_field_gets_nullable(self, field_location) -> None:
        fixer = make_fixer()
        fix = fixer.fix(Violation(ViolationKind.FIELD_NO_INIT, "m", field_location))
        assert fix is not None
        assert fix.inject is True
        assert fix.annotation == NULLABLE
        assert fix.reason == "FIELD_NO_INIT"
        fixer.writer.save_fix.assert_called_once_with(fix)

    def test_assign_field_nullable_uses_configured_marker(self, field_location) -> None:
        fixer = make_fixer(annotations=AnnotationFactory("typing.Optional", "my.NonNull"))
        fix = fixer.decide(Violation(ViolationKind.ASSIGN_FIELD_NULLABLE, "m", field_location))
        assert fix is not None and fix.annotation == "typing.Optional"

    def test_field_fix_on_parameter_is_a_contract_error(self, source, basket_class, add_item) -> None:
        location = Location.for_parameter(source, basket_class, add_item, add_item.parameters[1])
        with pytest.raises(IncompatibleFixError, match="METHOD_PARAM"):
            make_fixer().decide(Violation(ViolationKind.FIELD_NO_INIT, "m", location))

    def test_field_fix_on_return_is_a_contract_error(self, source, basket_class, add_item) -> None:
        location = Location.for_return(source, basket_class, add_item)
        with pytest.raises(IncompatibleFixError, match="METHOD_RETURN"):
            make_fixer().decide(Violation(ViolationKind.ASSIGN_FIELD_NULLABLE, "m", location))


class TestParameterFixes:
    def test_pass_nullable_to_non_null_parameter_is_not_fixed(self, source, basket_class, add_item) -> None:
        quantity = add_item.parameters[2]
        location = Location.for_parameter(source, basket_class, add_item, quantity)
        fix = make_fixer(annotations=AnnotationFactory(NULLABLE, "a.Nonnull")).decide(
            Violation(ViolationKind.PASS_NULLABLE, "m", location)
        )
        assert fix is None

    def test_pass_nullable_to_plain_parameter(self, source, basket_class, add_item) -> None:
        location = Location.for_parameter(source, basket_class, add_item, add_item.parameters[1])
        fix = make_fixer().decide(Violation(ViolationKind.PASS_NULLABLE, "m", location))
        assert fix is not None
        assert fix.inject is True
        assert fix.location.index == 1

    def test_pass_nullable_to_unknown_parameter(self, source, basket_class, add_item) -> None:
        location = Location.for_parameter(source, basket_class, add_item, SymbolRef("ghost"))
        assert make_fixer().decide(Violation(ViolationKind.PASS_NULLABLE, "m", location)) is None

    def test_wrong_override_param(self, source, basket_class, add_item) -> None:
        location = Location.for_parameter(source, basket_class, add_item, add_item.parameters[1])
        fix = make_fixer().decide(Violation(ViolationKind.WRONG_OVERRIDE_PARAM, "m", location))
        assert fix is not None and fix.outcome is InjectionOutcome.INSERT

    def test_wrong_override_param_on_field_is_a_contract_error(self, field_location) -> None:
        with pytest.raises(IncompatibleFixError, match="CLASS_FIELD"):
            make_fixer().decide(Violation(ViolationKind.WRONG_OVERRIDE_PARAM, "m", field_location))


class TestReturnFixes:
    def _return_location(self, source, basket_class, annotations=()):
        method = MethodRef("total", (SymbolRef("self"),), annotations=tuple(annotations))
        return Location.for_return(source, basket_class, method)

    def test_plain_return_is_inserted(self, source, basket_class) -> None:
        fix = make_fixer().decide(
            Violation(ViolationKind.RETURN_NULLABLE, "m", self._return_location(source, basket_class))
        )
        assert fix is not None and fix.outcome is InjectionOutcome.INSERT

    def test_non_null_return_is_conflicting(self, source, basket_class) -> None:
        location = self._return_location(source, basket_class, ["Nonnull"])
        fix = make_fixer().decide(Violation(ViolationKind.WRONG_OVERRIDE_RETURN, "m", location))
        assert fix is not None
        assert fix.outcome is InjectionOutcome.ALREADY_CONFLICTING
        assert fix.inject is False

    def test_nullable_return_is_compatible(self, source, basket_class) -> None:
        location = self._return_location(source, basket_class, ["@Nullable"])
        fix = make_fixer().decide(Violation(ViolationKind.RETURN_NULLABLE, "m", location))
        assert fix is not None
        assert fix.outcome is InjectionOutcome.ALREADY_COMPATIBLE

    def test_return_fix_on_parameter_is_a_contract_error(self, source, basket_class, add_item) -> None:
        location = Location.for_parameter(source, basket_class, add_item, add_item.parameters[1])
        with pytest.raises(IncompatibleFixError):
            make_fixer().decide(Violation(ViolationKind.RETURN_NULLABLE, "m", location))


class TestReport:
    def test_logs_error_when_enabled(self, field_location) -> None:
        fixer = make_fixer(log_error_enabled=True, log_error_deep=True)
        violation = Violation(ViolationKind.FIELD_NO_INIT, "m", field_location)
        fixer.report(violation)
        fixer.writer.save_error.assert_called_once_with(violation, True)
        fixer.writer.save_fix.assert_called_once()

    def test_skips_error_log_when_disabled(self, field_location) -> None:
        fixer = make_fixer()
        fixer.report(Violation(ViolationKind.FIELD_NO_INIT, "m", field_location))
        fixer.writer.save_error.assert_not_called()
