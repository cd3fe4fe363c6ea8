"""Decision engine: map a violation to at most one annotation Fix."""

from typing import Optional

from nullfix.domain.config import FixerConfig
from nullfix.domain.entities import Fix, InjectionOutcome
from nullfix.domain.errors import IncompatibleFixError
from nullfix.domain.location import Location, LocationKind
from nullfix.domain.protocols import LedgerWriterProtocol, TelemetryPort
from nullfix.domain.violations import Violation, ViolationKind


class Fixer:
    """
    Stateless apart from its collaborators.

    `decide` is pure: it reads the config and the Location only. `fix` adds
    persistence through the ledger writer.
    """

    def __init__(
        self,
        config: FixerConfig,
        writer: LedgerWriterProtocol,
        telemetry: TelemetryPort,
    ) -> None:
        self.config = config
        self.writer = writer
        self.telemetry = telemetry

    def report(self, violation: Violation) -> Optional[Fix]:
        """Entry point for analyzers: log the violation when error logging is on, then try to fix it."""
        if self.config.log_error_enabled:
            self.writer.save_error(violation, self.config.log_error_deep)
        return self.fix(violation)

    def fix(self, violation: Violation) -> Optional[Fix]:
        """Decide, and record the Fix in the fix ledger when one is produced."""
        fix = self.decide(violation)
        if fix is None:
            self.telemetry.debug(f"No fix for {violation.kind.value} at {violation.location.clazz}")
            return None
        self.writer.save_fix(fix)
        self.telemetry.debug(
            f"Fix {fix.reason}: {fix.annotation} on {fix.location.kind.label} "
            f"{fix.location.variable or fix.location.method} ({fix.outcome.value})"
        )
        return fix

    def decide(self, violation: Violation) -> Optional[Fix]:
        if not self.config.suggest_enabled:
            return None
        location = violation.location
        if location.clazz.is_anonymous:
            return None
        if self.config.is_out_of_scope(location.clazz.qualified_name):
            return None
        return self.build_fix(violation)

    def build_fix(self, violation: Violation) -> Optional[Fix]:
        kind = violation.kind
        location = violation.location
        if kind in (ViolationKind.RETURN_NULLABLE, ViolationKind.WRONG_OVERRIDE_RETURN):
            outcome = self.add_return_nullable_fix(location)
        elif kind is ViolationKind.WRONG_OVERRIDE_PARAM:
            outcome = self.add_param_nullable_fix(location)
        elif kind is ViolationKind.PASS_NULLABLE:
            outcome = self.add_param_pass_nullable_fix(location)
        elif kind in (ViolationKind.FIELD_NO_INIT, ViolationKind.ASSIGN_FIELD_NULLABLE):
            outcome = self.add_field_nullable_fix(location)
        else:
            self.suggest_suppression(violation)
            return None
        if outcome is None:
            return None
        return Fix(
            location=location,
            annotation=self.config.annotations.get_nullable().name,
            reason=kind.value,
            outcome=outcome,
        )

    def add_field_nullable_fix(self, location: Location) -> Optional[InjectionOutcome]:
        if location.kind is not LocationKind.CLASS_FIELD:
            raise IncompatibleFixError(location.kind.label, "add_field_nullable_fix")
        # Immutable fields cannot take nullability after the fact.
        if location.variable is None or location.variable.is_final:
            return None
        return InjectionOutcome.INSERT

    def add_param_pass_nullable_fix(self, location: Location) -> Optional[InjectionOutcome]:
        if location.method is None or location.variable is None:
            return None
        parameter = location.method.find_parameter(location.variable)
        if parameter is None:
            return None
        if self.config.annotations.carries_non_null(parameter.annotations):
            return None
        return InjectionOutcome.INSERT

    def add_param_nullable_fix(self, location: Location) -> InjectionOutcome:
        if location.kind is not LocationKind.METHOD_PARAM:
            raise IncompatibleFixError(location.kind.label, "add_param_nullable_fix")
        return InjectionOutcome.INSERT

    def add_return_nullable_fix(self, location: Location) -> InjectionOutcome:
        method = location.method
        if location.kind is not LocationKind.METHOD_RETURN or method is None:
            raise IncompatibleFixError(location.kind.label, "add_return_nullable_fix")
        annotations = self.config.annotations
        if annotations.carries_non_null(method.annotations):
            return InjectionOutcome.ALREADY_CONFLICTING
        if annotations.carries_nullable(method.annotations):
            return InjectionOutcome.ALREADY_COMPATIBLE
        return InjectionOutcome.INSERT

    def suggest_suppression(self, violation: Violation) -> None:
        """Extension point for kinds no annotation can resolve; intentionally produces nothing."""
