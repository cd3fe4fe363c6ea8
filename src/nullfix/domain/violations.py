"""Violations reported by the upstream nullability analyzer."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nullfix.domain.location import Location


class ViolationKind(Enum):
    """Closed set of nullability-contract breaches the analyzer can report."""

    DEREFERENCE_NULLABLE = "DEREFERENCE_NULLABLE"
    RETURN_NULLABLE = "RETURN_NULLABLE"
    PASS_NULLABLE = "PASS_NULLABLE"
    ASSIGN_FIELD_NULLABLE = "ASSIGN_FIELD_NULLABLE"
    WRONG_OVERRIDE_RETURN = "WRONG_OVERRIDE_RETURN"
    WRONG_OVERRIDE_PARAM = "WRONG_OVERRIDE_PARAM"
    METHOD_NO_INIT = "METHOD_NO_INIT"
    FIELD_NO_INIT = "FIELD_NO_INIT"
    UNBOX_NULLABLE = "UNBOX_NULLABLE"
    NONNULL_FIELD_READ_BEFORE_INIT = "NONNULL_FIELD_READ_BEFORE_INIT"
    ANNOTATION_VALUE_INVALID = "ANNOTATION_VALUE_INVALID"
    CAST_TO_NONNULL_ARG_NONNULL = "CAST_TO_NONNULL_ARG_NONNULL"
    GET_ON_EMPTY_OPTIONAL = "GET_ON_EMPTY_OPTIONAL"
    SWITCH_EXPRESSION_NULLABLE = "SWITCH_EXPRESSION_NULLABLE"
    NULLABLE_VARARGS_UNSUPPORTED = "NULLABLE_VARARGS_UNSUPPORTED"
    PRECONDITION_NOT_SATISFIED = "PRECONDITION_NOT_SATISFIED"
    POSTCONDITION_NOT_SATISFIED = "POSTCONDITION_NOT_SATISFIED"
    WRONG_OVERRIDE_PRECONDITION = "WRONG_OVERRIDE_PRECONDITION"
    WRONG_OVERRIDE_POSTCONDITION = "WRONG_OVERRIDE_POSTCONDITION"


@dataclass(frozen=True)
class Violation:
    """One analyzer finding: what went wrong, the human message, and where."""

    kind: ViolationKind
    message: str
    location: "Location"
