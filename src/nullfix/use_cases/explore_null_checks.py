"""
Heuristic discovery: `if self.x is None:` in a method means field `x` can hold None.

Only the narrow shapes below are recognized; anything else is ignored rather
than guessed at.

    if self.x == None:     if None == self.x:
    if self.x is None:     if None is self.x:
"""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]

from nullfix.domain.config import FixerConfig
from nullfix.domain.entities import Fix
from nullfix.domain.violations import Violation, ViolationKind

if TYPE_CHECKING:
    from nullfix.domain.protocols import TelemetryPort, TreeIndexProtocol
    from nullfix.infrastructure.gateways.astroid_gateway import AstroidSiteAdapter
    from nullfix.use_cases.fixer import Fixer

NULL_CHECK_OPERATORS: frozenset[str] = frozenset({"==", "is"})
FIELD_NO_INIT_MESSAGE: str = "Must be nullable"


class NullCheckExplorer:
    """Runs the null-check pattern over `if` statements and routes matches through the Fixer."""

    def __init__(
        self,
        fixer: "Fixer",
        config: FixerConfig,
        site_adapter: "AstroidSiteAdapter",
        tree_index: "TreeIndexProtocol",
        telemetry: "TelemetryPort",
    ) -> None:
        self.fixer = fixer
        self.config = config
        self.site_adapter = site_adapter
        self.tree_index = tree_index
        self.telemetry = telemetry

    def explore_module(self, module: astroid.nodes.Module) -> list[Fix]:
        fixes: list[Fix] = []
        for node in module.nodes_of_class(astroid.nodes.If):
            fix = self.explore_if(node)
            if fix is not None:
                fixes.append(fix)
        return fixes

    def explore_if(self, node: astroid.nodes.If) -> Optional[Fix]:
        """Propose a nullable annotation for the field tested against None, if the test has a supported shape."""
        match = self.match_field_null_check(node)
        if match is None:
            return None
        classdef, name = match
        resolved = self.site_adapter.resolve_instance_field(classdef, name)
        if resolved is None:
            return None
        defining_class, declaration = resolved
        if not self.config.can_fix_element(self.tree_index, declaration):
            return None
        location = self.site_adapter.field_location(defining_class, name)
        self.telemetry.debug(f"Null check on {defining_class.qname()}.{name} at line {node.lineno}")
        violation = Violation(
            kind=ViolationKind.FIELD_NO_INIT,
            message=FIELD_NO_INIT_MESSAGE,
            location=location,
        )
        return self.fixer.report(violation)

    def match_field_null_check(
        self, node: astroid.nodes.If
    ) -> Optional[tuple[astroid.nodes.ClassDef, str]]:
        """Return (enclosing class, field name) when `node` tests `self.<field>` against None."""
        test = node.test
        if not isinstance(test, astroid.nodes.Compare) or len(test.ops) != 1:
            return None
        operator, right = test.ops[0]
        if operator not in NULL_CHECK_OPERATORS:
            return None
        if _is_none(right):
            candidate = test.left
        elif _is_none(test.left):
            candidate = right
        else:
            return None
        if not isinstance(candidate, astroid.nodes.Attribute):
            return None
        receiver = candidate.expr
        if not isinstance(receiver, astroid.nodes.Name):
            return None

        method = node.frame()
        if not isinstance(method, astroid.nodes.FunctionDef) or method.type != "method":
            return None
        if not isinstance(method.parent, astroid.nodes.ClassDef):
            return None
        self_name = _first_parameter_name(method)
        if self_name is None or receiver.name != self_name:
            return None
        return method.parent, candidate.attrname


def _is_none(node: astroid.nodes.NodeNG) -> bool:
    return isinstance(node, astroid.nodes.Const) and node.value is None


def _first_parameter_name(method: astroid.nodes.FunctionDef) -> Optional[str]:
    positional = list(getattr(method.args, "posonlyargs", None) or []) + list(method.args.args or [])
    if not positional:
        return None
    return positional[0].name
