"""
Pylint plugin entry point - composition root for the checker plugin.
Lives in infrastructure as it creates the container and wires dependencies.

Enable with `pylint --load-plugins=nullfix.infrastructure.checker`. The config
is read from `[tool.nullfix]` in the nearest pyproject.toml.
"""

from typing import TYPE_CHECKING

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

from nullfix.infrastructure.di.container import NullFixContainer
from nullfix.use_cases.explore_null_checks import NullCheckExplorer

if TYPE_CHECKING:
    from pylint.lint import PyLinter


class NullCheckChecker(BaseChecker):
    """W9701: a field compared against None inside its own class should be declared nullable."""

    name: str = "nullfix-null-checks"
    msgs = {
        "W9701": (
            "Field '%s' of '%s' is checked against None; annotate it with %s",
            "nullable-field-suggested",
            "Emitted when an `if self.<field> is None` test shows that a field can hold None "
            "but its declaration does not say so.",
        ),
    }

    def __init__(self, linter: "PyLinter", explorer: NullCheckExplorer) -> None:
        super().__init__(linter)
        self._explorer = explorer

    def visit_if(self, node: astroid.nodes.If) -> None:
        fix = self._explorer.explore_if(node)
        if fix is None or not fix.inject:
            return
        variable = fix.location.variable
        self.add_message(
            "nullable-field-suggested",
            node=node,
            args=(variable.name if variable else "", fix.location.clazz.qualified_name, fix.annotation),
        )


def register(linter: "PyLinter") -> None:
    """Register checkers."""
    container = NullFixContainer.get_instance()
    linter.register_checker(NullCheckChecker(linter, explorer=container.get_explorer()))
