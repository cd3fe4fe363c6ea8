"""Unit tests for the pylint NullCheckChecker (W9701)."""

import unittest
from unittest.mock import MagicMock, patch

import astroid

from nullfix.domain.config import FixerConfig
from nullfix.infrastructure.checker import NullCheckChecker, register
from nullfix.infrastructure.gateways.astroid_gateway import AstroidSiteAdapter, AstroidTreeIndex
from nullfix.use_cases.explore_null_checks import NullCheckExplorer
from nullfix.use_cases.fixer import Fixer

CODE = """
class Session:
    def __init__(self):
        self.token = None

    def refresh(self):
        if self.token is None:
            return False
        if self.token is not None:
            return True
"""


class TestNullCheckChecker(unittest.TestCase):
    def setUp(self) -> None:
        self.linter = MagicMock()
        config = FixerConfig(suggest_enabled=True)
        self.writer = MagicMock()
        explorer = NullCheckExplorer(
            fixer=Fixer(config, self.writer, MagicMock()),
            config=config,
            site_adapter=AstroidSiteAdapter(),
            tree_index=AstroidTreeIndex(),
            telemetry=MagicMock(),
        )
        self.checker = NullCheckChecker(self.linter, explorer=explorer)
        module = astroid.parse(CODE, module_name="auth.session", path="/src/auth/session.py")
        self.is_none, self.is_not_none = list(module.nodes_of_class(astroid.nodes.If))

    def test_flags_field_compared_to_none(self) -> None:
        self.checker.visit_if(self.is_none)
        self.linter.add_message.assert_called_once()
        call_args = self.linter.add_message.call_args[0]
        assert call_args[0] == "nullable-field-suggested"
        assert call_args[2] is self.is_none
        assert call_args[3] == ("token", "auth.session.Session", "javax.annotation.Nullable")
        self.writer.save_fix.assert_called_once()

    def test_ignores_negated_check(self) -> None:
        self.checker.visit_if(self.is_not_none)
        self.linter.add_message.assert_not_called()

    def test_message_definition(self) -> None:
        assert NullCheckChecker.msgs["W9701"][1] == "nullable-field-suggested"


class TestRegister(unittest.TestCase):
    def test_register_adds_checker(self) -> None:
        linter = MagicMock()
        container = MagicMock()
        with patch("nullfix.infrastructure.checker.NullFixContainer.get_instance", return_value=container):
            register(linter)
        linter.register_checker.assert_called_once()
        checker = linter.register_checker.call_args[0][0]
        assert isinstance(checker, NullCheckChecker)
        container.get_explorer.assert_called_once()
