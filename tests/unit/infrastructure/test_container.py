"""Unit tests for NullFixContainer."""

from pathlib import Path

import pytest

from nullfix.infrastructure.di.container import NullFixContainer
from nullfix.infrastructure.services.ledger_writer import FIX_LEDGER_NAME


class TestNullFixContainer:
    def test_config_is_built_from_document(self) -> None:
        container = NullFixContainer(document={"SUGGEST": {"ACTIVE": True}})
        assert container.get_config().suggest_enabled

    def test_master_switch_is_applied(self) -> None:
        container = NullFixContainer(document={"SUGGEST": {"ACTIVE": True}}, master_enabled=False)
        assert not container.get_config().suggest_enabled

    def test_writer_is_created_lazily_once(self, tmp_path: Path) -> None:
        container = NullFixContainer(
            document={"SUGGEST": {"ACTIVE": True}, "OUTPUT_DIRECTORY": str(tmp_path)}
        )
        assert not (tmp_path / FIX_LEDGER_NAME).exists()
        writer = container.get_writer()
        assert (tmp_path / FIX_LEDGER_NAME).exists()
        assert container.get_writer() is writer
        assert container.get_fixer().writer is writer
        assert container.get_explorer().fixer is container.get_fixer()

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="not registered"):
            NullFixContainer(document={}).get("Nope")

    def test_get_instance_is_shared(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        NullFixContainer.reset()
        try:
            assert NullFixContainer.get_instance() is NullFixContainer.get_instance()
        finally:
            NullFixContainer.reset()
