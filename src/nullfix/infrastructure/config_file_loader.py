"""Load the auto-fix config document from JSON, TOML or pyproject.toml. Infrastructure I/O only."""

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from nullfix.domain.errors import ConfigurationError

TOOL_SECTION: str = "nullfix"


class ConfigFileLoader:
    """
    Loads the config document. No top-level functions.

    An explicitly named document is required: failing to read or parse it is
    fatal. Discovery through pyproject.toml is best effort and yields an empty
    document when nothing is found.
    """

    @staticmethod
    def load(path: Optional[str]) -> dict[str, object]:
        if path is None:
            return ConfigFileLoader.load_config_from_fs()
        return ConfigFileLoader.load_document(Path(path))

    @staticmethod
    def load_document(path: Path) -> dict[str, object]:
        """Read a `.json` or `.toml` config document; TOML may nest it under [tool.nullfix]."""
        try:
            if path.suffix == ".toml":
                with path.open("rb") as f:
                    data = tomllib.load(f)
                return ConfigFileLoader._tool_table(data) or data
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Error in reading/parsing config at path: {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config at path: {path} is not a key-value document")
        return data

    @staticmethod
    def load_config_from_fs() -> dict[str, object]:
        """Load [tool.nullfix] from the nearest pyproject.toml above the working directory."""
        current_path = Path.cwd()
        root_path = Path(current_path.anchor)
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError):
                    return {}
                return ConfigFileLoader._tool_table(data)
            if current_path == root_path:
                return {}
            current_path = current_path.parent

    @staticmethod
    def _tool_table(data: Mapping[str, object]) -> dict[str, object]:
        tool_section = data.get("tool", {}) or {}
        if not isinstance(tool_section, Mapping):
            return {}
        table = tool_section.get(TOOL_SECTION, {}) or {}
        return dict(table) if isinstance(table, Mapping) else {}
