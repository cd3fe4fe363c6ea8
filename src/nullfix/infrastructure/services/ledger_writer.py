"""Append-only fix and error ledgers."""

import json
import re
from typing import Optional

from nullfix.domain.config import FixerConfig, OutputFormat
from nullfix.domain.entities import ErrorInfo, Fix
from nullfix.domain.errors import LedgerResetError
from nullfix.domain.location import SeparatedValueDisplay
from nullfix.domain.protocols import FileSystemProtocol, LedgerWriterProtocol, TelemetryPort
from nullfix.domain.violations import Violation

DELIMITER: str = "$*$"
ERROR_LEDGER_NAME: str = "errors.csv"
FIX_LEDGER_NAME: str = "fixes.csv"

_LINE_BREAKS = re.compile("[\r\n\u2028\u2029\x0b\x0c\x1c\x1d\x1e\x85]+")


class Writer(LedgerWriterProtocol):
    """
    Owns `errors.csv` and `fixes.csv` under the configured output directory.

    A channel exists only when its flag is on: the error ledger follows
    `log_error_enabled`, the fix ledger `suggest_enabled`. Both are reset at
    construction, before any record can be appended.
    """

    def __init__(
        self,
        config: FixerConfig,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        delimiter: str = DELIMITER,
    ) -> None:
        self.config = config
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.delimiter = delimiter
        self.error_path = filesystem.join_path(config.output_directory, ERROR_LEDGER_NAME)
        self.fix_path = filesystem.join_path(config.output_directory, FIX_LEDGER_NAME)
        self._reset()

    def _reset(self) -> None:
        try:
            self.filesystem.make_dirs(self.config.output_directory)
            if self.config.log_error_enabled:
                self._reset_channel(self.error_path, ErrorInfo.header_columns())
            if self.config.suggest_enabled:
                self._reset_channel(self.fix_path, Fix.header_columns())
        except OSError as exc:
            raise LedgerResetError(
                f"Could not finish resetting File at Path: {self.config.output_directory}, "
                f"Fatal Error: {exc}"
            ) from exc

    def _reset_channel(self, path: str, columns: list[str]) -> None:
        self.filesystem.remove(path)
        self.filesystem.write_text(path, self._frame(self._render_header(columns)))
        self.telemetry.debug(f"Reset ledger {path}")

    def save_fix(self, fix: Fix) -> None:
        if not self.config.suggest_enabled:
            return
        self.append_to_file(fix, self.fix_path)

    def save_error(self, violation: Violation, deep: bool) -> None:
        if not self.config.log_error_enabled:
            return
        self.append_to_file(ErrorInfo(violation, deep=deep), self.error_path)

    def append_to_file(self, record: SeparatedValueDisplay, path: str) -> None:
        """Append one physical line. I/O failures are reported and the run continues."""
        rendered = self.render(record)
        if not rendered:
            return
        try:
            self.filesystem.append_text(path, self._frame(rendered))
        except (OSError, ValueError) as exc:
            self.telemetry.error(f"Error happened for writing at file: {path}: {exc}")

    def render(self, record: SeparatedValueDisplay) -> str:
        if self.config.output_format is OutputFormat.JSONL:
            return json.dumps(dict(zip(record.columns(), record.values())), ensure_ascii=False)
        return record.display(self.delimiter)

    def _render_header(self, columns: list[str]) -> str:
        if self.config.output_format is OutputFormat.JSONL:
            return json.dumps({"columns": columns})
        return self.delimiter.join(columns)

    @staticmethod
    def _frame(rendered: str) -> str:
        return _LINE_BREAKS.sub(" ", rendered).replace("\t", "") + "\n"

    def ledger_path(self, name: str) -> Optional[str]:
        """Path of an enabled ledger by file name, or None when that channel is off."""
        if name == ERROR_LEDGER_NAME and self.config.log_error_enabled:
            return self.error_path
        if name == FIX_LEDGER_NAME and self.config.suggest_enabled:
            return self.fix_path
        return None
