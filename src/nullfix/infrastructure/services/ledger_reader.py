"""Read a ledger back into dictionaries keyed by its header columns."""

import json

from nullfix.domain.config import OutputFormat
from nullfix.domain.protocols import FileSystemProtocol
from nullfix.infrastructure.services.ledger_writer import DELIMITER


class LedgerReader:
    def __init__(
        self,
        filesystem: FileSystemProtocol,
        output_format: OutputFormat = OutputFormat.DELIMITED,
        delimiter: str = DELIMITER,
    ) -> None:
        self.filesystem = filesystem
        self.output_format = output_format
        self.delimiter = delimiter

    def read(self, path: str) -> list[dict[str, str]]:
        """
        Parse every data line of the ledger at `path`.

        Delimited ledgers are split positionally, so a value that itself
        contains the delimiter shifts the remaining columns. JSONL ledgers do
        not have that problem.
        """
        lines = [line for line in self.filesystem.read_text(path).splitlines() if line]
        if not lines:
            return []
        header, records = lines[0], lines[1:]
        if self.output_format is OutputFormat.JSONL:
            columns = json.loads(header)["columns"]
            return [
                {column: str(json.loads(line).get(column, "")) for column in columns}
                for line in records
            ]
        columns = header.split(self.delimiter)
        return [dict(zip(columns, line.split(self.delimiter))) for line in records]

    def header(self, path: str) -> list[str]:
        lines = self.filesystem.read_text(path).splitlines()
        if not lines:
            return []
        if self.output_format is OutputFormat.JSONL:
            return list(json.loads(lines[0])["columns"])
        return lines[0].split(self.delimiter)
