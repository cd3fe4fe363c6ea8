from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from nullfix.domain.entities import Fix
    from nullfix.domain.violations import Violation


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class TreeIndexProtocol(Protocol):
    """Maps a host symbol handle to its position in a parsed source tree."""

    def get_path(self, symbol: object) -> Optional[str]:
        """Source path holding `symbol`, or None when it has no tree (library code, synthetic nodes)."""
        ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def make_dirs(self, path: str, exist_ok: bool = True) -> None:
        """Create directory and parent directories if needed."""
        ...

    def remove(self, path: str) -> None:
        """Delete a file if present."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def append_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Append text to a file (creates if missing), flushing before close."""
        ...

    def join_path(self, *paths: str) -> str:
        """Join path components into a single path string."""
        ...

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python files in path (recursive if directory)."""
        ...


class LedgerWriterProtocol(Protocol):
    """Append-only sink for proposed fixes and recorded violations."""

    def save_fix(self, fix: "Fix") -> None: ...

    def save_error(self, violation: "Violation", deep: bool) -> None: ...
