from typing import TYPE_CHECKING, Any, Optional, cast

from nullfix.domain.config import FixerConfig
from nullfix.infrastructure.config_file_loader import ConfigFileLoader
from nullfix.infrastructure.gateways.astroid_gateway import AstroidSiteAdapter, AstroidTreeIndex
from nullfix.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from nullfix.infrastructure.services.ledger_writer import Writer
from nullfix.interface.telemetry import ProjectTelemetry
from nullfix.use_cases.explore_null_checks import NullCheckExplorer
from nullfix.use_cases.fixer import Fixer

if TYPE_CHECKING:
    from nullfix.domain.protocols import FileSystemProtocol, TelemetryPort, TreeIndexProtocol


class NullFixContainer:
    """
    Dependency Injection Container for nullfix.

    Config, telemetry and gateways are created eagerly. The ledger writer
    resets its files when constructed, so it and everything depending on it
    (fixer, explorer) are built on first request.
    """

    _instance: Optional["NullFixContainer"] = None

    def __init__(
        self,
        document: Optional[dict[str, object]] = None,
        master_enabled: bool = True,
    ) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(document, master_enabled)

    def _register_defaults(self, document: Optional[dict[str, object]], master_enabled: bool) -> None:
        """Register default implementations for protocols."""
        if document is None:
            document = ConfigFileLoader.load_config_from_fs()
        self.register_singleton("FixerConfig", FixerConfig.load(document, master_enabled))
        self.register_singleton("TelemetryPort", ProjectTelemetry("NULLFIX", "cyan", "Nullability fixer ready"))
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("AstroidSiteAdapter", AstroidSiteAdapter())
        self.register_singleton("AstroidTreeIndex", AstroidTreeIndex())

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:  # pylint: disable=banned-any-usage
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:  # pylint: disable=banned-any-usage
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config(self) -> FixerConfig:
        return cast(FixerConfig, self.get("FixerConfig"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_site_adapter(self) -> AstroidSiteAdapter:
        return cast(AstroidSiteAdapter, self.get("AstroidSiteAdapter"))

    def get_tree_index(self) -> "TreeIndexProtocol":
        return cast("TreeIndexProtocol", self.get("AstroidTreeIndex"))

    def get_writer(self) -> Writer:
        """Ledger writer; resets the enabled ledgers the first time it is requested."""
        if "Writer" not in self._singletons:
            self.register_singleton(
                "Writer",
                Writer(self.get_config(), self.get_filesystem_gateway(), self.get_telemetry_port()),
            )
        return cast(Writer, self.get("Writer"))

    def get_fixer(self) -> Fixer:
        if "Fixer" not in self._singletons:
            self.register_singleton(
                "Fixer", Fixer(self.get_config(), self.get_writer(), self.get_telemetry_port())
            )
        return cast(Fixer, self.get("Fixer"))

    def get_explorer(self) -> NullCheckExplorer:
        if "NullCheckExplorer" not in self._singletons:
            self.register_singleton(
                "NullCheckExplorer",
                NullCheckExplorer(
                    fixer=self.get_fixer(),
                    config=self.get_config(),
                    site_adapter=self.get_site_adapter(),
                    tree_index=self.get_tree_index(),
                    telemetry=self.get_telemetry_port(),
                ),
            )
        return cast(NullCheckExplorer, self.get("NullCheckExplorer"))

    @classmethod
    def get_instance(cls) -> "NullFixContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = NullFixContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
