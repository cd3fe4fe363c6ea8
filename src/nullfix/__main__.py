"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from nullfix.infrastructure.config_file_loader import ConfigFileLoader
from nullfix.infrastructure.di.container import NullFixContainer
from nullfix.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = NullFixContainer(document={})

    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        site_adapter=container.get_site_adapter(),
        tree_index=container.get_tree_index(),
        load_config=ConfigFileLoader.load,
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
