"""CLI entry points for nullfix - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import typer

from nullfix.domain.config import FixerConfig, OutputFormat
from nullfix.domain.config_writer import FixerConfigWriter
from nullfix.domain.entities import Fix
from nullfix.domain.errors import ConfigurationError, LedgerResetError
from nullfix.domain.protocols import FileSystemProtocol, TelemetryPort, TreeIndexProtocol
from nullfix.infrastructure.gateways.astroid_gateway import AstroidSiteAdapter
from nullfix.infrastructure.services.ledger_writer import FIX_LEDGER_NAME, Writer
from nullfix.use_cases.explore_null_checks import NullCheckExplorer
from nullfix.use_cases.fixer import Fixer


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    site_adapter: AstroidSiteAdapter
    tree_index: TreeIndexProtocol
    load_config: Callable[[Optional[str]], dict[str, object]]


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="nullfix",
            help="nullfix: turn nullability violations into annotation fix proposals. "
            "Run 'nullfix init-config' to write a config; 'nullfix explore' to scan sources.",
            add_completion=False,
        )

        @app.command("init-config")
        def init_config(
            path: Path = typer.Argument(Path("nullfix.json"), help="Where to write the JSON config document"),  # noqa: B008
            suggest: bool = typer.Option(True, "--suggest/--no-suggest", help="Propose annotation fixes"),
            suggest_deep: bool = typer.Option(False, "--suggest-deep", help="Deep suggestion mode"),
            log_error: bool = typer.Option(False, "--log-error", help="Record every violation in errors.csv"),
            log_error_deep: bool = typer.Option(
                False, "--log-error-deep", help="Add enclosing class and method to errors.csv"
            ),
            nullable: Optional[str] = typer.Option(None, help="Fully qualified nullable marker"),
            nonnull: Optional[str] = typer.Option(None, help="Fully qualified non-null marker"),
            work_list: str = typer.Option("*", help="Comma-separated class names in scope, or '*'"),
            output_directory: Optional[str] = typer.Option(None, help="Directory for fixes.csv/errors.csv"),
            output_format: OutputFormat = typer.Option(OutputFormat.DELIMITED, case_sensitive=False),
            param_test: bool = typer.Option(False, "--param-test", help="Enable method parameter testing"),
            param_index: Optional[int] = typer.Option(None, help="Parameter index for --param-test"),
            optimized: bool = typer.Option(False, "--optimized"),
            inheritance_tree: bool = typer.Option(False, "--inheritance-tree"),
            call_graph: bool = typer.Option(False, "--call-graph"),
            field_graph: bool = typer.Option(False, "--field-graph"),
            virtual_path: Optional[str] = typer.Option(None, help="Virtual annotations file; enables VIRTUAL"),
        ) -> None:
            """Write a config document built from the given flags."""
            deps.telemetry.handshake()
            writer = FixerConfigWriter()
            try:
                writer.set_suggest(suggest, suggest_deep)
                writer.set_log_error(log_error, log_error_deep)
                if nullable is not None or nonnull is not None:
                    current = FixerConfig().annotations
                    writer.set_annotations(
                        suggest,
                        nullable or current.get_nullable().name,
                        nonnull or current.get_non_null().name,
                    )
            except ConfigurationError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=2) from exc
            writer.set_work_list(work_list.split(","))
            writer.set_method_param_test(param_test, param_index)
            writer.set_optimized(optimized)
            writer.set_method_inheritance_tree(inheritance_tree)
            writer.set_make_call_graph(call_graph)
            writer.set_make_field_graph(field_graph)
            writer.set_output_format(output_format)
            if output_directory:
                writer.set_output_directory(output_directory)
            if virtual_path:
                writer.set_virtualization(True, virtual_path)
            if not writer.write(str(path), deps.filesystem, deps.telemetry):
                raise typer.Exit(code=1)
            deps.telemetry.step(f"Config written to {path}")

        @app.command()
        def explore(
            target: Path = typer.Argument(Path("."), help="File or directory to scan"),  # noqa: B008
            config: Optional[Path] = typer.Option(  # noqa: B008
                None, "--config", "-c", help="JSON or TOML config (default: [tool.nullfix] in pyproject.toml)"
            ),
            auto_fix: bool = typer.Option(True, "--auto-fix/--no-auto-fix", help="Master switch"),
        ) -> None:
            """Find `if self.x is None` checks on undeclared-nullable fields and record fix proposals."""
            deps.telemetry.handshake()
            try:
                document = deps.load_config(str(config) if config else None)
            except ConfigurationError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=2) from exc
            fixer_config = FixerConfig.load(document, auto_fix)
            try:
                ledger = Writer(fixer_config, deps.filesystem, deps.telemetry)
            except LedgerResetError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=1) from exc
            explorer = NullCheckExplorer(
                fixer=Fixer(fixer_config, ledger, deps.telemetry),
                config=fixer_config,
                site_adapter=deps.site_adapter,
                tree_index=deps.tree_index,
                telemetry=deps.telemetry,
            )

            files = deps.filesystem.glob_python_files(str(target))
            fixes: list[Fix] = []
            for file_path in files:
                module = deps.site_adapter.parse_file(file_path)
                if module is None:
                    deps.telemetry.warning(f"Skipping unparseable file: {file_path}")
                    continue
                fixes.extend(explorer.explore_module(module))

            for fix in fixes:
                location = fix.location
                deps.telemetry.step(
                    f"{location.clazz}.{location.variable}: {fix.annotation} ({fix.outcome.value})"
                )
            deps.telemetry.step(f"Scanned {len(files)} file(s), proposed {len(fixes)} fix(es)")
            fix_ledger = ledger.ledger_path(FIX_LEDGER_NAME)
            if fix_ledger is not None:
                deps.telemetry.step(f"Fix ledger: {fix_ledger}")

        return app
