"""Console + logging implementation of TelemetryPort."""

import logging

from rich.console import Console
from rich.markup import escape

from nullfix.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """Prints to a rich console and mirrors every message to the `nullfix` logger."""

    def __init__(self, name: str, color: str, welcome: str) -> None:
        self.name = name
        self.color = color
        self.welcome = welcome
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(name.lower())

    def handshake(self) -> None:
        self.console.print(f"[bold {self.color}]{self.name}[/bold {self.color}] {self.welcome}")
        self.logger.info("%s %s", self.name, self.welcome)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/{self.color}] {escape(message)}")
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]ERROR[/bold red] {escape(message)}")
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]WARNING[/yellow] {escape(message)}")
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
