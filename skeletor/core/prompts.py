"""Interactive prompting used while resolving template variables."""
from typing import Optional, Protocol

import typer
from rich.console import Console


class Prompter(Protocol):
    """Source of answers for variables that have no value yet."""

    def ask(self, label: str, default: Optional[str] = None) -> str:
        ...

    def report(self, message: str) -> None:
        ...


class TerminalPrompter:
    """Prompts on the terminal through typer."""

    def __init__(self, console: Console):
        self.console = console

    def ask(self, label: str, default: Optional[str] = None) -> str:
        return typer.prompt(
            label,
            default=default if default is not None else "",
            show_default=bool(default),
        )

    def report(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")


class NonInteractivePrompter:
    """Prompter for unattended runs; asking is a programming error."""

    def ask(self, label: str, default: Optional[str] = None) -> str:
        raise RuntimeError(f"prompt requested in non-interactive mode: {label}")

    def report(self, message: str) -> None:
        raise RuntimeError(message)
