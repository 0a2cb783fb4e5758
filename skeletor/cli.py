#!/usr/bin/env python3
"""Skeletor CLI - Scaffold Porter mixins from templates."""

import typer
from rich.console import Console

from skeletor.cli_create_commands import register_create_commands
from skeletor.cli_utility_commands import register_utility_commands
from skeletor.core.logger import get_logger

app = typer.Typer(
    name="skeletor",
    help="""Skeletor - Porter mixin generator

Generates a ready-to-build mixin project from the embedded template,
a local template directory, or a template repository.

Quick start:
  skeletor create --name mymixin --author "Jane Doe"
  skeletor create --name mymixin --author Jane --dry-run
  skeletor create --template-url https://github.com/org/template.git
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

register_create_commands(app, console)
register_utility_commands(app, console)

if __name__ == "__main__":
    app()
