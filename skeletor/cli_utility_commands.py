"""Utility commands for Skeletor CLI (version)."""
from typing import Optional

import typer
from rich.console import Console

from skeletor.core.config import VersionInfo

# Module-level state (will be set by register function)
console: Console = Console()
version_info: Optional[VersionInfo] = None


def version():
    """Show Skeletor version."""
    info = version_info or VersionInfo.from_env()
    console.print(f"Skeletor {info.version}", markup=False, highlight=False)
    console.print(f"Commit: {info.commit}", markup=False, highlight=False)
    console.print(f"Built: {info.build_date}", markup=False, highlight=False)


def register_utility_commands(
    app: typer.Typer,
    shared_console: Console,
    shared_version_info: Optional[VersionInfo] = None,
):
    """Register utility commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
        shared_version_info: Build metadata to report (read from the environment when omitted)
    """
    global console, version_info
    console = shared_console
    version_info = shared_version_info

    app.command()(version)
