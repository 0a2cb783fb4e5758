"""Lifecycle hook execution for generated projects.

Hook commands come from the template configuration document, are rendered
against the resolved variables, split with shell quoting rules and run in
the output directory. Only allow-listed executables may run.
"""
import os
import shlex
import subprocess
from pathlib import Path
from typing import Any, FrozenSet, List, Mapping

from rich.console import Console

from skeletor.core.config import DEFAULT_HOOK_ALLOWLIST
from skeletor.core.logger import get_logger
from skeletor.models.errors import HookError, TemplateRenderError
from skeletor.models.template import TemplateConfig
from skeletor.scaffold.templates import TemplateRenderer

logger = get_logger(__name__)

POST_GENERATION = "post_gen"


def platform_command(executable: str, args: List[str]) -> List[str]:
    """Wrap a command for the host platform's command interpreter."""
    if os.name == "nt":
        return ["cmd", "/c", executable, *args]
    return [executable, *args]


class HookRunner:
    """Runs one stage of template hooks."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        console: Console,
        allowlist: FrozenSet[str] = DEFAULT_HOOK_ALLOWLIST,
    ):
        self.renderer = renderer
        self.console = console
        self.allowlist = allowlist

    def render_commands(self, config: TemplateConfig, stage: str, variables: Mapping[str, Any]) -> List[str]:
        """Rendered command lines of a stage, in declaration order."""
        commands = []
        for template in config.hook_commands(stage):
            try:
                commands.append(self.renderer.render(template, variables, name=f"{stage} hook"))
            except TemplateRenderError as e:
                raise HookError(f"failed to render {stage} hook '{template}': {e}") from e
        return commands

    def run(self, config: TemplateConfig, stage: str, output_dir: Path, variables: Mapping[str, Any]) -> None:
        """Run every command of *stage* inside *output_dir*, stopping at the first failure.

        Raises:
            HookError: If a command cannot be rendered, is not allowed, or exits non-zero
        """
        commands = self.render_commands(config, stage, variables)
        if not commands:
            return

        self.console.print(f"Running {stage} hooks...", markup=False, highlight=False)
        for command in commands:
            try:
                parts = shlex.split(command)
            except ValueError as e:
                raise HookError(f"hook '{command}' failed: {e}") from e
            if not parts:
                continue

            self.console.print(f"  Executing: {command}", markup=False, highlight=False)
            executable, args = parts[0], parts[1:]
            if executable not in self.allowlist:
                logger.error(f"Hook command '{executable}' is not allowed.")
                raise HookError(f"hook '{command}' failed: command '{executable}' is not allowed")

            try:
                subprocess.run(platform_command(executable, args), cwd=output_dir, check=True)
            except subprocess.CalledProcessError as e:
                raise HookError(f"hook '{command}' failed: exit status {e.returncode}") from e
            except FileNotFoundError as e:
                raise HookError(f"hook '{command}' failed: {executable} not found") from e

        self.console.print(f"{stage} hooks completed.", markup=False, highlight=False)
