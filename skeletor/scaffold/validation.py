"""Checks on generated projects and on user-supplied names."""
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich.console import Console

from skeletor.core.config import DEFAULT_VALIDATION_COMMANDS
from skeletor.core.logger import get_logger
from skeletor.models.errors import InvalidNameError
from skeletor.services.hooks import platform_command

logger = get_logger(__name__)

MIXIN_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")

RESERVED_NAMES = frozenset({
    "porter", "mixin", "mixins", "bundle", "bundles",
    "installation", "installations", "credential", "credentials",
    "parameter", "parameters", "claim", "claims", "agent",
    "help", "version", "schema", "build", "install", "invoke",
    "upgrade", "uninstall",
})


def validate_mixin_name(name: str) -> None:
    """Reject names Porter cannot register as a mixin.

    Raises:
        InvalidNameError: If the name is empty, malformed or reserved
    """
    if not name:
        raise InvalidNameError("mixin name cannot be empty")
    if not MIXIN_NAME_PATTERN.match(name):
        raise InvalidNameError(
            f"mixin name '{name}' must start with a lowercase letter and contain "
            "only lowercase letters, digits and hyphens"
        )
    if name in RESERVED_NAMES:
        raise InvalidNameError(f"mixin name '{name}' is reserved by Porter")


@dataclass
class ValidationResult:
    command: str
    ok: bool
    detail: str = ""


class PostGenerationValidator:
    """Runs the toolchain over a freshly generated project.

    Failures are reported as warnings and never fail the run.
    """

    def __init__(
        self,
        console: Console,
        commands: Sequence[Tuple[str, ...]] = DEFAULT_VALIDATION_COMMANDS,
    ):
        self.console = console
        self.commands = [tuple(command) for command in commands]

    def describe(self) -> List[str]:
        return [" ".join(command) for command in self.commands]

    def validate(self, output_dir: Path) -> List[ValidationResult]:
        self.console.print("\nRunning post-generation validation...", markup=False, highlight=False)
        results = []
        for command in self.commands:
            label = " ".join(command)
            detail = self._run(command, output_dir)
            if detail is None:
                self.console.print(f"  - {label}: OK", markup=False, highlight=False)
                results.append(ValidationResult(label, True))
            else:
                logger.warning(f"'{label}' failed: {detail}")
                results.append(ValidationResult(label, False, detail))
        self.console.print("Validation complete.", markup=False, highlight=False)
        return results

    def _run(self, command: Tuple[str, ...], output_dir: Path) -> Optional[str]:
        try:
            subprocess.run(
                platform_command(command[0], list(command[1:])),
                cwd=output_dir,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            return e.stderr.strip() if e.stderr else f"exit status {e.returncode}"
        except FileNotFoundError:
            return f"{command[0]} not found"
        return None
