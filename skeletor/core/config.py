"""Skeletor runtime configuration and settings."""
import os
from dataclasses import dataclass
from importlib import metadata
from typing import FrozenSet, Tuple

DEFAULT_NAMESPACE = "github.com/getporter"
DEFAULT_HOOK_ALLOWLIST = frozenset({"go", "git"})
DEFAULT_VALIDATION_COMMANDS = (
    ("go", "mod", "tidy"),
    ("go", "build", "./..."),
    ("go", "test", "./..."),
)


@dataclass(frozen=True)
class SkeletorConfig:
    """Runtime configuration for a generation run.

    Attributes:
        default_namespace: Prefix for the derived module path when none is given
        hook_allowlist: Executables hook commands may invoke
        validation_commands: Toolchain commands run after a real generation
        clone_attempts: Attempts made when cloning a remote template
    """

    default_namespace: str = DEFAULT_NAMESPACE
    hook_allowlist: FrozenSet[str] = DEFAULT_HOOK_ALLOWLIST
    validation_commands: Tuple[Tuple[str, ...], ...] = DEFAULT_VALIDATION_COMMANDS
    clone_attempts: int = 2

    @classmethod
    def from_env(cls) -> "SkeletorConfig":
        """Create config from environment variables.

        Environment variables:
            SKELETOR_DEFAULT_NAMESPACE: Module path namespace (default github.com/getporter)
            SKELETOR_HOOK_ALLOWLIST: Comma-separated executables allowed in hooks
            SKELETOR_CLONE_ATTEMPTS: Attempts for remote template clones

        Returns:
            SkeletorConfig instance with values from environment or defaults
        """
        allowlist = os.getenv("SKELETOR_HOOK_ALLOWLIST")
        return cls(
            default_namespace=os.getenv("SKELETOR_DEFAULT_NAMESPACE", DEFAULT_NAMESPACE).rstrip("/"),
            hook_allowlist=(
                frozenset(item.strip() for item in allowlist.split(",") if item.strip())
                if allowlist
                else DEFAULT_HOOK_ALLOWLIST
            ),
            clone_attempts=max(1, int(os.getenv("SKELETOR_CLONE_ATTEMPTS", cls.clone_attempts))),
        )


@dataclass(frozen=True)
class VersionInfo:
    """Build metadata reported by the version command."""

    version: str = "dev"
    commit: str = "none"
    build_date: str = "unknown"

    @classmethod
    def from_env(cls) -> "VersionInfo":
        try:
            version = metadata.version("skeletor")
        except metadata.PackageNotFoundError:
            from skeletor import __version__ as version
        return cls(
            version=version,
            commit=os.getenv("SKELETOR_COMMIT", "none"),
            build_date=os.getenv("SKELETOR_BUILD_DATE", "unknown"),
        )
