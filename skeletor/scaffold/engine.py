"""Materialization engine: walk a template source and produce the output tree."""
import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

from rich.console import Console

from skeletor.core.logger import get_logger
from skeletor.models.errors import MaterializationError, TemplateConfigError, TemplateRenderError
from skeletor.models.template import CONFIG_FILENAMES, TemplateConfig
from skeletor.scaffold.replacements import apply_source_replacements, needs_replacements
from skeletor.scaffold.source import TemplateSource
from skeletor.scaffold.templates import TEMPLATE_SUFFIX, TemplateRenderer
from skeletor.scaffold.validation import PostGenerationValidator, ValidationResult

logger = get_logger(__name__)

DIR_MODE = 0o750
FILE_MODE = 0o600
VCS_DIR = ".git"


def glob_match(pattern: str, path: str) -> bool:
    """Match a slash-separated path against a glob, one segment per separator.

    ``*`` never crosses a ``/``, so ``docs/*`` matches ``docs/a.md`` but
    not ``docs/sub/a.md``.
    """
    pattern_parts = pattern.split("/")
    path_parts = path.split("/")
    if len(pattern_parts) != len(path_parts):
        return False
    return all(
        fnmatch.fnmatchcase(segment, glob)
        for segment, glob in zip(path_parts, pattern_parts)
    )


@dataclass
class PlannedEntry:
    """One destination the engine produced (or would produce)."""

    source_path: str
    destination: Path
    is_dir: bool
    redirected: bool = False


@dataclass
class MaterializationReport:
    output_dir: Path
    dry_run: bool
    entries: List[PlannedEntry] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    validation: List[ValidationResult] = field(default_factory=list)

    @property
    def directories(self) -> List[Path]:
        return [entry.destination for entry in self.entries if entry.is_dir]

    @property
    def files(self) -> List[Path]:
        return [entry.destination for entry in self.entries if not entry.is_dir]


class Materializer:
    """Turns a template source plus resolved variables into an output tree.

    Every visited entry goes through the same decision steps in both
    modes; dry-run only swaps filesystem writes for report lines, so the
    reported destinations match what a real run creates.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        console: Console,
        validator: Optional[PostGenerationValidator] = None,
    ):
        self.renderer = renderer
        self.console = console
        self.validator = validator or PostGenerationValidator(console)

    def say(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, soft_wrap=True)

    def materialize(
        self,
        variables: Mapping[str, Any],
        source: TemplateSource,
        output_dir: Path,
        config: TemplateConfig,
        dry_run: bool = False,
    ) -> MaterializationReport:
        """Generate (or simulate generating) the output tree.

        Raises:
            TemplateConfigError: If a conditional path expression does not parse
            TemplateRenderError: If a path or content template fails
            MaterializationError: If the output tree cannot be written
        """
        output_dir = Path(output_dir)
        self._check_conditional_paths(config)
        report = MaterializationReport(output_dir=output_dir, dry_run=dry_run)

        if dry_run:
            self.say("[Dry Run] Simulating file generation...")
        else:
            self._makedirs(output_dir)
            self.say("Generating mixin files...")

        self._visit_dir(source, "", variables, output_dir, config, report)

        if dry_run:
            self.say("[Dry Run] Skipping post-generation validation.")
            for command in self.validator.describe():
                self.say(f"[Dry Run] Would run: {command}")
        else:
            report.validation = self.validator.validate(output_dir)
        return report

    def _check_conditional_paths(self, config: TemplateConfig) -> None:
        for key, expression in config.conditional_paths.items():
            try:
                self.renderer.check(expression, name=f"conditional path {key}")
            except TemplateRenderError as e:
                raise TemplateConfigError(str(e)) from e

    def _visit_dir(self, source, rel_dir, variables, output_dir, config, report) -> None:
        directory = source.structure_root / rel_dir if rel_dir else source.structure_root
        try:
            children = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            raise MaterializationError(f"failed to read template directory: {e}", directory) from e

        for child in children:
            rel = f"{rel_dir}/{child.name}" if rel_dir else child.name
            is_dir = child.is_dir()
            if self._visit_entry(source, rel, is_dir, variables, output_dir, config, report) and is_dir:
                self._visit_dir(source, rel, variables, output_dir, config, report)

    def _visit_entry(self, source, rel, is_dir, variables, output_dir, config, report) -> bool:
        """Handle one entry; returns False when it (and any subtree) is skipped."""
        source_path = source.source_path(rel)

        if self._is_excluded(rel, source_path, is_dir, config):
            report.skipped.append(rel)
            return False

        effective_source = source_path
        redirected = rel in config.conditional_paths
        if redirected:
            effective_source = self._redirect(source, rel, config.conditional_paths[rel], variables)
            if effective_source is None:
                report.skipped.append(rel)
                return False

        destination = self._destination(rel, variables, output_dir)
        if destination is None:
            report.skipped.append(rel)
            return False

        report.entries.append(PlannedEntry(effective_source, destination, is_dir, redirected))
        if is_dir:
            if report.dry_run:
                self.say(f"[Dry Run] Would create directory: {destination}")
            else:
                self._makedirs(destination)
        elif report.dry_run:
            self.say(f"[Dry Run] Would write file: {destination} (from source {effective_source})")
        else:
            self._write_file(source, effective_source, destination, variables)
        return True

    def _is_excluded(self, rel: str, source_path: str, is_dir: bool, config: TemplateConfig) -> bool:
        if not is_dir and rel in CONFIG_FILENAMES:
            return True
        if VCS_DIR in rel.split("/"):
            return True
        return any(glob_match(pattern, source_path) for pattern in config.ignore)

    def _redirect(self, source, rel, expression, variables) -> Optional[str]:
        evaluated = self.renderer.render(expression, variables, name=f"conditional path {rel}").strip()
        if not evaluated:
            self.say(f"  Skipping destination {rel} (conditional source path evaluated to empty)")
            return None

        alternate = source.source_path(evaluated.strip("/"))
        resolved = source.resolve(alternate)
        if not _within(source.fs_root, resolved) or not resolved.exists():
            logger.warning(
                f"Conditional source path {alternate} (evaluated from {expression}) "
                f"for destination {rel} does not exist in the template source. Skipping."
            )
            return None
        return alternate

    def _destination(self, rel, variables, output_dir: Path) -> Optional[Path]:
        rendered = self.renderer.render(rel, variables, name=rel)
        if rendered.endswith(TEMPLATE_SUFFIX):
            rendered = rendered[:-len(TEMPLATE_SUFFIX)]
        if not rendered.strip():
            self.say(f"  Skipping empty destination path derived from {rel}")
            return None

        destination = output_dir / rendered
        if not _within(output_dir, destination):
            raise MaterializationError("destination escapes the output directory", destination)
        return destination

    def _write_file(self, source, source_path: str, destination: Path, variables) -> None:
        templated = source_path.endswith(TEMPLATE_SUFFIX)
        try:
            content = source.resolve(source_path).read_bytes()
        except OSError as e:
            raise MaterializationError(f"failed to read template file: {e}", source_path) from e

        if templated:
            try:
                text = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MaterializationError("template file is not valid UTF-8", source_path) from e
            text = self.renderer.render(text, variables, name=source_path)
            if needs_replacements(destination.name, templated):
                text = apply_source_replacements(text, variables)
            content = text.encode("utf-8")

        try:
            self._makedirs(destination.parent)
            destination.write_bytes(content)
            destination.chmod(FILE_MODE)
        except OSError as e:
            raise MaterializationError(f"failed to write file: {e}", destination) from e
        logger.debug(f"Wrote {destination} from {source_path}")

    def _makedirs(self, path: Path) -> None:
        try:
            os.makedirs(path, mode=DIR_MODE, exist_ok=True)
        except OSError as e:
            raise MaterializationError(f"failed to create directory: {e}", path) from e


def _within(base: Path, candidate: Path) -> bool:
    base_abs = os.path.abspath(base)
    candidate_abs = os.path.abspath(candidate)
    return candidate_abs == base_abs or candidate_abs.startswith(base_abs + os.sep)
