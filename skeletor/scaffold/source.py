"""Locating the template bundle a run generates from."""
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from skeletor.core.logger import get_logger
from skeletor.models.errors import TemplateSourceError
from skeletor.services.git_manager import GitManager

logger = get_logger(__name__)

EMBEDDED_FS_ROOT = Path(__file__).resolve().parent.parent / "templates"
EMBEDDED_ROOT = "template"
LOCAL_ROOT = "."


@dataclass
class TemplateSource:
    """A read-only tree of template files.

    Attributes:
        fs_root: Directory every source path is relative to
        root: Structure root inside fs_root ("template" for the embedded
            bundle, "." for local and cloned sources)
        cleanup_dir: Temporary directory removed when the run ends
        origin: Human readable description of where the files came from
    """

    fs_root: Path
    root: str = LOCAL_ROOT
    cleanup_dir: Optional[Path] = None
    origin: str = ""

    @property
    def structure_root(self) -> Path:
        return self.fs_root / self.root

    def source_path(self, structure_rel: str) -> str:
        """Slash-separated path of *structure_rel* as seen from fs_root."""
        if self.root == LOCAL_ROOT:
            return structure_rel
        return f"{self.root}/{structure_rel}"

    def resolve(self, source_path: str) -> Path:
        return self.fs_root / source_path

    def cleanup(self) -> None:
        if self.cleanup_dir is not None:
            shutil.rmtree(self.cleanup_dir, ignore_errors=True)
            logger.debug(f"Removed temporary template checkout {self.cleanup_dir}")
            self.cleanup_dir = None


def embedded_source() -> TemplateSource:
    return TemplateSource(EMBEDDED_FS_ROOT, EMBEDDED_ROOT, origin="embedded template")


def resolve_template_source(
    template_dir: Optional[str] = None,
    template_url: Optional[str] = None,
    git: Optional[GitManager] = None,
) -> TemplateSource:
    """Pick the template source: local directory, then remote URL, then embedded.

    Raises:
        TemplateSourceError: If the local directory is unusable or the clone fails
    """
    if template_dir:
        path = Path(template_dir)
        if template_url:
            logger.warning(f"Both a template directory and URL were given; using {path}")
        if not path.exists():
            raise TemplateSourceError(f"template directory does not exist: {path}")
        if not path.is_dir():
            raise TemplateSourceError(f"template path is not a directory: {path}")
        return TemplateSource(path, LOCAL_ROOT, origin=str(path))

    if template_url:
        git = git or GitManager()
        checkout = Path(tempfile.mkdtemp(prefix="skeletor-template-"))
        logger.info(f"Cloning template from {template_url}")
        try:
            git.clone_template(template_url, checkout)
        except TemplateSourceError:
            shutil.rmtree(checkout, ignore_errors=True)
            raise
        return TemplateSource(checkout, LOCAL_ROOT, cleanup_dir=checkout, origin=template_url)

    return embedded_source()


@contextmanager
def located_source(
    template_dir: Optional[str] = None,
    template_url: Optional[str] = None,
    git: Optional[GitManager] = None,
) -> Iterator[TemplateSource]:
    """Yield the template source and remove any temporary checkout afterwards."""
    source = resolve_template_source(template_dir, template_url, git)
    try:
        yield source
    finally:
        source.cleanup()
