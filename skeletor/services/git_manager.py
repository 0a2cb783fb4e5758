"""Git operations for fetching remote template bundles."""
import shutil
import subprocess
from pathlib import Path

from skeletor.core.logger import get_logger
from skeletor.core.retry import retry
from skeletor.models.errors import TemplateSourceError

logger = get_logger(__name__)


class GitManager:
    """Clones template repositories, retrying transient failures."""

    def __init__(self, attempts: int = 2, retry_delay: float = 1.0):
        self.attempts = max(1, attempts)
        self.retry_delay = retry_delay

    def clone_template(self, url: str, destination: Path) -> None:
        """Shallow-clone the default branch of *url* into *destination*.

        Raises:
            TemplateSourceError: If git is missing or every attempt fails
        """
        clone = retry(
            max_attempts=self.attempts,
            delay=self.retry_delay,
            exceptions=(subprocess.CalledProcessError,),
        )(self._clone)
        try:
            clone(url, destination)
        except FileNotFoundError as e:
            raise TemplateSourceError("git not found. Please install git first.") from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else str(e)
            raise TemplateSourceError(f"failed to clone template repository {url}: {stderr}") from e

    def _clone(self, url: str, destination: Path) -> None:
        if destination.exists() and any(destination.iterdir()):
            shutil.rmtree(destination)
            destination.mkdir()
        logger.debug(f"git clone --depth=1 --single-branch {url} {destination}")
        subprocess.run(
            ['git', 'clone', '--depth=1', '--single-branch', url, str(destination)],
            capture_output=True,
            text=True,
            check=True,
        )
