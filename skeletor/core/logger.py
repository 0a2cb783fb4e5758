"""Logging for Skeletor: rich console output plus an optional run log file.

Every module logs through a child of the ``skeletor`` logger, which owns the
single console handler. ``--verbose`` or ``--log-file`` adds a file handler to
the same parent so a whole generation run lands in one file.
"""
import logging
import tempfile
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER = "skeletor"
DEFAULT_LOG_FILE = Path.home() / ".cache" / "skeletor" / "skeletor.log"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=console, show_path=False, show_time=False)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return root


def _log_target(log_file: Optional[str]) -> Path:
    target = Path(log_file) if log_file else DEFAULT_LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # read-only home, e.g. in containers
        target = Path(tempfile.gettempdir()) / target.name
    return target


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Write the run log to *log_file* (default ``~/.cache/skeletor/skeletor.log``).

    Only the first call attaches a handler; later calls return the file
    already in use.
    """
    root = _root()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    target = _log_target(log_file)
    level = logging.DEBUG if verbose else logging.INFO
    file_handler = logging.FileHandler(target, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    root.addHandler(file_handler)
    root.setLevel(min(root.level, level))

    root.debug(f"Logging run to {target}")
    return target


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``skeletor`` tree for *name* (usually ``__name__``)."""
    _root()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
