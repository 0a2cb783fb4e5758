"""Template configuration document loader."""
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from skeletor.core.config import SkeletorConfig
from skeletor.core.logger import get_logger
from skeletor.models.errors import TemplateConfigError
from skeletor.models.template import CONFIG_FILENAMES, TemplateConfig, default_template_config
from skeletor.scaffold.source import TemplateSource

logger = get_logger(__name__)


class TemplateConfigLoader:
    """Loads the configuration document shipped with a template source."""

    def __init__(self, settings: Optional[SkeletorConfig] = None):
        self.settings = settings or SkeletorConfig()

    def find(self, source: TemplateSource) -> Optional[Path]:
        for filename in CONFIG_FILENAMES:
            candidate = source.structure_root / filename
            if candidate.is_file():
                return candidate
        return None

    def load(self, source: TemplateSource) -> TemplateConfig:
        """Load and validate the source's configuration document.

        Falls back to the built-in default configuration when the source
        has none.

        Raises:
            TemplateConfigError: If the document cannot be read or is invalid
        """
        config_path = self.find(source)
        if config_path is None:
            logger.warning(
                f"No {CONFIG_FILENAMES[0]} found in {source.origin or source.fs_root}, "
                "using default configuration."
            )
            return default_template_config(self.settings.default_namespace)

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise TemplateConfigError(f"failed to read template config {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise TemplateConfigError(f"failed to parse template config {config_path}: {e}") from e

        if raw is None:
            raise TemplateConfigError(f"template config {config_path} is empty")
        if not isinstance(raw, dict):
            raise TemplateConfigError(f"template config {config_path} must be a mapping")

        try:
            config = TemplateConfig.model_validate(raw)
        except ValidationError as e:
            raise TemplateConfigError(f"invalid template config {config_path}: {e}") from e

        logger.debug(f"Loaded template config '{config.name}' from {config_path}")
        return config
