"""Template configuration management."""
from skeletor.config.loader import CONFIG_FILENAMES, TemplateConfigLoader

__all__ = ['CONFIG_FILENAMES', 'TemplateConfigLoader']
