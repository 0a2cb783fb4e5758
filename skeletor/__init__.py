"""Skeletor - scaffold Porter mixins from template bundles."""

__version__ = "0.3.0"
