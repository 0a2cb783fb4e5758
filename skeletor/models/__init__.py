"""Data models for Skeletor."""
from skeletor.models.errors import (
    HookError,
    InvalidChoiceError,
    InvalidNameError,
    InvalidValueError,
    MalformedOverrideError,
    MaterializationError,
    MissingRequiredVariableError,
    SkeletorError,
    TemplateConfigError,
    TemplateRenderError,
    TemplateSourceError,
    VariableResolutionError,
)
from skeletor.models.features import FeatureCategory, FeatureSelection, FeatureToggles
from skeletor.models.template import TemplateConfig, VariableSpec, default_template_config

__all__ = [
    'FeatureCategory',
    'FeatureSelection',
    'FeatureToggles',
    'HookError',
    'InvalidChoiceError',
    'InvalidNameError',
    'InvalidValueError',
    'MalformedOverrideError',
    'MaterializationError',
    'MissingRequiredVariableError',
    'SkeletorError',
    'TemplateConfig',
    'TemplateConfigError',
    'TemplateRenderError',
    'TemplateSourceError',
    'VariableResolutionError',
    'VariableSpec',
    'default_template_config',
]
