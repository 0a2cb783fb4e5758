"""Template configuration document models."""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skeletor.core.logger import get_logger
from skeletor.models.features import FeatureToggles

logger = get_logger(__name__)

VariableType = Literal["string", "bool", "int"]

# Looked up at the structure root, first match wins
CONFIG_FILENAMES = ("template.yml", "template.yaml", "template.json")


class VariableSpec(BaseModel):
    """A variable a template expects to be resolved before generation."""

    model_config = ConfigDict(extra='forbid')

    description: str = ""
    type: VariableType = "string"
    required: bool = False
    default: Optional[Any] = None
    choices: List[str] = Field(default_factory=list)

    @field_validator('type', mode='before')
    @classmethod
    def normalize_type(cls, v):
        """Treat an empty or unsupported type as string."""
        if v is None or v == "":
            return "string"
        if v not in ("string", "bool", "int"):
            logger.warning(f"Unsupported variable type '{v}', treating as string")
            return "string"
        return v

    @field_validator('choices', mode='before')
    @classmethod
    def stringify_choices(cls, v):
        if v is None:
            return []
        return [str(choice) for choice in v]

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def prompt_label(self, name: str) -> str:
        label = self.description or name
        if self.choices:
            label = f"{label} [{', '.join(self.choices)}]"
        return label


class TemplateConfig(BaseModel):
    """Parsed template configuration document (template.yml / template.json)."""

    model_config = ConfigDict(extra='forbid')

    name: str = ""
    description: str = ""
    variables: Dict[str, VariableSpec] = Field(default_factory=dict)
    hooks: Dict[str, List[str]] = Field(default_factory=dict)
    ignore: List[str] = Field(default_factory=list)
    conditional_paths: Dict[str, str] = Field(default_factory=dict)
    feature_toggles: Optional[FeatureToggles] = None

    @field_validator('variables', 'hooks', 'conditional_paths', mode='before')
    @classmethod
    def empty_mapping(cls, v):
        return {} if v is None else v

    @field_validator('ignore', mode='before')
    @classmethod
    def empty_list(cls, v):
        return [] if v is None else v

    @model_validator(mode='after')
    def validate_conditional_keys(self) -> 'TemplateConfig':
        """Conditional path keys are structure-relative, slash-separated paths."""
        for key in self.conditional_paths:
            if not key or key.startswith("/") or "\\" in key:
                raise ValueError(
                    f"conditional path key '{key}' must be a relative path using '/' separators"
                )
        return self

    def hook_commands(self, stage: str) -> List[str]:
        return list(self.hooks.get(stage, []))


def default_template_config(namespace: str) -> TemplateConfig:
    """Configuration used when a template source ships no document."""
    return TemplateConfig(
        name="Porter Mixin Template (Default)",
        description="Default Porter mixin template",
        variables={
            "MixinName": VariableSpec(
                description="Name of the mixin (lowercase)", required=True,
            ),
            "AuthorName": VariableSpec(description="Author name", required=True),
            "ModulePath": VariableSpec(
                description="Go module path",
                default=f"{namespace}/{{{{ MixinName }}}}",
            ),
            "MixinFeedRepoURL": VariableSpec(
                description="Git URL for the mixin feed repository "
                            "(e.g., git@github.com:YOUR/packages.git)",
            ),
            "MixinFeedBranch": VariableSpec(
                description="Branch in the mixin feed repository to commit to",
                default="main",
            ),
            "AuthorEmail": VariableSpec(description="Author's email for security contact"),
        },
    )
