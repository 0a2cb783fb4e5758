"""Template rendering for generation paths, contents, defaults and hooks."""
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Protocol

from jinja2 import Environment, BaseLoader, TemplateError, pass_context

from skeletor.models.errors import TemplateRenderError
from skeletor.models.features import feature_enabled, has_feature, join_features, split_features

TEMPLATE_SUFFIX = ".tmpl"


class TemplateRenderer(Protocol):
    """What the engine needs from a template language."""

    def render(self, source: str, variables: Mapping[str, Any], name: Optional[str] = None) -> str:
        ...

    def check(self, source: str, name: Optional[str] = None) -> None:
        ...


def has_template_markers(value: Any) -> bool:
    return isinstance(value, str) and ("{{" in value or "{%" in value)


@pass_context
def _feature_enabled(context, category: str, feature: str) -> bool:
    return feature_enabled(context, category, feature)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class JinjaRenderer:
    """Renders Jinja2 template strings against a flat variable map.

    Whitespace is kept as written; a block tag only strips what its own
    '-' marker asks for. Variables left unresolved render empty and are
    falsy in conditions; syntax errors and failing calls raise
    TemplateRenderError.
    """

    def __init__(self):
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.env.globals.update(
            now=_now,
            has_feature=has_feature,
            split_features=split_features,
            join_features=join_features,
            feature_enabled=_feature_enabled,
        )
        self.env.filters["split_features"] = split_features
        self.env.filters["join_features"] = join_features

    def render(self, source: str, variables: Mapping[str, Any], name: Optional[str] = None) -> str:
        """Render *source* with *variables*.

        Args:
            source: Template text
            variables: Values visible to the template
            name: Label used in error messages (usually a path)

        Raises:
            TemplateRenderError: If the template fails to parse or execute
        """
        try:
            return self.env.from_string(source).render(**variables)
        except TemplateError as e:
            raise TemplateRenderError(f"failed to render template {name or '<string>'}: {e}") from e

    def check(self, source: str, name: Optional[str] = None) -> None:
        """Parse *source* without executing it."""
        try:
            self.env.parse(source)
        except TemplateError as e:
            raise TemplateRenderError(f"failed to parse template {name or '<string>'}: {e}") from e
