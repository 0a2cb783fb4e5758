"""Fixed post-render rewrites for generated Go sources.

Only applied to templated sources whose destination ends in ``.go``. The
bundled Go templates use ``mixin`` and ``YOURNAME`` as stand-ins for the
project name and author; these are swapped for the resolved values.
"""
import re
from typing import Any, Mapping

SOURCE_EXTENSION = ".go"

PLACEHOLDER_PACKAGE = re.compile(r"^package\s+mixin\b", re.MULTILINE)


def needs_replacements(destination: str, templated: bool) -> bool:
    return templated and destination.endswith(SOURCE_EXTENSION)


def apply_source_replacements(content: str, variables: Mapping[str, Any]) -> str:
    name = str(variables.get("MixinName") or "")
    package = str(variables.get("SanitizedMixinName") or name.replace("-", ""))
    author = str(variables.get("AuthorName") or "")

    if package:
        content = PLACEHOLDER_PACKAGE.sub(f"package {package}", content, count=1)

    for placeholder, value in (
        ('"YOURNAME"', f'"{author}"'),
        ('Use:  "mixin"', f'Use:  "{name}"'),
        ('StartRootSpan(ctx, "mixin")', f'StartRootSpan(ctx, "{name}")'),
    ):
        content = content.replace(placeholder, value)
    return content
