"""Variable resolution: turn CLI input, defaults and prompts into a variable map."""
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from skeletor.core.config import SkeletorConfig
from skeletor.core.logger import get_logger
from skeletor.core.prompts import NonInteractivePrompter, Prompter
from skeletor.models.errors import (
    InvalidChoiceError,
    InvalidValueError,
    MalformedOverrideError,
    MissingRequiredVariableError,
    TemplateRenderError,
    VariableResolutionError,
)
from skeletor.models.features import CATEGORIES, FeatureSelection
from skeletor.models.template import TemplateConfig, VariableSpec
from skeletor.scaffold.templates import TemplateRenderer, has_template_markers

logger = get_logger(__name__)

NAME_VARIABLE = "MixinName"
AUTHOR_VARIABLE = "AuthorName"
MODULE_VARIABLE = "ModulePath"
COMPLIANCE_VARIABLE = "ComplianceLevel"
OUTPUT_VARIABLE = "OutputDir"

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})
INT_PATTERN = re.compile(r"^[+-]?\d+$")
FLAG_KEYS = frozenset(spec.flag_key for spec in CATEGORIES.values())


def parse_override(raw: str):
    """Split a KEY=VALUE override; the value may itself contain '='."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise MalformedOverrideError(raw)
    return key, value


def parse_bool(name: str, raw: str) -> bool:
    if raw in TRUE_VALUES:
        return True
    if raw in FALSE_VALUES:
        return False
    raise InvalidValueError(name, raw, "bool")


def convert_value(name: str, spec: VariableSpec, raw: str) -> Any:
    """Convert a textual answer to the variable's declared type."""
    if spec.type == "bool":
        return parse_bool(name, raw)
    if spec.type == "int":
        if not INT_PATTERN.match(raw):
            raise InvalidValueError(name, raw, "int")
        return int(raw)
    return raw


def format_default(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


class VariableResolver:
    """Resolves the variable map for one generation run.

    Resolution order: compliance level seed, ``--var`` overrides, named
    flags, then declared defaults or prompts, then derived keys and the
    feature toggle keys. Nothing is written to disk here.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        settings: Optional[SkeletorConfig] = None,
        prompter: Optional[Prompter] = None,
    ):
        self.renderer = renderer
        self.settings = settings or SkeletorConfig()
        self.prompter = prompter or NonInteractivePrompter()

    def resolve(
        self,
        config: TemplateConfig,
        overrides: Iterable[str] = (),
        name: Optional[str] = None,
        author: Optional[str] = None,
        module_path: Optional[str] = None,
        output_dir: Optional[str] = None,
        compliance_level: Optional[str] = None,
        features: Optional[FeatureSelection] = None,
        non_interactive: bool = False,
    ) -> Mapping[str, Any]:
        """Resolve every declared variable.

        Returns:
            Read-only mapping of variable name to value

        Raises:
            VariableResolutionError: On malformed overrides, missing required
                variables, or values outside their type or choices
        """
        data: Dict[str, Any] = {}
        if compliance_level:
            data[COMPLIANCE_VARIABLE] = compliance_level

        for raw in overrides:
            key, value = parse_override(raw)
            data[key] = value

        for key, value in (
            (NAME_VARIABLE, name),
            (AUTHOR_VARIABLE, author),
            (MODULE_VARIABLE, module_path),
        ):
            if value:
                data[key] = value

        for key, spec in config.variables.items():
            if key in data and isinstance(data[key], str):
                data[key] = self._coerce(key, spec, data[key])

        for key, spec in config.variables.items():
            if key in data:
                continue
            if non_interactive:
                if spec.has_default:
                    data[key] = self._default_value(key, spec, data)
                elif spec.required:
                    raise MissingRequiredVariableError(key)
            else:
                data[key] = self._prompt(key, spec, data)

        self._derive(data, output_dir)

        for key, spec in config.variables.items():
            if spec.required and _is_empty(data.get(key)):
                raise MissingRequiredVariableError(key)

        base = FeatureSelection.from_toggles(config.feature_toggles)
        selection = base.overlay(features) if features is not None else base
        self._apply_features(data, selection)

        logger.debug(f"Resolved {len(data)} variables")
        return MappingProxyType(data)

    def _coerce(self, key: str, spec: VariableSpec, raw: str) -> Any:
        if spec.choices and raw not in spec.choices:
            raise InvalidChoiceError(key, raw, spec.choices)
        return convert_value(key, spec, raw)

    def _default_value(self, key: str, spec: VariableSpec, data: Mapping[str, Any]) -> Any:
        value = spec.default
        if has_template_markers(value):
            try:
                value = self.renderer.render(value, data, name=f"default of {key}")
            except TemplateRenderError as e:
                raise VariableResolutionError(str(e)) from e
        if isinstance(value, str) and spec.type != "string":
            value = convert_value(key, spec, value)
        return value

    def _prompt(self, key: str, spec: VariableSpec, data: Mapping[str, Any]) -> Any:
        default = self._default_value(key, spec, data) if spec.has_default else None
        label = spec.prompt_label(key)
        while True:
            answer = self.prompter.ask(label, format_default(default))
            if answer == "" and default is not None:
                return default
            if spec.choices and answer not in spec.choices:
                self.prompter.report(
                    f"Invalid choice. Please select one of: {', '.join(spec.choices)}"
                )
                continue
            if answer == "" and spec.required:
                self.prompter.report(f"{key} is required.")
                continue
            try:
                return convert_value(key, spec, answer)
            except InvalidValueError as e:
                self.prompter.report(str(e))

    def _derive(self, data: Dict[str, Any], output_dir: Optional[str]) -> None:
        name = data.get(NAME_VARIABLE)
        if isinstance(name, str) and name:
            data["SanitizedMixinName"] = name.replace("-", "")
            data["MixinNameCap"] = name[:1].upper() + name[1:]
            data[OUTPUT_VARIABLE] = output_dir or f"./{name}"
            if _is_empty(data.get(MODULE_VARIABLE)):
                data[MODULE_VARIABLE] = f"{self.settings.default_namespace}/{name}"
        elif output_dir:
            data[OUTPUT_VARIABLE] = output_dir

    def _apply_features(self, data: Dict[str, Any], selection: FeatureSelection) -> None:
        for key, value in selection.as_variables().items():
            current = data.get(key)
            if value or current is None:
                data[key] = value
            elif key in FLAG_KEYS and isinstance(current, str):
                data[key] = parse_bool(key, current)
