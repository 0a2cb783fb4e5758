"""Exception hierarchy for Skeletor."""


class SkeletorError(Exception):
    """Base class for all errors raised by Skeletor."""


class TemplateConfigError(SkeletorError):
    """Raised when a template configuration document is malformed."""


class TemplateSourceError(SkeletorError):
    """Raised when a template source cannot be located or fetched."""


class TemplateRenderError(SkeletorError):
    """Raised when a template fails to parse or execute."""


class VariableResolutionError(SkeletorError):
    """Raised when the variable map cannot be resolved."""


class MalformedOverrideError(VariableResolutionError):
    """Raised when a --var override is not of the form KEY=VALUE."""

    def __init__(self, raw: str):
        super().__init__(f"invalid variable format: {raw} (expected KEY=VALUE)")
        self.raw = raw


class MissingRequiredVariableError(VariableResolutionError):
    """Raised when a required variable has no non-empty value."""

    def __init__(self, name: str):
        super().__init__(f"required variable {name} is not provided")
        self.name = name


class InvalidChoiceError(VariableResolutionError):
    """Raised when a value is outside a variable's declared choices."""

    def __init__(self, name: str, value: str, choices):
        super().__init__(
            f"invalid value '{value}' for {name}: must be one of {', '.join(choices)}"
        )
        self.name = name
        self.value = value
        self.choices = list(choices)


class InvalidValueError(VariableResolutionError):
    """Raised when a value cannot be converted to its declared type."""

    def __init__(self, name: str, value: str, type_name: str):
        super().__init__(f"invalid {type_name} value '{value}' for {name}")
        self.name = name
        self.value = value
        self.type_name = type_name


class MaterializationError(SkeletorError):
    """Raised when a file or directory cannot be produced."""

    def __init__(self, message: str, path=None):
        super().__init__(f"{message}: {path}" if path is not None else message)
        self.path = path


class HookError(SkeletorError):
    """Raised when a lifecycle hook command fails."""


class InvalidNameError(SkeletorError):
    """Raised when a mixin name is not usable as a Porter mixin name."""
