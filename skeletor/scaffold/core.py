"""Generation run orchestration: source, config, variables, files, hooks."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

from rich.console import Console

from skeletor.config.loader import TemplateConfigLoader
from skeletor.core.config import SkeletorConfig
from skeletor.core.logger import get_logger
from skeletor.core.prompts import Prompter
from skeletor.core.variables import OUTPUT_VARIABLE, VariableResolver
from skeletor.models.errors import HookError, MaterializationError
from skeletor.models.features import FeatureSelection
from skeletor.scaffold.engine import MaterializationReport, Materializer
from skeletor.scaffold.source import located_source
from skeletor.scaffold.templates import JinjaRenderer, TemplateRenderer
from skeletor.scaffold.validation import PostGenerationValidator
from skeletor.services.git_manager import GitManager
from skeletor.services.hooks import POST_GENERATION, HookRunner

logger = get_logger(__name__)


@dataclass
class CreateRequest:
    """Everything the create command collected from its flags."""

    name: Optional[str] = None
    author: Optional[str] = None
    module_path: Optional[str] = None
    output_dir: Optional[str] = None
    non_interactive: bool = False
    template_url: Optional[str] = None
    template_dir: Optional[str] = None
    variables: List[str] = field(default_factory=list)
    dry_run: bool = False
    compliance_level: str = "basic"
    features: FeatureSelection = field(default_factory=FeatureSelection)


@dataclass
class CreateResult:
    variables: Mapping[str, Any]
    report: MaterializationReport

    @property
    def output_dir(self) -> Path:
        return self.report.output_dir


class ScaffoldManager:
    """Runs a complete generation from a create request."""

    def __init__(
        self,
        console: Console,
        settings: Optional[SkeletorConfig] = None,
        renderer: Optional[TemplateRenderer] = None,
        prompter: Optional[Prompter] = None,
        git: Optional[GitManager] = None,
        validator: Optional[PostGenerationValidator] = None,
        hooks: Optional[HookRunner] = None,
    ):
        self.console = console
        self.settings = settings or SkeletorConfig()
        self.renderer = renderer or JinjaRenderer()
        self.git = git or GitManager(attempts=self.settings.clone_attempts)
        self.loader = TemplateConfigLoader(self.settings)
        self.resolver = VariableResolver(self.renderer, self.settings, prompter)
        self.materializer = Materializer(
            self.renderer,
            console,
            validator or PostGenerationValidator(console, self.settings.validation_commands),
        )
        self.hooks = hooks or HookRunner(self.renderer, console, self.settings.hook_allowlist)

    def create(self, request: CreateRequest) -> CreateResult:
        """Generate a project, or simulate it when ``request.dry_run`` is set.

        The cloned checkout of a remote template is removed once files and
        hooks are done, whether or not they succeeded.

        Raises:
            SkeletorError: Any source, configuration, resolution,
                materialization or hook failure
        """
        with located_source(request.template_dir, request.template_url, self.git) as source:
            logger.debug(f"Using template source {source.origin}")
            config = self.loader.load(source)
            variables = self.resolver.resolve(
                config,
                overrides=request.variables,
                name=request.name,
                author=request.author,
                module_path=request.module_path,
                output_dir=request.output_dir,
                compliance_level=request.compliance_level,
                features=request.features,
                non_interactive=request.non_interactive,
            )

            output_dir = variables.get(OUTPUT_VARIABLE)
            if not output_dir:
                raise MaterializationError("output directory could not be determined")
            output_dir = Path(output_dir)

            report = self.materializer.materialize(
                variables, source, output_dir, config, dry_run=request.dry_run
            )

            if request.dry_run:
                self._describe_hooks(config, variables)
                self.materializer.say("\n[Dry Run] Simulation complete.")
            else:
                self.hooks.run(config, POST_GENERATION, output_dir, variables)

        return CreateResult(variables=variables, report=report)

    def _describe_hooks(self, config, variables) -> None:
        say = self.materializer.say
        say("\n[Dry Run] Skipping post-generation hooks.")
        hooks = config.hook_commands(POST_GENERATION)
        if not hooks:
            return
        say("[Dry Run] Would run the following hooks:")
        try:
            commands = self.hooks.render_commands(config, POST_GENERATION, variables)
        except HookError as e:
            logger.debug(f"Listing raw hook commands: {e}")
            commands = hooks
        for command in commands:
            say(f"  - {command}")
