"""The create command: generate a Porter mixin from a template."""
from typing import List, Optional

import typer
from rich.console import Console

from skeletor.core.config import SkeletorConfig
from skeletor.core.prompts import TerminalPrompter
from skeletor.models.errors import SkeletorError
from skeletor.models.features import FeatureSelection
from skeletor.scaffold.core import CreateRequest, ScaffoldManager
from skeletor.scaffold.validation import validate_mixin_name

# Module-level console instance (will be set by register function)
console: Console = Console()

COMPLIANCE_LEVELS = ("basic", "slsa-l1", "slsa-l3")


def create(
    name: Optional[str] = typer.Option(None, "--name", help="Name of the mixin (lowercase)"),
    author: Optional[str] = typer.Option(None, "--author", help="Author name"),
    module: Optional[str] = typer.Option(None, "--module", help="Go module path"),
    output: Optional[str] = typer.Option(None, "--output", help="Output directory (default: ./<name>)"),
    non_interactive: bool = typer.Option(False, "--non-interactive", help="Fail instead of prompting for missing values"),
    template_url: Optional[str] = typer.Option(None, "--template-url", help="Git URL of a remote template"),
    template_dir: Optional[str] = typer.Option(None, "--template-dir", help="Local template directory"),
    var: Optional[List[str]] = typer.Option(None, "--var", help="Template variable as KEY=VALUE (repeatable)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be generated without writing files"),
    compliance_level: str = typer.Option(
        "basic", "--compliance-level",
        help=f"Compliance level ({', '.join(COMPLIANCE_LEVELS)})",
    ),
    enable_security: bool = typer.Option(False, "--enable-security", help="Enable security features"),
    enable_compliance: bool = typer.Option(False, "--enable-compliance", help="Enable compliance frameworks"),
    enable_auth: bool = typer.Option(False, "--enable-auth", help="Enable authentication features"),
    enable_observability: bool = typer.Option(False, "--enable-observability", help="Enable observability features"),
    security_features: str = typer.Option("", "--security-features", help="Comma-separated security features"),
    compliance_frameworks: str = typer.Option("", "--compliance-frameworks", help="Comma-separated compliance frameworks"),
    auth_features: str = typer.Option("", "--auth-features", help="Comma-separated auth features"),
    observability_features: str = typer.Option("", "--observability-features", help="Comma-separated observability features"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Create a new Porter mixin from a template.

    Examples:
        skeletor create --name helm3 --author "Jane Doe"
        skeletor create --name demo --author Jane --non-interactive --dry-run
        skeletor create --template-dir ./my-template --var ComplianceLevel=slsa-l3
    """
    from skeletor.cli_support import handle_cli_error, print_info, print_success, setup_file_logging

    if verbose or log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        if name:
            validate_mixin_name(name)

        request = CreateRequest(
            name=name,
            author=author,
            module_path=module,
            output_dir=output,
            non_interactive=non_interactive,
            template_url=template_url,
            template_dir=template_dir,
            variables=list(var or []),
            dry_run=dry_run,
            compliance_level=compliance_level,
            features=FeatureSelection.from_flags(
                enable_security=enable_security,
                enable_compliance=enable_compliance,
                enable_auth=enable_auth,
                enable_observability=enable_observability,
                security_features=security_features,
                compliance_frameworks=compliance_frameworks,
                auth_features=auth_features,
                observability_features=observability_features,
            ),
        )
        manager = ScaffoldManager(
            console,
            settings=SkeletorConfig.from_env(),
            prompter=TerminalPrompter(console),
        )
        result = manager.create(request)
    except SkeletorError as e:
        handle_cli_error(e, console, verbose=verbose)

    if dry_run:
        return

    mixin_name = result.variables.get("MixinName", "")
    print_success(console, f"Mixin '{mixin_name}' created in {result.output_dir}")
    console.print("\nNext steps:")
    print_info(console, f"cd {result.output_dir}")
    print_info(console, "Review the generated code and fill in the mixin's actions")
    print_info(console, "go build ./... && go test ./...")


def register_create_commands(app: typer.Typer, shared_console: Console):
    """Register the create command with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(create)
