#!/usr/bin/env python3
"""gpc CLI - create a new project from a template."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gpc import __version__
from gpc.cli_support import handle_cli_error, print_success, print_summary
from gpc.core.creator import ProjectCreator
from gpc.core.errors import GpcError
from gpc.core.logger import get_logger, set_verbose, setup_file_logging
from gpc.models.source import ProjectOptions, TemplateSource

app = typer.Typer(
    name="gpc",
    help="""gpc - Git Project Creator

Create a new project from a git repository, a local directory or a tarball,
filling in the variables declared in the template's .gpc.yml.

Quick start:
  gpc -r https://github.com/org/template -d my-project
  gpc -e ./templates/service -d my-service -D '{"Name": "billing"}'
  gpc -u https://example.com/template.tar.gz -d my-project -n
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _version_callback(value: bool):
    if value:
        console.print(f"gpc {__version__}")
        raise typer.Exit()


@app.command()
def create(
    ctx: typer.Context,
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Git repository URL to clone"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Git branch to clone"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Git tag to clone"),
    commit: Optional[str] = typer.Option(None, "--commit", "-c", help="Git commit to check out"),
    existing: Optional[str] = typer.Option(None, "--existing", "-e", help="Existing directory to be used as a template"),
    download: Optional[str] = typer.Option(
        None, "--download", "-u",
        help="URL to download the template from (tar.gz, tar.xz or tar.bz2, e.g. GitHub releases)",
    ),
    data: Optional[str] = typer.Option(
        None, "--data", "-D", envvar="GPC_DATA",
        help="Data for the template in JSON or YAML format",
    ),
    directory: Optional[str] = typer.Option(
        None, "--dir", "-d",
        help="Destination directory for the new project (default: named after the source)",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", "-o", help="Overwrite existing directory if it exists"),
    non_interactive: bool = typer.Option(
        False, "--non-interactive", "-n", envvar="GPC_NON_INTERACTIVE",
        help="Never prompt; use supplied data and defaults",
    ),
    coerce_input: bool = typer.Option(
        False, "--coerce-input",
        help="Convert prompt answers to the type of the variable's default",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", envvar="GPC_LOG_FILE", help="Also write the log to this file"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit",
    ),
):
    """Create a new project from a template.

    Exactly one of --repo, --existing or --download selects the template.
    Files matching the template patterns of .gpc.yml are rendered with the
    declared variables; values come from --data, then prompts, then defaults.

    Examples:
        gpc -r git@github.com:org/template.git -b main -d api
        gpc -e ../template -d api -D 'Name: api' --non-interactive
    """
    if not (repo or existing or download):
        typer.echo(ctx.get_usage())
        typer.echo("\nOne of --repo, --existing or --download is required. See 'gpc --help'.")
        raise typer.Exit(1)

    set_verbose(verbose)
    setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        source = TemplateSource.from_options(
            repo=repo,
            branch=branch,
            tag=tag,
            commit=commit,
            existing=existing,
            download=download,
        )
        options = ProjectOptions(
            source=source,
            destination=Path(directory) if directory else source.default_destination(),
            data=data or "",
            interactive=not non_interactive,
            overwrite=overwrite,
            coerce_prompt_input=coerce_input,
        )
        result = ProjectCreator().create_project(options)
    except (GpcError, OSError) as e:
        logger.debug(f"Project creation failed: {e!r}")
        handle_cli_error(e, verbose=verbose)

    print_success(console, "Project successfully created!")
    print_summary(console, result)


if __name__ == "__main__":
    app()
