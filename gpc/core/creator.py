"""Project creation pipeline.

Steps run strictly in order and the first failure ends the run:

    check destination → fetch template → read config → resolve variables → render

Nothing is undone on failure; a failed render leaves the fetched,
partially rendered project on disk.
"""
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Optional

import typer

from gpc.core.errors import DestinationExistsError
from gpc.core.logger import get_logger
from gpc.core.renderer import TemplateRenderer
from gpc.core.runner import CommandRunner
from gpc.core.template_config import load_template_config
from gpc.core.variables import Prompter, parse_data, prompt_line, resolve_variables
from gpc.models.source import ProjectOptions, ProjectResult
from gpc.services.sources import TemplateSourceResolver

logger = get_logger(__name__)

Confirmer = Callable[[str], bool]


def confirm_overwrite(message: str) -> bool:
    return typer.confirm(message, default=False)


class ProjectCreator:
    """Creates projects from templates.

    Holds only the collaborators that talk to the outside world (external
    commands, prompts, confirmation), so tests can swap them out. All
    per-run settings come in through ``ProjectOptions``.
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        prompt: Optional[Prompter] = None,
        confirm: Optional[Confirmer] = None,
        resolver: Optional[TemplateSourceResolver] = None,
    ):
        self.runner = runner or CommandRunner()
        self.prompt = prompt or prompt_line
        self.confirm = confirm or confirm_overwrite
        self.resolver = resolver or TemplateSourceResolver(self.runner)

    def create_project(self, options: ProjectOptions) -> ProjectResult:
        """Fetch the template, resolve its variables and render it.

        Args:
            options: Source, destination and behavior flags for this run

        Returns:
            ProjectResult describing what was created

        Raises:
            GpcError: Any step failed
        """
        destination = options.destination

        self.check_destination(destination, options)

        # Bad inline data should fail before anything is fetched
        data = parse_data(options.data)

        self.resolver.resolve(options.source, destination)

        config = load_template_config(destination)
        if config.is_empty:
            logger.info("Template has no .gpc.yml, files are copied as-is")
        else:
            logger.debug(
                f"Template declares {len(config.templates)} pattern(s) and {len(config.variables)} variable(s)"
            )

        variables = resolve_variables(
            config.variables,
            data,
            interactive=options.interactive,
            prompt=self.prompt,
            coerce=options.coerce_prompt_input,
        )

        renderer = TemplateRenderer(config.templates)
        rendered = renderer.render_tree(destination, MappingProxyType(variables))
        logger.info(f"Rendered {len(rendered)} template file(s) in {destination}")

        return ProjectResult(
            destination=destination,
            config=config,
            variables=variables,
            rendered_files=rendered,
        )

    def check_destination(self, destination: Path, options: ProjectOptions) -> None:
        """Refuse to reuse an existing destination unless allowed.

        Raises:
            DestinationExistsError: Destination exists, no --overwrite, and the
                user didn't confirm (or couldn't be asked)
        """
        if not destination.exists() or options.overwrite:
            return

        if options.interactive and self.confirm(
            f"Directory {destination} already exists. Do you want to overwrite it?"
        ):
            return

        raise DestinationExistsError(destination)

