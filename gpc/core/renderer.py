"""Rendering template files of a project in place."""
import os
import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from jinja2 import Environment, TemplateError
from jinja2.ext import Extension

from gpc.core.errors import RenderError
from gpc.core.logger import get_logger

logger = get_logger(__name__)

VCS_DIR = ".git"

# {{.Name}} / {{ .Name.Sub }} / {{- .Name }}
_DOT_FIELD = re.compile(r"(\{\{-?\s*)\.([A-Za-z_]\w*)")


class DotFieldExtension(Extension):
    """Accept Go-template style ``{{.Name}}`` references as ``{{ Name }}``."""

    def preprocess(self, source, name, filename=None):
        return _DOT_FIELD.sub(r"\1\2", source)


def create_environment() -> Environment:
    """Jinja2 environment used for project files.

    Output is written verbatim: no HTML escaping, trailing newlines kept.
    """
    return Environment(
        autoescape=False,
        keep_trailing_newline=True,
        extensions=[DotFieldExtension],
    )


class TemplateRenderer:
    """Renders every file matching the template patterns below a directory."""

    def __init__(self, patterns: Sequence[str], environment: Optional[Environment] = None):
        self.patterns = [_glob(pattern) for pattern in patterns]
        self.env = environment or create_environment()
        self._crlf_env = self.env.overlay(newline_sequence="\r\n")

    def is_template(self, filename: str) -> bool:
        """Check a base name against the configured glob patterns."""
        return any(fnmatchcase(filename, pattern) for pattern in self.patterns)

    def render_text(self, content: str, variables: Mapping[str, Any]) -> str:
        """Render template text with the given variables.

        CRLF text is rendered back with CRLF line endings.
        """
        env = self._crlf_env if "\r\n" in content else self.env
        return env.from_string(content).render(dict(variables))

    def render_file(self, path: Path, variables: Mapping[str, Any]) -> None:
        """Render a single file and overwrite it with the result.

        Line endings are kept as they are in the file.

        Raises:
            RenderError: The file can't be read, parsed or rendered
        """
        try:
            with open(path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise RenderError(path, str(e)) from e

        try:
            rendered = self.render_text(content, variables)
        except TemplateError as e:
            location = f" (line {e.lineno})" if getattr(e, "lineno", None) else ""
            raise RenderError(path, f"{e.message or e}{location}") from e
        except Exception as e:
            # Errors raised by template code itself, e.g. "8080" + 1
            raise RenderError(path, f"{type(e).__name__}: {e}") from e

        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(rendered)
        except OSError as e:
            raise RenderError(path, str(e)) from e

    def render_tree(self, root: Union[str, Path], variables: Mapping[str, Any]) -> List[Path]:
        """Walk ``root`` depth-first and render every template file.

        ``.git`` directories are skipped together with their contents. The
        first failure aborts the walk; files rendered before it stay rendered.

        Returns:
            Rendered file paths, in walk order
        """
        rendered: List[Path] = []
        if not self.patterns:
            return rendered

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if d != VCS_DIR)
            for filename in sorted(filenames):
                if not self.is_template(filename):
                    continue

                path = Path(dirpath) / filename
                logger.debug(f"Rendering {path}")
                self.render_file(path, variables)
                rendered.append(path)

        return rendered


def _glob(pattern: str) -> str:
    """Accept ``[^abc]`` negated classes alongside ``[!abc]``."""
    return pattern.replace("[^", "[!")


def _raise(error: OSError) -> None:
    raise error
