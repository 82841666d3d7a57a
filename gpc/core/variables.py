"""Resolving template variables from inline data, prompts and defaults."""
import json
from typing import Any, Callable, Dict, Iterable, Optional

import typer
import yaml

from gpc.core.errors import DataParseError, VariableError
from gpc.core.logger import get_logger
from gpc.models.template import Variable

logger = get_logger(__name__)

Prompter = Callable[[str], str]

TRUE_WORDS = {"true", "yes", "y", "1", "on"}
FALSE_WORDS = {"false", "no", "n", "0", "off"}


def parse_data(text: Optional[str]) -> Dict[str, Any]:
    """Parse inline data given as a JSON object or a YAML mapping.

    JSON is tried first; YAML is the fallback. Empty text means no data.

    Raises:
        DataParseError: Neither parser accepts the text, or it is not a mapping
    """
    if text is None or not text.strip():
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as json_error:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as yaml_error:
            raise DataParseError(
                f"data is neither JSON ({json_error}) nor YAML ({yaml_error})"
            ) from yaml_error

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataParseError(
            f"data must be a JSON object or YAML mapping, got {type(data).__name__}"
        )
    return data


def prompt_line(message: str) -> str:
    """Read one line from the user; an empty answer is returned as ''."""
    return typer.prompt(message, default="", show_default=False)


def coerce_input(value: str, default: Any) -> Any:
    """Convert prompt text to the type of the variable's default.

    Raises:
        VariableError: The text cannot be read as that type
    """
    if default is None or isinstance(default, str):
        return value

    if isinstance(default, bool):
        lowered = value.strip().lower()
        if lowered in TRUE_WORDS:
            return True
        if lowered in FALSE_WORDS:
            return False
        raise VariableError(f"'{value}' is not a boolean (expected yes/no or true/false)")

    if isinstance(default, int):
        try:
            return int(value)
        except ValueError as e:
            raise VariableError(f"'{value}' is not an integer") from e

    if isinstance(default, float):
        try:
            return float(value)
        except ValueError as e:
            raise VariableError(f"'{value}' is not a number") from e

    if isinstance(default, (list, dict)):
        try:
            parsed = yaml.safe_load(value)
        except yaml.YAMLError as e:
            raise VariableError(f"'{value}' is not valid YAML: {e}") from e
        if not isinstance(parsed, type(default)):
            raise VariableError(f"'{value}' is not a {type(default).__name__}")
        return parsed

    return value


def resolve_variables(
    variables: Iterable[Variable],
    data: Dict[str, Any],
    interactive: bool,
    prompt: Optional[Prompter] = None,
    coerce: bool = False,
) -> Dict[str, Any]:
    """Give every declared variable a value.

    Precedence per variable: value from ``data``, then the answer to a prompt
    (interactive runs only, an empty answer keeps the default), then the
    declared default.

    Args:
        variables: Declared template variables, in order
        data: Parsed inline data
        interactive: Whether the user may be prompted
        prompt: Reads one answer for a prompt message (defaults to typer.prompt)
        coerce: Convert prompt answers to the type of the default. When off,
            answers are always strings.

    Returns:
        Mapping of variable name to value
    """
    prompt = prompt or prompt_line
    resolved: Dict[str, Any] = {}

    for variable in variables:
        if variable.name in data:
            resolved[variable.name] = data[variable.name]
            logger.debug(f"Variable {variable.name} supplied by data")
            continue

        if interactive:
            answer = prompt(f"{variable.description} ({variable.default})")
            if answer == "":
                resolved[variable.name] = variable.default
            elif coerce:
                resolved[variable.name] = coerce_input(answer, variable.default)
            else:
                resolved[variable.name] = answer
        else:
            resolved[variable.name] = variable.default

    return resolved
