"""Reading the optional .gpc.yml configuration at a template root."""
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from gpc.core.errors import TemplateConfigError
from gpc.core.logger import get_logger
from gpc.models.template import TemplateConfig

logger = get_logger(__name__)

# Checked in order, first one found wins
CONFIG_FILENAMES = [".gpc.yml", ".gpc.yaml"]


def find_template_config(directory: Union[str, Path]) -> Optional[Path]:
    """Return the configuration file of a template root, if it has one."""
    directory = Path(directory)
    for filename in CONFIG_FILENAMES:
        config_path = directory / filename
        if config_path.is_file():
            return config_path
    return None


def load_template_config(directory: Union[str, Path]) -> TemplateConfig:
    """Load the template configuration from a template root.

    Args:
        directory: Template root (the populated destination directory)

    Returns:
        Parsed configuration, or an empty one when the template has no
        configuration file.

    Raises:
        TemplateConfigError: The file exists but is not valid YAML or does not
            describe a template configuration
    """
    config_path = find_template_config(directory)
    if config_path is None:
        logger.debug(f"No template configuration in {directory}, nothing will be rendered")
        return TemplateConfig()

    logger.debug(f"Reading template configuration {config_path}")
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TemplateConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise TemplateConfigError(f"Cannot read {config_path}: {e}") from e

    if data is None:
        return TemplateConfig()

    if not isinstance(data, dict):
        raise TemplateConfigError(
            f"{config_path} must contain a mapping with 'templates' and 'variables'"
        )

    try:
        return TemplateConfig.model_validate(data)
    except ValidationError as e:
        raise TemplateConfigError(f"Invalid template configuration in {config_path}: {e}") from e
