# Path: report_mailer/definition/loader.py
"""
Report Definition Loader

Reads a YAML report definition from disk and validates it.

Every failure (unreadable file, YAML syntax, schema violation) is
reported as ConfigurationError naming the file.
"""

from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from ..core.logger import get_input_logger
from ..exceptions import ConfigurationError
from .models import ReportDefinition


logger = get_input_logger('definition_loader')


def _describe(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item['loc']) or '(root)'
        lines.append(f"  {location}: {item['msg']}")
    return '\n'.join(lines)


def parse_definition(data: object, source: str = '<definition>') -> ReportDefinition:
    """
    Validate already-parsed definition data.

    Args:
        data: Mapping produced by the YAML parser
        source: Name used in error messages

    Raises:
        ConfigurationError: If the data is not a valid definition
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source}: expected a mapping at the top level")
    try:
        return ReportDefinition.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"{source}: invalid report definition\n{_describe(e)}") from None


def load_definition(path: Union[str, Path]) -> ReportDefinition:
    """
    Load a report definition from a YAML file.

    Args:
        path: YAML file path

    Returns:
        Validated ReportDefinition

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    file_path = Path(path)
    logger.debug(f"Loading report definition: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read report definition {file_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML parse error in {file_path}: {e}") from e

    definition = parse_definition(data, str(file_path))
    logger.info(f"Loaded report '{definition.title}' with {len(definition.querys)} queries")
    return definition


__all__ = ['load_definition', 'parse_definition']
