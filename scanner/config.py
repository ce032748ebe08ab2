"""Loading of YAML rules files."""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


# Keys accepted in a rules file, mirroring the long command line options
CONFIG_KEYS = {
    "extract_regex": str,
    "extract_replace": str,
    "extract_replacement": str,
    "path_regex": str,
    "path_replace": str,
    "path_replacement": str,
    "multiple": bool,
    "keep_hashes": bool,
    "include_ext": list,
    "exclude_dir": list,
    "max_depth": int,
    "input": str,
    "output": str,
}


class ConfigError(ValueError):
    """Raised when a rules file cannot be read or is malformed."""


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load and validate a YAML rules file.

    Args:
        path: Path to the rules file.

    Returns:
        Mapping of option name to value. Keys that are absent from the file
        are absent from the mapping.

    Raises:
        ConfigError: If the file is unreadable, is not valid YAML, is not a
                     mapping, or contains unknown keys or mistyped values.
    """
    path = Path(path)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read rules file '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in rules file '{path}': {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"rules file '{path}' must contain a mapping")

    return validate_config(data, source=str(path))


def validate_config(data: Dict[str, Any], source: str = "rules") -> Dict[str, Any]:
    """Check option names and value types, normalizing list options."""
    config: Dict[str, Any] = {}

    for key, value in data.items():
        key = str(key).replace("-", "_")
        if key not in CONFIG_KEYS:
            raise ConfigError(f"unknown option '{key}' in {source}")

        expected = CONFIG_KEYS[key]

        if expected is list:
            value = _as_str_list(key, value, source)
        elif expected is int:
            # bool is a subclass of int
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"option '{key}' in {source} must be an integer")
        elif not isinstance(value, expected):
            raise ConfigError(f"option '{key}' in {source} must be a {expected.__name__}")

        config[key] = value

    return config


def _as_str_list(key: str, value: Any, source: str) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    raise ConfigError(f"option '{key}' in {source} must be a string or a list of strings")
