"""Dot-notation override operations on configuration dictionaries."""

from typing import Any, Dict, List

import yaml

from .errors import ConfigError, ConfigTypeError

__all__ = ["parse_value", "set_nested_value", "apply_overrides"]


def parse_value(value_str: Any) -> Any:
    """Parse a string value into appropriate Python type.

    Parameters
    ----------
    value_str : Any
        Value to parse (if string, attempts YAML parsing)

    Returns
    -------
    Any
        Parsed value
    """
    if not isinstance(value_str, str):
        return value_str

    if value_str.strip() == "":
        return value_str

    try:
        return yaml.safe_load(value_str)
    except yaml.YAMLError:
        return value_str


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any
) -> Dict[str, Any]:
    """Set a nested value using dot notation, creating missing blocks.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary
    key_path : str
        Dot-separated path (e.g., "base.min_delay")
    value : Any
        Value to set

    Returns
    -------
    Dict[str, Any]
        Modified configuration dictionary

    Raises
    ------
    ConfigTypeError
        If path traverses non-dict value
    """
    keys = key_path.split(".")
    current = config

    # Navigate to parent
    for key in keys[:-1]:
        if key not in current or current[key] is None:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ConfigTypeError(
                f"Cannot set '{key_path}': '{key}' is not a dictionary"
            )
        current = current[key]

    current[keys[-1]] = value

    return config


def apply_overrides(config: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """Apply a list of `key.path=value` overrides to a configuration.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary
    overrides : List[str]
        List of overrides in the form "key.path=value"

    Returns
    -------
    Dict[str, Any]
        Updated configuration dictionary
    """
    for override in overrides:
        if "=" not in override:
            raise ConfigError(
                f"Invalid --set format: '{override}'. "
                "Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        config = set_nested_value(
            config, key_path.strip(), parse_value(value_str.strip())
        )

    return config
