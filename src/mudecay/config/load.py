"""Main configuration loading functions.

- load_config(): Load from a YAML string
- load_config_file(): Load from a file path
"""

import os
from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigPathError, ConfigTypeError

__all__ = ["load_config", "load_config_file"]


def load_config(config_string: str) -> Dict[str, Any]:
    """Parse a configuration from a YAML string.

    Parameters
    ----------
    config_string : str
        YAML configuration string

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary (empty if the string holds no document)

    Raises
    ------
    ConfigError
        If the string is not valid YAML
    ConfigTypeError
        If the top level of the document is not a mapping
    """
    try:
        cfg = yaml.safe_load(config_string)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Error parsing configuration: {exc}") from exc

    if cfg is None:
        return {}

    if not isinstance(cfg, dict):
        raise ConfigTypeError(
            "The top level of a configuration must be a mapping, "
            f"got {type(cfg).__name__} instead."
        )

    return cfg


def load_config_file(cfg_path: str) -> Dict[str, Any]:
    """Load a configuration from a YAML file.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary

    Raises
    ------
    ConfigPathError
        If the file does not exist
    """
    if not os.path.isfile(cfg_path):
        raise ConfigPathError(f"Configuration file not found: {cfg_path}")

    with open(cfg_path, "r", encoding="utf-8") as cfg_file:
        return load_config(cfg_file.read())
