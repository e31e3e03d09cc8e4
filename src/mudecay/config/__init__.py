"""Configuration loading system.

Configurations are YAML files with up to four top-level blocks:

.. code-block:: yaml

    base:
      <verbosity, detector layer count, delay threshold, log step>
    io:
      reader: <event record source>
      writer: <histogram output file>
      event_log: <optional per-event CSV summary>
    classify:
      <classification strategies>
    hist:
      <histogram binning>
"""

from .errors import ConfigError, ConfigPathError, ConfigTypeError
from .load import load_config, load_config_file
from .operations import apply_overrides, parse_value, set_nested_value

__all__ = [
    "load_config",
    "load_config_file",
    "apply_overrides",
    "parse_value",
    "set_nested_value",
    "ConfigError",
    "ConfigPathError",
    "ConfigTypeError",
]
