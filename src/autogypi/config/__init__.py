# src/autogypi/config/__init__.py

"""Configuration handling for autogypi.

Loading, strict parsing, and saving of autogypi.json files.
"""

from .config_loader import load_config, parse_config, read_config, save_config
from .config_types import AutogypiConfig, Configuration


__all__ = [  # noqa: RUF022
    # config_loader
    "load_config",
    "parse_config",
    "read_config",
    "save_config",
    # config_types
    "AutogypiConfig",
    "Configuration",
]
