"""Configuration module for doublekit.

This module parses declarative doubles files (YAML) and builds the mocks
they declare.
"""

from doublekit.config.parser import (
    BuilderSettings,
    DoubleConfig,
    DoublesConfig,
    parse_config,
    parse_config_data,
    load_target,
    build_doubles,
)

__all__ = [
    "BuilderSettings",
    "DoubleConfig",
    "DoublesConfig",
    "parse_config",
    "parse_config_data",
    "load_target",
    "build_doubles",
]
