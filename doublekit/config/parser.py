"""YAML doubles file parser for doublekit.

This module parses declarative doubles files into dataclasses and builds the
mocks they describe:

    version: 1
    settings:
      strict_invocation_counts: false
    doubles:
      repository:
        target: myapp.storage:Repository
        expectations:
          - method: save
            invocation_count: once
            args: [[equalTo, draft]]
"""

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from doublekit.builder import ExpectationSpec, MockBuilder
from doublekit.core.exceptions import ConfigError, TargetImportError

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = 1


@dataclass
class BuilderSettings:
    """Settings applied to the MockBuilder of a doubles file."""

    strict_invocation_counts: bool = False


@dataclass
class DoubleConfig:
    """Configuration for a single named double."""

    name: str
    target: str  # 'package.module:ClassName' or 'package.module.ClassName'
    expectations: List[ExpectationSpec] = field(default_factory=list)


@dataclass
class DoublesConfig:
    """Complete doubles file."""

    version: int
    settings: BuilderSettings = field(default_factory=BuilderSettings)
    doubles: Dict[str, DoubleConfig] = field(default_factory=dict)


def parse_config(config_path: Path) -> DoublesConfig:
    """
    Parse a doubles file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is missing, not valid YAML, or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Doubles file not found: {config_path}")

    logger.debug(f"Loading doubles from {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Doubles file is empty")

    return parse_config_data(data)


def parse_config_data(data: Any) -> DoublesConfig:
    """Parse and validate an already-loaded doubles mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Doubles file must contain a mapping at the top level")

    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != SUPPORTED_VERSION:
        raise ConfigError(
            f"Unsupported version: {data['version']} (expected {SUPPORTED_VERSION})"
        )

    settings = _parse_settings(data.get("settings") or {})

    doubles_data = data.get("doubles") or {}
    if not isinstance(doubles_data, dict):
        raise ConfigError("doubles must be a mapping of name to double")

    doubles = {
        str(name): _parse_double(str(name), double_data)
        for name, double_data in doubles_data.items()
    }

    return DoublesConfig(version=data["version"], settings=settings, doubles=doubles)


def _parse_settings(data: Any) -> BuilderSettings:
    if not isinstance(data, dict):
        raise ConfigError("settings must be a mapping")

    strict = data.get("strict_invocation_counts", False)
    if not isinstance(strict, bool):
        raise ConfigError("settings.strict_invocation_counts must be true or false")

    return BuilderSettings(strict_invocation_counts=strict)


def _parse_double(name: str, data: Any) -> DoubleConfig:
    """Parse one double definition."""
    if not isinstance(data, dict):
        raise ConfigError(f"doubles.{name} must be a mapping")

    target = data.get("target")
    if not target or not isinstance(target, str):
        raise ConfigError(f"doubles.{name} missing required field: target")

    expectations_data = data.get("expectations") or []
    if not isinstance(expectations_data, list):
        raise ConfigError(f"doubles.{name}.expectations must be a list")

    expectations = []
    for index, expectation_data in enumerate(expectations_data):
        try:
            expectations.append(ExpectationSpec.from_dict(expectation_data))
        except ConfigError as e:
            raise ConfigError(f"doubles.{name}.expectations[{index}]: {e}")

    return DoubleConfig(name=name, target=target, expectations=expectations)


def load_target(import_path: str) -> type:
    """
    Import a target class from its import path.

    Args:
        import_path: 'package.module:Qualified.Name' or 'package.module.ClassName'

    Returns:
        The imported class

    Raises:
        TargetImportError: If the module or attribute cannot be found

    Example:
        >>> load_target("collections.abc:Mapping")
        <class 'collections.abc.Mapping'>
    """
    if ":" in import_path:
        module_name, _, attribute_path = import_path.partition(":")
    else:
        module_name, _, attribute_path = import_path.rpartition(".")

    if not module_name or not attribute_path:
        raise TargetImportError(import_path, "expected 'module:ClassName'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetImportError(import_path, f"module '{module_name}' not found: {e}")

    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError:
            raise TargetImportError(
                import_path, f"'{attribute}' not found in {module_name}"
            )

    return target


def build_doubles(
    config: DoublesConfig, builder: Optional[MockBuilder] = None
) -> Dict[str, Any]:
    """
    Build every double declared in a configuration.

    Args:
        config: Parsed doubles configuration
        builder: Builder to use (default: one honoring ``config.settings``)

    Returns:
        Dictionary mapping double name to configured mock
    """
    if builder is None:
        builder = MockBuilder(strict=config.settings.strict_invocation_counts)

    doubles = {}
    for name, double in config.doubles.items():
        target = load_target(double.target)
        doubles[name] = builder.build(target, double.expectations)
        logger.debug(f"Built double '{name}' for {double.target}")

    return doubles
