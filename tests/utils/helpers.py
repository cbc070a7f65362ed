"""
Helper utilities for doublekit testing.
"""

from pathlib import Path
from typing import Any, Dict

import yaml


def write_doubles_yaml(path: Path, data: Dict[str, Any]) -> Path:
    """
    Write a doubles mapping to a YAML file.

    Args:
        path: File path to write
        data: Doubles mapping, e.g. from DoublesFileBuilder.build()

    Returns:
        The written path

    Example:
        >>> data = DoublesFileBuilder().with_double("dep", "pkg:Dep").build()
        >>> write_doubles_yaml(tmp_path / "doubles.yaml", data)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path
