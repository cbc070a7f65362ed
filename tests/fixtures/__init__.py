"""Test fixtures for doublekit tests.

This package provides reusable targets and pytest fixtures:

- components: Example classes of every target kind (interface, abstract,
  trait, concrete, protocol) and a consumer depending on them
- doubles_files: Doubles YAML files (valid, strict, broken)

Import them in your tests using:
    from tests.fixtures.components import DependencyInterface
    from tests.fixtures.doubles_files import valid_doubles_file
"""

__all__ = [
    "components",
    "doubles_files",
]
