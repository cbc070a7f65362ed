"""
Test utilities for doublekit testing.

This package provides custom assertions, test data builders and helper
utilities to simplify test writing and improve test readability.
"""

from .assertions import (
    assert_command_output,
    assert_expectation_fails,
)
from .builders import (
    DoublesFileBuilder,
    ExpectationDataBuilder,
)
from .helpers import write_doubles_yaml

__all__ = [
    # Assertions
    "assert_command_output",
    "assert_expectation_fails",
    # Builders
    "DoublesFileBuilder",
    "ExpectationDataBuilder",
    # Helpers
    "write_doubles_yaml",
]
