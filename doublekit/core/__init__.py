"""
Core functionality for doublekit.

This package contains the foundational modules that other components depend on.
"""

from .exceptions import (
    DoubleKitError,
    MatcherError,
    UnknownMatcherError,
    MockCreationError,
    UnknownMethodError,
    ExpectationFailedError,
    ConfigError,
    InvalidInvocationCountError,
    TargetImportError,
)

__all__ = [
    "DoubleKitError",
    "MatcherError",
    "UnknownMatcherError",
    "MockCreationError",
    "UnknownMethodError",
    "ExpectationFailedError",
    "ConfigError",
    "InvalidInvocationCountError",
    "TargetImportError",
]
