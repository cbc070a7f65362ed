"""
Centralized exception hierarchy for doublekit.

This module defines all custom exceptions used across the codebase
so callers can catch a single base class or a narrow subclass.
"""

from typing import Any


# ============================================================================
# Base Exceptions
# ============================================================================


class DoubleKitError(Exception):
    """Base exception for all doublekit errors."""

    pass


# ============================================================================
# Matcher Exceptions
# ============================================================================


class MatcherError(DoubleKitError):
    """Base exception for argument matcher errors."""

    pass


class UnknownMatcherError(MatcherError, LookupError):
    """Raised when a matcher constructor name is not in the matcher table."""

    def __init__(self, matcher_name: Any):
        self.matcher_name = matcher_name
        super().__init__(f"Unknown matcher: {matcher_name!r}")


# ============================================================================
# Mock Exceptions
# ============================================================================


class MockCreationError(DoubleKitError):
    """Raised when a mock cannot be created for the requested target."""

    pass


class UnknownMethodError(DoubleKitError, AttributeError):
    """Raised when an expectation names a method the target does not define."""

    def __init__(self, target_name: str, method_name: str):
        self.target_name = target_name
        self.method_name = method_name
        super().__init__(
            f"Cannot configure method '{method_name}': "
            f"{target_name} has no such method"
        )


class ExpectationFailedError(DoubleKitError, AssertionError):
    """Raised when a mock is called or verified against unmet expectations."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(DoubleKitError):
    """Doubles file parsing or validation error."""

    pass


class InvalidInvocationCountError(ConfigError):
    """Raised in strict mode for an unrecognized invocation count."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unrecognized invocation count: {value!r}")


class TargetImportError(ConfigError):
    """Raised when a double's target class cannot be imported."""

    def __init__(self, import_path: str, reason: str):
        self.import_path = import_path
        self.reason = reason
        super().__init__(f"Failed to import target '{import_path}': {reason}")
