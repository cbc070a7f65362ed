"""
Invocation-count expectations ("cardinalities").

A cardinality says how many times a mocked method is expected to be called.
It is consulted twice: on every call, to reject calls beyond its upper bound,
and at verification, to check its lower bound. Cardinalities are frozen
dataclasses so two of them compare equal when they expect the same counts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class InvocationCount(ABC):
    """Base class for invocation-count expectations."""

    @property
    @abstractmethod
    def minimum(self) -> int:
        """Smallest acceptable number of calls."""
        pass

    @property
    @abstractmethod
    def maximum(self) -> Optional[int]:
        """Largest acceptable number of calls, or None if unbounded."""
        pass

    @abstractmethod
    def describe(self) -> str:
        pass

    def allows_call(self, call_number: int) -> bool:
        """
        Check whether the ``call_number``-th call (1-based) is allowed.

        Args:
            call_number: Number of calls including the current one

        Returns:
            False if the call exceeds the upper bound
        """
        return self.maximum is None or call_number <= self.maximum

    def is_satisfied_by(self, call_count: int) -> bool:
        """Check the final number of calls against both bounds."""
        return call_count >= self.minimum and self.allows_call(call_count)


def _check_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError(f"Invocation count must be an integer, got {count!r}")
    if count < 0:
        raise ValueError(f"Invocation count must be >= 0, got {count}")
    return count


@dataclass(frozen=True)
class AnyInvokedCount(InvocationCount):
    """Zero or more calls."""

    @property
    def minimum(self) -> int:
        return 0

    @property
    def maximum(self) -> Optional[int]:
        return None

    def describe(self) -> str:
        return "invoked zero or more times"


@dataclass(frozen=True)
class InvokedCount(InvocationCount):
    """Exactly ``expected`` calls."""

    expected: int

    def __post_init__(self):
        _check_count(self.expected)

    @property
    def minimum(self) -> int:
        return self.expected

    @property
    def maximum(self) -> Optional[int]:
        return self.expected

    def describe(self) -> str:
        if self.expected == 0:
            return "never invoked"
        return f"invoked {self.expected} time(s)"


@dataclass(frozen=True)
class InvokedAtLeastCount(InvocationCount):
    """At least ``required`` calls."""

    required: int

    def __post_init__(self):
        _check_count(self.required)

    @property
    def minimum(self) -> int:
        return self.required

    @property
    def maximum(self) -> Optional[int]:
        return None

    def describe(self) -> str:
        return f"invoked at least {self.required} time(s)"


def any_count() -> InvocationCount:
    return AnyInvokedCount()


def never() -> InvocationCount:
    return InvokedCount(0)


def once() -> InvocationCount:
    return InvokedCount(1)


def exactly(count: int) -> InvocationCount:
    return InvokedCount(count)


def at_least(count: int) -> InvocationCount:
    return InvokedAtLeastCount(count)


def at_least_once() -> InvocationCount:
    return InvokedAtLeastCount(1)
