"""
Argument matchers for mock expectations.

A matcher is a predicate over a single call argument that can also describe
itself for failure messages. Matchers are built through small constructor
functions (``equal_to('x')``, ``greater_than(0)``, ...) which are also
reachable by name through the closed ``MATCHER_CONSTRUCTORS`` table, so that
declarative expectations can refer to them as plain strings.
"""

import operator
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List

from doublekit.core.exceptions import UnknownMatcherError


class Matcher(ABC):
    """Base class for all argument matchers."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """
        Check whether a value satisfies this matcher.

        Args:
            value: Actual argument passed to the mocked method

        Returns:
            True if the value is accepted, False otherwise
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable description (e.g. "is equal to 'x'")."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.describe()}>"


# ============================================================================
# Simple Matchers
# ============================================================================


class IsAnything(Matcher):
    """Accepts every value."""

    def matches(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        return "is anything"


class IsEqual(Matcher):
    """Accepts values equal (``==``) to the expected value."""

    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return bool(value == self.expected)

    def describe(self) -> str:
        return f"is equal to {self.expected!r}"


class IsIdentical(Matcher):
    """Accepts only the very same object (``is``)."""

    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return value is self.expected

    def describe(self) -> str:
        return f"is identical to {self.expected!r}"


class IsNull(Matcher):
    def matches(self, value: Any) -> bool:
        return value is None

    def describe(self) -> str:
        return "is None"


class IsTrue(Matcher):
    def matches(self, value: Any) -> bool:
        return value is True

    def describe(self) -> str:
        return "is True"


class IsFalse(Matcher):
    def matches(self, value: Any) -> bool:
        return value is False

    def describe(self) -> str:
        return "is False"


class IsEmpty(Matcher):
    """Accepts sized values of length zero."""

    def matches(self, value: Any) -> bool:
        return hasattr(value, "__len__") and len(value) == 0

    def describe(self) -> str:
        return "is empty"


class IsInstanceOf(Matcher):
    def __init__(self, expected_class: type):
        self.expected_class = expected_class

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.expected_class)

    def describe(self) -> str:
        return f"is an instance of {self.expected_class.__name__}"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, complex)) and not isinstance(value, bool)


class IsType(Matcher):
    """
    Accepts values of a named type category.

    Type names: bool, int, float, numeric, str, string, list, tuple, dict,
    callable, iterable, none, null, object, scalar.
    """

    TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
        "bool": lambda v: isinstance(v, bool),
        "int": lambda v: isinstance(v, int) and not isinstance(v, bool),
        "float": lambda v: isinstance(v, float),
        "numeric": _is_number,
        "str": lambda v: isinstance(v, str),
        "string": lambda v: isinstance(v, str),
        "list": lambda v: isinstance(v, list),
        "tuple": lambda v: isinstance(v, tuple),
        "dict": lambda v: isinstance(v, dict),
        "callable": callable,
        "iterable": lambda v: hasattr(v, "__iter__"),
        "none": lambda v: v is None,
        "null": lambda v: v is None,
        "object": lambda v: v is not None,
        "scalar": lambda v: isinstance(v, (bool, int, float, str)),
    }

    def __init__(self, type_name: str):
        if type_name not in self.TYPE_CHECKS:
            raise ValueError(
                f"Invalid type name: {type_name!r} "
                f"(expected one of {sorted(self.TYPE_CHECKS)})"
            )
        self.type_name = type_name

    def matches(self, value: Any) -> bool:
        return bool(self.TYPE_CHECKS[self.type_name](value))

    def describe(self) -> str:
        return f"is of type {self.type_name}"


class Callback(Matcher):
    """Accepts values for which the predicate returns a true-like result."""

    def __init__(self, predicate: Callable[[Any], Any]):
        if not callable(predicate):
            raise TypeError(f"Callback predicate must be callable, got {predicate!r}")
        self.predicate = predicate

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self) -> str:
        name = getattr(self.predicate, "__name__", repr(self.predicate))
        return f"is accepted by {name}"


# ============================================================================
# Comparison Matchers
# ============================================================================


class _Comparison(Matcher):
    """Orders the actual value against a bound; incomparable values never match."""

    _operator: Callable[[Any, Any], bool] = operator.eq
    _symbol = "=="

    def __init__(self, bound: Any):
        self.bound = bound

    def matches(self, value: Any) -> bool:
        try:
            return bool(type(self)._operator(value, self.bound))
        except TypeError:
            return False

    def describe(self) -> str:
        return f"is {self._symbol} {self.bound!r}"


class GreaterThan(_Comparison):
    _operator = operator.gt
    _symbol = ">"


class GreaterThanOrEqual(_Comparison):
    _operator = operator.ge
    _symbol = ">="


class LessThan(_Comparison):
    _operator = operator.lt
    _symbol = "<"


class LessThanOrEqual(_Comparison):
    _operator = operator.le
    _symbol = "<="


# ============================================================================
# String Matchers
# ============================================================================


class StringContains(Matcher):
    def __init__(self, needle: str, ignore_case: bool = False):
        self.needle = needle
        self.ignore_case = ignore_case

    def matches(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if self.ignore_case:
            return self.needle.lower() in value.lower()
        return self.needle in value

    def describe(self) -> str:
        return f"contains {self.needle!r}"


class StringStartsWith(Matcher):
    def __init__(self, prefix: str):
        self.prefix = prefix

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and value.startswith(self.prefix)

    def describe(self) -> str:
        return f"starts with {self.prefix!r}"


class StringEndsWith(Matcher):
    def __init__(self, suffix: str):
        self.suffix = suffix

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and value.endswith(self.suffix)

    def describe(self) -> str:
        return f"ends with {self.suffix!r}"


class MatchesRegularExpression(Matcher):
    """Accepts strings in which the pattern is found (``re.search``)."""

    def __init__(self, pattern: str):
        self.pattern = re.compile(pattern)

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None

    def describe(self) -> str:
        return f"matches regular expression {self.pattern.pattern!r}"


# ============================================================================
# Container Matchers
# ============================================================================


class ArrayHasKey(Matcher):
    """Accepts mappings containing the key, or sequences with a valid index."""

    def __init__(self, key: Any):
        self.key = key

    def matches(self, value: Any) -> bool:
        if isinstance(value, Mapping):
            return self.key in value
        if isinstance(value, Sequence) and not isinstance(value, str):
            return isinstance(self.key, int) and -len(value) <= self.key < len(value)
        return False

    def describe(self) -> str:
        return f"has the key {self.key!r}"


class ContainsEqual(Matcher):
    def __init__(self, item: Any):
        self.item = item

    def matches(self, value: Any) -> bool:
        try:
            return self.item in value
        except TypeError:
            return False

    def describe(self) -> str:
        return f"contains {self.item!r}"


class CountOf(Matcher):
    def __init__(self, count: int):
        self.count = count

    def matches(self, value: Any) -> bool:
        return hasattr(value, "__len__") and len(value) == self.count

    def describe(self) -> str:
        return f"has {self.count} element(s)"


# ============================================================================
# Logical Matchers
# ============================================================================


class LogicalNot(Matcher):
    def __init__(self, matcher: Any):
        self.matcher = as_matcher(matcher)

    def matches(self, value: Any) -> bool:
        return not self.matcher.matches(value)

    def describe(self) -> str:
        return f"not ({self.matcher.describe()})"


class LogicalAnd(Matcher):
    def __init__(self, *matchers: Any):
        self.matchers = [as_matcher(m) for m in matchers]

    def matches(self, value: Any) -> bool:
        return all(m.matches(value) for m in self.matchers)

    def describe(self) -> str:
        return " and ".join(m.describe() for m in self.matchers)


class LogicalOr(Matcher):
    def __init__(self, *matchers: Any):
        self.matchers = [as_matcher(m) for m in matchers]

    def matches(self, value: Any) -> bool:
        return any(m.matches(value) for m in self.matchers)

    def describe(self) -> str:
        return " or ".join(m.describe() for m in self.matchers)


# ============================================================================
# Constructors
# ============================================================================


def anything() -> Matcher:
    return IsAnything()


def equal_to(expected: Any) -> Matcher:
    return IsEqual(expected)


def identical_to(expected: Any) -> Matcher:
    return IsIdentical(expected)


def is_null() -> Matcher:
    return IsNull()


def is_true() -> Matcher:
    return IsTrue()


def is_false() -> Matcher:
    return IsFalse()


def is_empty() -> Matcher:
    return IsEmpty()


def is_instance_of(expected_class: type) -> Matcher:
    return IsInstanceOf(expected_class)


def is_type(type_name: str) -> Matcher:
    return IsType(type_name)


def callback(predicate: Callable[[Any], Any]) -> Matcher:
    return Callback(predicate)


def greater_than(bound: Any) -> Matcher:
    return GreaterThan(bound)


def greater_than_or_equal(bound: Any) -> Matcher:
    return GreaterThanOrEqual(bound)


def less_than(bound: Any) -> Matcher:
    return LessThan(bound)


def less_than_or_equal(bound: Any) -> Matcher:
    return LessThanOrEqual(bound)


def string_contains(needle: str, ignore_case: bool = False) -> Matcher:
    return StringContains(needle, ignore_case)


def string_starts_with(prefix: str) -> Matcher:
    return StringStartsWith(prefix)


def string_ends_with(suffix: str) -> Matcher:
    return StringEndsWith(suffix)


def matches_regular_expression(pattern: str) -> Matcher:
    return MatchesRegularExpression(pattern)


def array_has_key(key: Any) -> Matcher:
    return ArrayHasKey(key)


def contains_equal(item: Any) -> Matcher:
    return ContainsEqual(item)


def count_of(count: int) -> Matcher:
    return CountOf(count)


def logical_not(matcher: Any) -> Matcher:
    return LogicalNot(matcher)


def logical_and(*matchers: Any) -> Matcher:
    return LogicalAnd(*matchers)


def logical_or(*matchers: Any) -> Matcher:
    return LogicalOr(*matchers)


def as_matcher(value: Any) -> Matcher:
    """
    Coerce a value into a matcher.

    Matchers are returned unchanged; any other value is wrapped in an
    equality matcher.
    """
    if isinstance(value, Matcher):
        return value
    return IsEqual(value)


# Name -> constructor. Names follow the declarative vocabulary used in
# expectation specs and doubles files.
MATCHER_CONSTRUCTORS: Dict[str, Callable[..., Matcher]] = {
    "anything": anything,
    "equalTo": equal_to,
    "identicalTo": identical_to,
    "isNull": is_null,
    "isTrue": is_true,
    "isFalse": is_false,
    "isEmpty": is_empty,
    "isInstanceOf": is_instance_of,
    "isType": is_type,
    "callback": callback,
    "greaterThan": greater_than,
    "greaterThanOrEqual": greater_than_or_equal,
    "lessThan": less_than,
    "lessThanOrEqual": less_than_or_equal,
    "stringContains": string_contains,
    "stringStartsWith": string_starts_with,
    "stringEndsWith": string_ends_with,
    "matchesRegularExpression": matches_regular_expression,
    "arrayHasKey": array_has_key,
    "containsEqual": contains_equal,
    "contains": contains_equal,
    "countOf": count_of,
    "logicalNot": logical_not,
    "logicalAnd": logical_and,
    "logicalOr": logical_or,
}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


_SNAKE_CASE_ALIASES: Dict[str, Callable[..., Matcher]] = {
    _snake_case(name): constructor
    for name, constructor in MATCHER_CONSTRUCTORS.items()
    if _snake_case(name) != name
}


def get_matcher_constructor(name: Any) -> Callable[..., Matcher]:
    """
    Look up a matcher constructor by name.

    Accepts both the camelCase names of ``MATCHER_CONSTRUCTORS`` and their
    snake_case spelling (``equalTo`` or ``equal_to``).

    Args:
        name: Constructor name

    Returns:
        Constructor function returning a Matcher

    Raises:
        UnknownMatcherError: If no constructor is registered under the name

    Example:
        >>> get_matcher_constructor("greaterThan")(0).matches(5)
        True
    """
    if not isinstance(name, str):
        raise UnknownMatcherError(name)
    if name in MATCHER_CONSTRUCTORS:
        return MATCHER_CONSTRUCTORS[name]
    if name in _SNAKE_CASE_ALIASES:
        return _SNAKE_CASE_ALIASES[name]
    raise UnknownMatcherError(name)


def list_matcher_names() -> List[str]:
    """Return the registered matcher names, sorted."""
    return sorted(MATCHER_CONSTRUCTORS)
