"""
Mock builder.

Turns a target class and a declarative list of expectations into a mock
with invocation-count expectations and argument matchers attached:

    mock = build_mock(
        Repository,
        [
            {"method": "save", "invocation_count": "once", "args": [["equalTo", "x"]]},
            {"method": "delete", "invocation_count": "never"},
        ],
    )
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from doublekit.core.exceptions import (
    ConfigError,
    InvalidInvocationCountError,
    MatcherError,
)
from doublekit.provider.cardinality import (
    InvocationCount,
    any_count,
    at_least,
    at_least_once,
    exactly,
    never,
    once,
)
from doublekit.provider.factory import MockFactory
from doublekit.provider.invocation import InvocationMocker
from doublekit.provider.matchers import Matcher, callback, get_matcher_constructor
from doublekit.targets import TargetKind, classify_target

logger = logging.getLogger(__name__)

_AT_LEAST_PATTERN = re.compile(r"atLeast\s+([0-9]+)")
_DIGITS_PATTERN = re.compile(r"[0-9]+")

EXPECTATION_FIELDS = ("method", "invocation_count", "args", "consecutive_args")


@dataclass
class ExpectationSpec:
    """
    One expected-call declaration.

    Only one of ``args`` and ``consecutive_args`` is applied; when both are
    given, ``consecutive_args`` wins.
    """

    method: str
    invocation_count: Any = "any"
    args: Optional[List[Any]] = None
    consecutive_args: Optional[List[List[Any]]] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "ExpectationSpec":
        """
        Build an expectation from a mapping with the same field names.

        Raises:
            ConfigError: If the mapping has no ``method`` or unknown keys
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Expectation must be a mapping, got {data!r}")

        unknown = [str(key) for key in data if key not in EXPECTATION_FIELDS]
        if unknown:
            raise ConfigError(
                f"Unknown expectation field(s): {', '.join(sorted(unknown))} "
                f"(expected {', '.join(EXPECTATION_FIELDS)})"
            )
        if "method" not in data:
            raise ConfigError("Expectation missing required field: method")

        return cls(
            method=data["method"],
            invocation_count=data.get("invocation_count", "any"),
            args=data.get("args"),
            consecutive_args=data.get("consecutive_args"),
        )


ExpectationLike = Union[ExpectationSpec, Mapping]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_invocation_count(value: Any, strict: bool = False) -> InvocationCount:
    """
    Map an invocation-count encoding to a cardinality.

    First match wins:

    - "never", 0 or "0": exactly zero
    - "atLeastOnce": one or more
    - containing "atLeast N" (N digits): at least N
    - "once": exactly one
    - an integer or a string of digits: exactly that many
    - anything else, including "any": zero or more

    Args:
        value: Invocation-count encoding
        strict: Raise instead of falling back to "any" for unrecognized values

    Returns:
        Resolved cardinality

    Raises:
        InvalidInvocationCountError: If strict and the value is unrecognized
    """
    if isinstance(value, str):
        if value in ("never", "0"):
            return never()
        if value == "atLeastOnce":
            return at_least_once()
        match = _AT_LEAST_PATTERN.search(value)
        if match:
            return at_least(int(match.group(1)))
        if value == "once":
            return once()
        if _DIGITS_PATTERN.fullmatch(value):
            return exactly(int(value))
        if value == "any":
            return any_count()
    elif _is_int(value):
        if value == 0:
            return never()
        if value > 0:
            return exactly(value)

    if strict:
        raise InvalidInvocationCountError(value)
    logger.warning(f"Unrecognized invocation count {value!r}, expecting any number of calls")
    return any_count()


def is_callable(value: Any) -> bool:
    return callable(value)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple, Mapping))


def parse_arg(arg_spec: Any) -> Any:
    """
    Map one argument spec to a matcher.

    - Matcher: returned unchanged
    - "isCallable" / "isArray": predicate matchers
    - other string: zero-argument matcher constructor of that name
    - [name, *args]: matcher constructor ``name`` called with ``args``
    - other callable: wrapped as a predicate matcher
    - anything else: returned unchanged

    Raises:
        UnknownMatcherError: For names missing from the matcher table
        MatcherError: For an empty [name, *args] list

    Errors raised by a matcher constructor (wrong arity, invalid values)
    propagate unchanged.
    """
    if isinstance(arg_spec, Matcher):
        return arg_spec
    if isinstance(arg_spec, str):
        if arg_spec == "isCallable":
            return callback(is_callable)
        if arg_spec == "isArray":
            return callback(is_array)
        return get_matcher_constructor(arg_spec)()
    if isinstance(arg_spec, (list, tuple)):
        if not arg_spec:
            raise MatcherError("Matcher specification list is empty")
        name, *constructor_args = arg_spec
        return get_matcher_constructor(name)(*constructor_args)
    if callable(arg_spec):
        return callback(arg_spec)
    return arg_spec


def parse_args(arg_specs: Iterable[Any]) -> List[Any]:
    """Map each argument spec to a matcher, preserving order and arity."""
    return [parse_arg(arg_spec) for arg_spec in arg_specs]


class MockBuilder:
    """
    Build configured mocks and verify them later.

    Args:
        factory: Mock creation provider (default: a new MockFactory)
        strict: Reject unrecognized invocation counts instead of treating
            them as "any"
    """

    def __init__(self, factory: Optional[MockFactory] = None, strict: bool = False):
        self.factory = factory if factory is not None else MockFactory()
        self.strict = strict
        self.mocks: List[Any] = []
        self._creators: Dict[TargetKind, Callable[[type], Any]] = {
            TargetKind.INTERFACE: self.factory.create_mock,
            TargetKind.CONCRETE: self.factory.create_mock,
            TargetKind.ABSTRACT: self.factory.create_abstract_mock,
            TargetKind.TRAIT: self.factory.create_trait_mock,
        }

    def build(
        self, target: type, expectations: Optional[Iterable[ExpectationLike]] = None
    ) -> Any:
        """
        Create a mock for ``target`` and attach the expectations in order.

        Args:
            target: Interface, abstract class, trait or concrete class
            expectations: ExpectationSpec instances or mappings

        Returns:
            The configured mock
        """
        kind = classify_target(target)
        mock = self._creators[kind](target)

        count = 0
        for expectation in expectations or []:
            self.add_expectation(mock, expectation)
            count += 1

        self.mocks.append(mock)
        logger.debug(
            f"Built {kind.value} mock for {target.__qualname__} "
            f"with {count} expectation(s)"
        )
        return mock

    def add_expectation(self, mock: Any, expectation: ExpectationLike) -> InvocationMocker:
        """Register one expectation on an existing mock."""
        if not isinstance(expectation, ExpectationSpec):
            expectation = ExpectationSpec.from_dict(expectation)

        cardinality = resolve_invocation_count(
            expectation.invocation_count, strict=self.strict
        )
        mocker = self.factory.expects(mock, cardinality).method(expectation.method)

        if expectation.consecutive_args is not None:
            mocker.with_consecutive(
                *[parse_args(args) for args in expectation.consecutive_args]
            )
        elif expectation.args is not None:
            mocker.with_args(*parse_args(expectation.args))

        return mocker

    def verify_all(self) -> None:
        """
        Verify every mock built so far.

        Raises:
            ExpectationFailedError: For the first unmet expectation
        """
        for mock in self.mocks:
            self.factory.verify(mock)


def build_mock(
    target: type,
    expectations: Optional[Iterable[ExpectationLike]] = None,
    strict: bool = False,
) -> Any:
    """
    Build a configured mock in one call.

    Verify it afterwards with ``doublekit.verify(mock)``.
    """
    return MockBuilder(strict=strict).build(target, expectations)
