"""
doublekit: declarative test doubles.

Build mocks with invocation-count expectations and argument matchers from a
target class and a list of expected calls:

    from doublekit import build_mock, verify

    mock = build_mock(
        DependencyInterface,
        [{"method": "handle", "invocation_count": "atLeast 2", "args": ["isTrue"]}],
    )
    ...
    verify(mock)
"""

from doublekit.builder import (
    ExpectationSpec,
    MockBuilder,
    build_mock,
    parse_args,
    resolve_invocation_count,
)
from doublekit.core.exceptions import (
    DoubleKitError,
    ExpectationFailedError,
    UnknownMatcherError,
    UnknownMethodError,
)
from doublekit.provider import MockFactory, expects, verify
from doublekit.targets import TargetKind, Trait, classify_target

__all__ = [
    "ExpectationSpec",
    "MockBuilder",
    "build_mock",
    "parse_args",
    "resolve_invocation_count",
    "DoubleKitError",
    "ExpectationFailedError",
    "UnknownMatcherError",
    "UnknownMethodError",
    "MockFactory",
    "expects",
    "verify",
    "TargetKind",
    "Trait",
    "classify_target",
]
