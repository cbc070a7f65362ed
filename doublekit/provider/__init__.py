"""
Mocking provider for doublekit.

Built on ``unittest.mock``, this package adds what the standard library does
not have: argument matchers, invocation-count expectations, consecutive-call
argument checks and a verification step.
"""

from doublekit.provider.cardinality import (
    InvocationCount,
    AnyInvokedCount,
    InvokedCount,
    InvokedAtLeastCount,
    any_count,
    never,
    once,
    exactly,
    at_least,
    at_least_once,
)
from doublekit.provider.matchers import (
    Matcher,
    MATCHER_CONSTRUCTORS,
    as_matcher,
    get_matcher_constructor,
    list_matcher_names,
)
from doublekit.provider.invocation import (
    Invocation,
    InvocationMocker,
    ExpectationBuilder,
    MockController,
)
from doublekit.provider.factory import (
    MockFactory,
    controller_for,
    expects,
    verify,
)

__all__ = [
    # Cardinality
    "InvocationCount",
    "AnyInvokedCount",
    "InvokedCount",
    "InvokedAtLeastCount",
    "any_count",
    "never",
    "once",
    "exactly",
    "at_least",
    "at_least_once",
    # Matchers
    "Matcher",
    "MATCHER_CONSTRUCTORS",
    "as_matcher",
    "get_matcher_constructor",
    "list_matcher_names",
    # Invocations
    "Invocation",
    "InvocationMocker",
    "ExpectationBuilder",
    "MockController",
    # Mock creation
    "MockFactory",
    "controller_for",
    "expects",
    "verify",
]
