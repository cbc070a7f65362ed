"""
Invocation tracking and expectation checking for mocks.

Every mock created by ``MockFactory`` carries a ``MockController``. Registering
an expectation wires the controller into the mocked method's ``side_effect``;
from then on every call is turned into an ``Invocation`` and handed to each
``InvocationMocker`` registered for that method. Mockers reject calls that
exceed their cardinality or fail their argument matchers, and report unmet
lower bounds when the controller is verified.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from unittest.mock import DEFAULT

from doublekit.core.exceptions import ExpectationFailedError, UnknownMethodError
from doublekit.provider.cardinality import InvocationCount
from doublekit.provider.matchers import Matcher, as_matcher

logger = logging.getLogger(__name__)


def method_signature(target: type, method_name: str) -> Optional[inspect.Signature]:
    """
    Get the call signature of a method as seen from an instance.

    The implicit ``self``/``cls`` parameter is dropped. Returns None when the
    attribute is not a plain function, staticmethod or classmethod, or when
    its signature cannot be introspected.
    """
    try:
        attribute = inspect.getattr_static(target, method_name)
    except AttributeError:
        return None

    if isinstance(attribute, staticmethod):
        function, skip_first = attribute.__func__, False
    elif isinstance(attribute, classmethod):
        function, skip_first = attribute.__func__, True
    elif inspect.isfunction(attribute):
        function, skip_first = attribute, True
    else:
        return None

    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return None

    parameters = list(signature.parameters.values())
    if skip_first and parameters:
        parameters = parameters[1:]
    return signature.replace(parameters=parameters)


@dataclass
class Invocation:
    """A single call received by a mocked method."""

    method_name: str
    args: tuple
    kwargs: Dict[str, Any]
    # Arguments actually passed, in parameter order
    parameters: List[Any] = field(default_factory=list)

    @classmethod
    def from_call(
        cls,
        method_name: str,
        signature: Optional[inspect.Signature],
        args: tuple,
        kwargs: Dict[str, Any],
    ) -> "Invocation":
        """
        Build an invocation, normalizing arguments to parameter order.

        Keyword arguments are placed at the position of the parameter they
        bind to, so ``f(1, flag=True)`` and ``f(1, True)`` produce the same
        ``parameters``. Parameters left out of the call are filled in with
        their defaults.
        Without a usable signature, positional arguments come first followed
        by keyword values in call order.
        """
        parameters = list(args) + list(kwargs.values())
        if signature is not None:
            try:
                bound = signature.bind(*args, **kwargs)
            except TypeError:
                pass
            else:
                bound.apply_defaults()
                parameters = []
                for name, value in bound.arguments.items():
                    kind = signature.parameters[name].kind
                    if kind is inspect.Parameter.VAR_POSITIONAL:
                        parameters.extend(value)
                    elif kind is inspect.Parameter.VAR_KEYWORD:
                        parameters.extend(value.values())
                    else:
                        parameters.append(value)

        return cls(
            method_name=method_name,
            args=tuple(args),
            kwargs=dict(kwargs),
            parameters=parameters,
        )

    def __str__(self) -> str:
        rendered = [repr(a) for a in self.args]
        rendered.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"{self.method_name}({', '.join(rendered)})"


# ============================================================================
# Parameter Rules
# ============================================================================


class ParametersRule:
    """Applies one ordered list of matchers to every matching call."""

    def __init__(self, matchers: Sequence[Any]):
        self.matchers: List[Matcher] = [as_matcher(m) for m in matchers]

    def apply(self, invocation: Invocation, call_index: int) -> None:
        """
        Check an invocation's arguments.

        Arguments beyond the number of matchers are not constrained.

        Raises:
            ExpectationFailedError: If there are fewer arguments than matchers
                or an argument is rejected by its matcher
        """
        if len(invocation.parameters) < len(self.matchers):
            raise ExpectationFailedError(
                f"Parameter count for invocation {invocation} is too low: "
                f"expected at least {len(self.matchers)}, "
                f"got {len(invocation.parameters)}."
            )

        for index, matcher in enumerate(self.matchers):
            value = invocation.parameters[index]
            if not matcher.matches(value):
                raise ExpectationFailedError(
                    f"Parameter {index} for invocation {invocation} does not "
                    f"match expected value.\n"
                    f"Failed asserting that {value!r} {matcher.describe()}."
                )


class ConsecutiveParametersRule:
    """Applies matcher list *i* to the *i*-th call; later calls are unconstrained."""

    def __init__(self, matcher_lists: Sequence[Sequence[Any]]):
        self.rules = [ParametersRule(matchers) for matchers in matcher_lists]

    def apply(self, invocation: Invocation, call_index: int) -> None:
        if call_index >= len(self.rules):
            return
        try:
            self.rules[call_index].apply(invocation, call_index)
        except ExpectationFailedError as e:
            raise ExpectationFailedError(f"Call #{call_index + 1}: {e}") from None


# ============================================================================
# Invocation Mocker
# ============================================================================


class InvocationMocker:
    """
    Expectation for one method: a cardinality plus an optional parameter rule.

    Returned by ``ExpectationBuilder.method()``; configure it fluently:

        expects(mock, once()).method("save").with_args(equal_to("x"))
    """

    def __init__(self, method_name: str, cardinality: InvocationCount):
        self.method_name = method_name
        self.cardinality = cardinality
        self.parameter_rule: Optional[Any] = None
        self.invocations: List[Invocation] = []
        self.failures: List[ExpectationFailedError] = []

    def with_args(self, *matchers: Any) -> "InvocationMocker":
        """
        Constrain the arguments of every matching call.

        Args:
            *matchers: One matcher per positional parameter; plain values are
                wrapped in an equality matcher

        Returns:
            self, for chaining
        """
        self.parameter_rule = ParametersRule(matchers)
        return self

    def with_consecutive(self, *matcher_lists: Sequence[Any]) -> "InvocationMocker":
        """
        Constrain the arguments of successive calls, one matcher list per call.

        Args:
            *matcher_lists: Matcher list for call 1, call 2, ...

        Returns:
            self, for chaining
        """
        self.parameter_rule = ConsecutiveParametersRule(matcher_lists)
        return self

    def invoke(self, invocation: Invocation) -> None:
        """
        Record a call and check it against the expectation.

        Raises:
            ExpectationFailedError: If the call exceeds the cardinality or
                its arguments are rejected
        """
        self.invocations.append(invocation)
        call_number = len(self.invocations)

        try:
            if not self.cardinality.allows_call(call_number):
                raise ExpectationFailedError(
                    f"{invocation} was not expected to be called more than "
                    f"{self.cardinality.maximum} time(s)."
                )
            if self.parameter_rule is not None:
                self.parameter_rule.apply(invocation, call_number - 1)
        except ExpectationFailedError as e:
            self.failures.append(e)
            raise

    def verify(self) -> None:
        """
        Check that the expectation was met.

        Raises:
            ExpectationFailedError: For the first failure recorded at call
                time, or if the method was called too few times
        """
        if self.failures:
            raise self.failures[0]

        call_count = len(self.invocations)
        if not self.cardinality.is_satisfied_by(call_count):
            raise ExpectationFailedError(
                f"Expectation failed for method '{self.method_name}' when "
                f"{self.cardinality.describe()}.\n"
                f"Method was expected to be {self.cardinality.describe()}, "
                f"actually called {call_count} time(s)."
            )

    def __repr__(self) -> str:
        return (
            f"<InvocationMocker {self.method_name}: "
            f"{self.cardinality.describe()}, {len(self.invocations)} call(s)>"
        )


class ExpectationBuilder:
    """Intermediate step of ``expects(mock, cardinality).method(name)``."""

    def __init__(self, controller: "MockController", cardinality: InvocationCount):
        self._controller = controller
        self._cardinality = cardinality

    def method(self, method_name: str) -> InvocationMocker:
        return self._controller.register(method_name, self._cardinality)


# ============================================================================
# Mock Controller
# ============================================================================


class MockController:
    """
    Registry of invocation mockers for a single mock.

    The controller stores mockers by method name and is the ``side_effect``
    of every method that has at least one expectation.
    """

    def __init__(self, mock: Any, target: type):
        self.mock = mock
        self.target = target
        self._mockers: Dict[str, List[InvocationMocker]] = {}
        self._signatures: Dict[str, Optional[inspect.Signature]] = {}

    def expects(self, cardinality: InvocationCount) -> ExpectationBuilder:
        return ExpectationBuilder(self, cardinality)

    def register(self, method_name: str, cardinality: InvocationCount) -> InvocationMocker:
        """
        Register an expectation for a method.

        Args:
            method_name: Name of a method defined by the target
            cardinality: Expected number of calls

        Returns:
            The new InvocationMocker

        Raises:
            UnknownMethodError: If the target does not define the method
        """
        if method_name not in self._mockers:
            self._wire(method_name)

        mocker = InvocationMocker(method_name, cardinality)
        self._mockers[method_name].append(mocker)
        logger.debug(
            f"Expecting {self.target.__qualname__}.{method_name} "
            f"{cardinality.describe()}"
        )
        return mocker

    def _wire(self, method_name: str) -> None:
        if not isinstance(method_name, str) or not callable(
            getattr(self.target, method_name, None)
        ):
            raise UnknownMethodError(self.target.__qualname__, str(method_name))

        stub = getattr(self.mock, method_name)
        self._signatures[method_name] = method_signature(self.target, method_name)
        self._mockers[method_name] = []

        def side_effect(*args, **kwargs):
            return self.dispatch(method_name, args, kwargs)

        stub.side_effect = side_effect

    def dispatch(self, method_name: str, args: tuple, kwargs: Dict[str, Any]) -> Any:
        """Hand a call to every mocker of the method; return ``DEFAULT``."""
        invocation = Invocation.from_call(
            method_name, self._signatures.get(method_name), args, kwargs
        )
        for mocker in self._mockers.get(method_name, []):
            mocker.invoke(invocation)
        return DEFAULT

    @property
    def invocation_mockers(self) -> List[InvocationMocker]:
        return [m for mockers in self._mockers.values() for m in mockers]

    def verify(self) -> None:
        """
        Verify every registered expectation, in registration order per method.

        Raises:
            ExpectationFailedError: For the first unmet expectation
        """
        for mocker in self.invocation_mockers:
            mocker.verify()
