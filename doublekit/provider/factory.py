"""
Mock creation primitives.

``MockFactory`` offers one entry point per kind of target:

- ``create_mock``: every method is stubbed (``create_autospec``); used for
  interfaces and concrete classes.
- ``create_abstract_mock``: abstract members are stubbed, concrete members
  keep their original behavior.
- ``create_trait_mock``: the trait's concrete methods keep their behavior and
  its abstract requirements are stubbed.

The last two are built by composition: the mock is spec'd on the target and
wraps a delegate object whose class fills in the abstract members with no-op
stubs. The delegate's abstract members are then pointed back at the mock, so
concrete code calling them is seen by the mock. Every mock gets a
``MockController`` for expectations.
"""

import inspect
import logging
from typing import Any, Dict, Set
from unittest.mock import MagicMock, create_autospec

from doublekit.core.exceptions import MockCreationError
from doublekit.provider.cardinality import InvocationCount
from doublekit.provider.invocation import ExpectationBuilder, MockController

logger = logging.getLogger(__name__)

CONTROLLER_ATTRIBUTE = "_doublekit_controller"


def _require_class(target: Any) -> None:
    if not inspect.isclass(target):
        raise MockCreationError(f"Can only mock classes, got {target!r}")


def abstract_member_names(target: type) -> Set[str]:
    """
    Collect the names of a class's unimplemented abstract members.

    Works for ABCs (``__abstractmethods__``) and for plain mixins that use
    ``@abstractmethod`` without ``ABCMeta``.
    """
    names = set(getattr(target, "__abstractmethods__", ()))
    for name in dir(target):
        try:
            value = inspect.getattr_static(target, name)
        except AttributeError:
            continue
        if getattr(value, "__isabstractmethod__", False):
            names.add(name)
    return names


def _make_stub(target: type, name: str) -> Any:
    if isinstance(inspect.getattr_static(target, name, None), property):
        return property(lambda self: None)

    def stub(self, *args, **kwargs):
        return None

    stub.__name__ = name
    return stub


def _init_takes_no_arguments(cls: type) -> bool:
    init = cls.__init__
    if init is object.__init__:
        return True
    try:
        parameters = list(inspect.signature(init).parameters.values())[1:]
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in parameters
    )


def build_delegate(target: type, suffix: str) -> Any:
    """
    Instantiate a concrete stand-in for an abstract class or trait.

    The generated class derives from ``target`` and replaces every abstract
    member with a stub returning None. The target's ``__init__`` runs when it
    can be called without arguments; otherwise it is skipped.

    Args:
        target: Class to derive from
        suffix: Appended to the generated class name (e.g. "Stub", "Host")

    Returns:
        Instance of the generated class

    Raises:
        MockCreationError: If the class cannot be derived or instantiated
    """
    namespace: Dict[str, Any] = {
        name: _make_stub(target, name) for name in abstract_member_names(target)
    }
    try:
        delegate_class = type(f"{target.__name__}{suffix}", (target,), namespace)
        if _init_takes_no_arguments(delegate_class):
            return delegate_class()
        logger.debug(f"Skipping __init__ of {target.__qualname__}: it requires arguments")
        return delegate_class.__new__(delegate_class)
    except TypeError as e:
        raise MockCreationError(
            f"Cannot build a delegate for {target.__qualname__}: {e}"
        ) from e


def route_abstract_members(mock: Any, delegate: Any, target: type) -> None:
    """
    Send the delegate's calls to its abstract members through the mock.

    Concrete methods run with the delegate as ``self``; routing makes their
    ``self.<abstract>()`` calls hit the mock's stub, so expectations and
    return values configured on the mock apply to them. Abstract properties
    keep their None-valued stub.
    """
    for name in abstract_member_names(target):
        if isinstance(inspect.getattr_static(target, name, None), property):
            continue
        # The child wraps the delegate's original stub, captured on first access
        delegate.__dict__[name] = getattr(mock, name)


class MockFactory:
    """Create mocks for interfaces, abstract classes and traits."""

    def create_mock(self, target: type) -> Any:
        """
        Create a mock with every method stubbed.

        The mock passes ``isinstance(mock, target)`` and enforces each
        method's signature.
        """
        _require_class(target)
        logger.debug(f"Creating mock for {target.__qualname__}")
        mock = create_autospec(target, instance=True)
        return self._attach_controller(mock, target)

    def create_abstract_mock(self, target: type) -> Any:
        """Create a mock stubbing only the abstract members of ``target``."""
        _require_class(target)
        logger.debug(f"Creating abstract class mock for {target.__qualname__}")
        delegate = build_delegate(target, "Stub")
        mock = MagicMock(spec=target, wraps=delegate)
        route_abstract_members(mock, delegate, target)
        return self._attach_controller(mock, target)

    def create_trait_mock(self, target: type) -> Any:
        """
        Create a mock exposing a trait's methods.

        Calls are forwarded to a host object that mixes in the trait, so the
        trait's concrete methods return their real results.
        """
        _require_class(target)
        logger.debug(f"Creating trait mock for {target.__qualname__}")
        host = build_delegate(target, "Host")
        mock = MagicMock(spec=target, wraps=host)
        route_abstract_members(mock, host, target)
        return self._attach_controller(mock, target)

    def expects(self, mock: Any, cardinality: InvocationCount) -> ExpectationBuilder:
        return expects(mock, cardinality)

    def verify(self, mock: Any) -> None:
        verify(mock)

    @staticmethod
    def _attach_controller(mock: Any, target: type) -> Any:
        # Stored in __dict__ directly so the mock does not treat it as
        # a mocked attribute
        mock.__dict__[CONTROLLER_ATTRIBUTE] = MockController(mock, target)
        return mock


def controller_for(mock: Any) -> MockController:
    """
    Get the controller of a mock created by ``MockFactory``.

    Raises:
        MockCreationError: If the object was not created by a MockFactory
    """
    controller = getattr(mock, "__dict__", {}).get(CONTROLLER_ATTRIBUTE)
    if controller is None:
        raise MockCreationError(f"{mock!r} was not created by a doublekit MockFactory")
    return controller


def expects(mock: Any, cardinality: InvocationCount) -> ExpectationBuilder:
    """
    Start registering an expectation on a mock.

    Example:
        >>> expects(mock, once()).method("save").with_args(equal_to("x"))
    """
    return controller_for(mock).expects(cardinality)


def verify(mock: Any) -> None:
    """
    Verify all expectations registered on a mock.

    Raises:
        ExpectationFailedError: For the first unmet expectation
    """
    controller_for(mock).verify()
