"""
Classification of mock targets.

A target class is one of:

- interface: a ``typing.Protocol``, or an abstract class whose public methods
  are all abstract
- trait: a reusable method bundle, declared by listing ``Trait`` as a direct
  base class
- abstract: any other class with unimplemented abstract methods
- concrete: everything else
"""

import inspect
import logging
from enum import Enum
from typing import Any

from doublekit.core.exceptions import MockCreationError

logger = logging.getLogger(__name__)


class Trait:
    """
    Marker base for trait-like mixins.

    A trait bundles methods meant to be mixed into host classes. It may
    require methods from its host by declaring them with ``@abstractmethod``.

    Example:
        class GreetingTrait(Trait):
            @abstractmethod
            def name(self) -> str: ...

            def greet(self) -> str:
                return f"Hello, {self.name()}"
    """

    pass


class TargetKind(Enum):
    """Kind of a mock target, as detected by ``classify_target``."""

    INTERFACE = "interface"
    ABSTRACT = "abstract"
    TRAIT = "trait"
    CONCRETE = "concrete"


def is_protocol(target: type) -> bool:
    return getattr(target, "_is_protocol", False) is True


def is_interface(target: type) -> bool:
    """Check whether a class only declares abstract public methods."""
    if is_protocol(target):
        return True
    if not inspect.isabstract(target):
        return False

    methods = []
    for name in dir(target):
        if name.startswith("_"):
            continue
        member = inspect.getattr_static(target, name)
        if inspect.isfunction(member) or isinstance(
            member, (staticmethod, classmethod, property)
        ):
            methods.append(member)

    return bool(methods) and all(
        getattr(m, "__isabstractmethod__", False) for m in methods
    )


def is_trait(target: type) -> bool:
    return Trait in target.__bases__


def classify_target(target: Any) -> TargetKind:
    """
    Detect the kind of a target class.

    Interface detection takes precedence over trait and abstract detection.

    Args:
        target: Class to classify

    Returns:
        TargetKind of the class

    Raises:
        MockCreationError: If target is not a class
    """
    if not inspect.isclass(target):
        raise MockCreationError(f"Can only mock classes, got {target!r}")

    if is_interface(target):
        kind = TargetKind.INTERFACE
    elif is_trait(target):
        kind = TargetKind.TRAIT
    elif inspect.isabstract(target):
        kind = TargetKind.ABSTRACT
    else:
        kind = TargetKind.CONCRETE

    logger.debug(f"Classified {target.__qualname__} as {kind.value}")
    return kind
