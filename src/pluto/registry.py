"""Binding storage and the ``bind(name).to_...`` DSL."""

import inspect
import threading
from typing import Any, Iterator

import structlog

from pluto.domain import Binding, BindingStrategy
from pluto.errors import (
    DuplicateBindingError,
    NotAFunctionError,
    NullTargetError,
    UndefinedTargetError,
    UnmappedNameError,
)

__all__ = ["BindingRegistry", "Binder"]

logger = structlog.get_logger(__name__)

_MISSING: Any = object()


class BindingRegistry:
    """Registry of bindings keyed by name. Each name may be bound once."""

    def __init__(self):
        self._bindings: dict[str, Binding] = {}
        self._lock = threading.RLock()

    def register(self, binding: Binding):
        """Register a binding explicitly.

        Args:
            binding: The Binding to store.

        Raises:
            DuplicateBindingError: If the binding's name is already taken.
        """
        with self._lock:
            self.check_unbound(binding.name)
            self._bindings[binding.name] = binding
        logger.debug(
            "Registered binding", name=binding.name, strategy=binding.strategy.value
        )

    def check_unbound(self, name: str):
        if name in self._bindings:
            raise DuplicateBindingError(
                f"module already contains a mapping with the name '{name}'"
            )

    def lookup(self, name: str) -> Binding:
        try:
            return self._bindings[name]
        except KeyError:
            raise UnmappedNameError(name) from None

    def names(self) -> list[str]:
        """Bound names, in the order they were bound."""
        with self._lock:
            return list(self._bindings)

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._bindings)


class Binder:
    """Binds a single name to an instance, factory or constructor.

    Example:
        >>> container("greeting").to_instance("Hello")
        >>> container("greeter").to_factory(make_greeter)
        >>> container("printer").to_constructor(Printer)
    """

    def __init__(self, registry: BindingRegistry, name: str):
        self._registry = registry
        self._name = name

    def to_instance(self, instance: Any = _MISSING):
        """Bind the name to a value, or to an awaitable that settles to it."""
        self._bind(BindingStrategy.INSTANCE, instance)

    def to_factory(self, factory: Any = _MISSING):
        """Bind the name to the result of calling ``factory`` with its dependencies."""
        self._bind(BindingStrategy.FACTORY, factory)

    def to_constructor(self, constructor: Any = _MISSING):
        """Bind the name to an instance of ``constructor`` built with its dependencies."""
        self._bind(BindingStrategy.CONSTRUCTOR, constructor)

    def _bind(self, strategy: BindingStrategy, target: Any):
        self._validate_binding(target)
        if strategy is not BindingStrategy.INSTANCE:
            self._validate_invocable(target)
        self._registry.register(Binding(self._name, strategy, target))

    def _validate_binding(self, target: Any):
        self._registry.check_unbound(self._name)
        if target is _MISSING:
            raise UndefinedTargetError(
                f"cannot bind '{self._name}' because the specified target is undefined."
            )
        if target is None:
            raise NullTargetError(
                f"cannot bind '{self._name}' because the specified target is null."
            )

    def _validate_invocable(self, target: Any):
        if not (callable(target) or inspect.isawaitable(target)):
            raise NotAFunctionError(
                f"cannot bind '{self._name}' because the specified target "
                "is not a function or awaitable."
            )
