"""
The container: binding by name and asynchronous, memoized resolution.

A container maps names to bindings. Resolving a name settles its target,
resolves the target's dependencies by parameter name, invokes it, and caches
the outcome so that each binding is resolved at most once. Concurrent requests
for the same name share a single in-flight resolution.
"""

import asyncio
import threading
from typing import Any, Callable, Iterable, Optional, Sequence

import structlog

from pluto.application import Application
from pluto.builders import invoke, settle
from pluto.domain import Binding, BindingStrategy
from pluto.errors import NotAFunctionError
from pluto.graph import DependencyGraph, ResolutionObserver
from pluto.introspection import dependencies_of
from pluto.registry import Binder, BindingRegistry

__all__ = ["Container", "create_container"]

logger = structlog.get_logger(__name__)


class Container:
    """
    Registry of named bindings with lazy, memoized resolution.

    Calling the container with a name returns a :class:`Binder` for that name,
    so the container itself can be handed to setup code as the ``bind``
    function.

    Args:
        observers: Additional observers notified as resolution progresses.
            The container's own :class:`DependencyGraph` is always notified.
        self_bindings: If True (default), bind ``pluto_binder``, ``pluto_graph``
            and ``pluto_app`` to the container, its graph and its application
            snapshot, so that they can be injected like any other dependency.
    """

    def __init__(
        self,
        observers: Iterable[ResolutionObserver] = (),
        self_bindings: bool = True,
    ):
        self._registry = BindingRegistry()
        self._resolutions: dict[str, asyncio.Future] = {}
        self._lock = threading.RLock()
        self.graph = DependencyGraph()
        self.application = Application()
        self._observers: list[ResolutionObserver] = [self.graph, *observers]

        if self_bindings:
            self.bind("pluto_binder").to_instance(self)
            self.bind("pluto_graph").to_instance(self.graph)
            self.bind("pluto_app").to_instance(self.application)

    def bind(self, name: str) -> Binder:
        return Binder(self._registry, name)

    __call__ = bind

    def names(self) -> list[str]:
        return self._registry.names()

    def __contains__(self, name: str) -> bool:
        return name in self._registry

    async def get(self, name: str) -> Any:
        """Resolve a single name.

        Args:
            name: The bound name to resolve.

        Returns:
            The resolved value. Every call for the same name returns the
            same value.

        Raises:
            UnmappedNameError: If nothing is bound to ``name``.
        """
        # a cancelled caller must not cancel the resolution it shares
        return await asyncio.shield(self._resolution(name))

    async def get_all(self, names: Sequence[str]) -> list[Any]:
        """Resolve several names concurrently, returning values in input order.

        Raises:
            DependencyError: The first error raised by any of the resolutions.
        """
        return list(await asyncio.gather(*(self.get(name) for name in names)))

    async def eagerly_load_all(self) -> Application:
        """Resolve every bound name and return the filled application snapshot."""
        names = self.names()
        values = await self.get_all(names)
        self.application._load(dict(zip(names, values)))
        logger.info("Eagerly loaded all bindings", count=len(names))
        return self.application

    def _resolution(self, name: str) -> asyncio.Future:
        with self._lock:
            resolution = self._resolutions.get(name)
            if resolution is None:
                binding = self._registry.lookup(name)
                for observer in self._observers:
                    observer.node_requested(name)
                resolution = asyncio.ensure_future(self._resolve(binding))
                self._resolutions[name] = resolution
            return resolution

    async def _resolve(self, binding: Binding) -> Any:
        logger.debug(
            "Resolving binding", name=binding.name, strategy=binding.strategy.value
        )
        target = await settle(binding.target)

        if binding.strategy is BindingStrategy.INSTANCE:
            self._dependencies_resolved(binding, [])
            return target

        if not callable(target):
            raise NotAFunctionError(
                f"cannot resolve '{binding.name}' because its target "
                f"settled to {target!r}, which is not a function."
            )

        dependencies = dependencies_of(target)
        injected = [
            dependency
            for dependency in dependencies
            if not dependency.has_default or dependency.component_name in self
        ]
        values = await self.get_all([d.component_name for d in injected])
        self._dependencies_resolved(binding, [d.component_name for d in injected])

        resolved = {
            dependency.parameter_name: value
            for dependency, value in zip(injected, values)
        }
        return await invoke(binding, target, dependencies, resolved)

    def _dependencies_resolved(self, binding: Binding, dependency_names: list[str]):
        for observer in self._observers:
            observer.dependencies_resolved(
                binding.name, binding.strategy, dependency_names
            )


def create_container(
    setup: Optional[Callable[[Container], Any]] = None,
    *,
    observers: Iterable[ResolutionObserver] = (),
    self_bindings: bool = True,
) -> Container:
    """
    Create a container and populate it.

    Args:
        setup: An optional callback invoked synchronously with the container
            as its ``bind`` function.
        observers: Additional resolution observers.
        self_bindings: Whether to bind the built-in ``pluto_*`` names.

    Returns:
        The populated container, ready to resolve.

    Example:
        >>> def setup(bind):
        ...     bind("greeting").to_instance("Hello")
        ...     bind("greeter").to_constructor(Greeter)
        >>> container = create_container(setup)
        >>> greeter = await container.get("greeter")
    """
    container = Container(observers, self_bindings)
    if setup is not None:
        setup(container)
    return container
