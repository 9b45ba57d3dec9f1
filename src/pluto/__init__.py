"""Pluto dependency injection container.

Pluto binds names to instances, factories and constructors, and resolves them
lazily. The dependencies of a factory or constructor are the names of its
parameters, each resolved from the same container before the target is
invoked. Every binding is resolved at most once, and awaitables are settled
transparently, so that asynchronous factories and instances mix freely with
synchronous ones.

Key Features:
    - Binding by name with immediate validation
    - Dependencies inferred from parameter names, or named with ``Annotated``
    - Memoized, single-flight asynchronous resolution
    - Eager loading into a read-only, synchronously readable snapshot
    - Dependency graph recording for inspection

Basic Usage:
    >>> from pluto import create_container
    >>>
    >>> def make_greeter(greeting, name):
    ...     return lambda: f"{greeting}, {name}!"
    >>>
    >>> def setup(bind):
    ...     bind("greeting").to_instance("Hello")
    ...     bind("name").to_instance(fetch_name())  # an awaitable works too
    ...     bind("greet").to_factory(make_greeter)
    >>>
    >>> container = create_container(setup)
    >>> app = await container.eagerly_load_all()
    >>> app["greet"]()

The package consists of several modules:
    - container: the container, resolution and memoization
    - registry: binding storage and the binding DSL
    - introspection: dependency extraction from signatures
    - builders: invocation of factories and constructors
    - application: the eagerly loaded snapshot
    - graph: resolution observers and the dependency graph
    - errors: framework-specific exceptions
"""

from pluto.application import Application
from pluto.container import Container, create_container
from pluto.domain import Binding, BindingStrategy, Dependency
from pluto.errors import (
    DependencyError,
    DuplicateBindingError,
    NotAFunctionError,
    NullTargetError,
    UndefinedTargetError,
    UnmappedNameError,
)
from pluto.graph import RESERVED_NAMES, DependencyGraph, GraphNode, ResolutionObserver
from pluto.registry import Binder

__all__ = [
    "Application",
    "Binder",
    "Binding",
    "BindingStrategy",
    "Container",
    "Dependency",
    "DependencyError",
    "DependencyGraph",
    "DuplicateBindingError",
    "GraphNode",
    "NotAFunctionError",
    "NullTargetError",
    "RESERVED_NAMES",
    "ResolutionObserver",
    "UndefinedTargetError",
    "UnmappedNameError",
    "create_container",
]
