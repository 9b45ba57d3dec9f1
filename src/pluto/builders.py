"""Invoke factories and constructors with their resolved dependencies."""

import inspect
from typing import Any, Callable

from pluto.domain import Binding, BindingStrategy, Dependency

__all__ = ["settle", "call_arguments", "invoke"]


async def settle(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def call_arguments(
    dependencies: list[Dependency], resolved: dict[str, Any]
) -> tuple[list[Any], dict[str, Any]]:
    """Split resolved dependencies into positional and keyword arguments.

    Args:
        dependencies: The target's dependencies in declared order.
        resolved: Resolved values keyed by parameter name. Optional
            dependencies that were not bound are absent.

    Returns:
        The positional arguments in declared order and the keyword arguments.
        Once an optional parameter is left to its default, later parameters are
        passed by keyword.
    """
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    skipped = False

    for dependency in dependencies:
        if dependency.parameter_name not in resolved:
            skipped = True
            continue
        value = resolved[dependency.parameter_name]
        if dependency.keyword_only or skipped:
            kwargs[dependency.parameter_name] = value
        else:
            args.append(value)

    return args, kwargs


async def invoke(
    binding: Binding,
    target: Callable,
    dependencies: list[Dependency],
    resolved: dict[str, Any],
) -> Any:
    """Invoke a factory or constructor and settle its result.

    Args:
        binding: The binding being resolved.
        target: The settled factory or constructor.
        dependencies: The target's dependencies in declared order.
        resolved: Resolved values keyed by parameter name.

    Returns:
        The factory's result, or the constructed instance. An awaitable result
        is awaited first, unless it is the instance a class just constructed.
    """
    args, kwargs = call_arguments(dependencies, resolved)
    value = target(*args, **kwargs)

    if (
        binding.strategy is BindingStrategy.CONSTRUCTOR
        and inspect.isclass(target)
        and isinstance(value, target)
    ):
        return value
    return await settle(value)
