"""Derive the dependencies of a factory or constructor from its signature."""

import functools
import inspect
from typing import Any, Annotated, Callable, get_args, get_origin, get_type_hints

import structlog

from pluto.domain import Dependency
from pluto.errors import DependencyError

__all__ = ["dependencies_of"]

logger = structlog.get_logger(__name__)

_INJECTABLE_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def dependencies_of(target: Callable) -> list[Dependency]:
    """Extract dependency information from a callable's parameter list.

    Each named parameter is a dependency on the binding of the same name, in
    declared order. A parameter annotated with ``Annotated[T, "name"]`` depends
    on ``name`` instead. ``*args`` and ``**kwargs`` are ignored. Functions,
    classes, ``functools.partial`` objects and callable instances are all
    supported.

    Args:
        target: The factory function or class to analyse.

    Returns:
        List of Dependency objects, empty when the target takes no parameters.

    Raises:
        DependencyError: If a string annotation cannot be evaluated.

    Example:
        >>> def make_greeter(greeting, name: Annotated[str, "user_name"]): ...
        >>> dependencies_of(make_greeter)
        >>> # [Dependency("greeting", None, "greeting"),
        >>> #  Dependency("name", str, "user_name")]
    """
    try:
        sig = inspect.signature(target)
    except ValueError:
        # builtins such as dict expose no signature
        logger.debug("No signature found", target=repr(target))
        return []

    parameters = [p for p in sig.parameters.values() if p.kind in _INJECTABLE_KINDS]
    hints = (
        _evaluated_hints(target)
        if any(isinstance(p.annotation, str) for p in parameters)
        else {}
    )
    return [
        _make_dependency(param, _annotation_of(param, hints)) for param in parameters
    ]


def _annotated_function(target: Any) -> Any:
    if isinstance(target, functools.partial):
        return _annotated_function(target.func)
    if inspect.isclass(target):
        return target.__init__
    if inspect.isfunction(target) or inspect.ismethod(target):
        return target
    return type(target).__call__


def _evaluated_hints(target: Any) -> dict[str, Any]:
    try:
        return get_type_hints(_annotated_function(target), include_extras=True)
    except NameError as e:
        raise DependencyError(
            f"Annotations of provider <{target!r}> cannot be evaluated: {e}"
        ) from e


def _annotation_of(param: inspect.Parameter, hints: dict[str, Any]) -> Any:
    if param.annotation is inspect.Parameter.empty:
        return None
    if isinstance(param.annotation, str):
        return hints.get(param.name)
    return param.annotation


def _make_dependency(param: inspect.Parameter, annotation: Any) -> Dependency:
    keyword_only = param.kind is inspect.Parameter.KEYWORD_ONLY
    has_default = param.default is not inspect.Parameter.empty

    if annotation is None:
        return Dependency(param.name, None, param.name, keyword_only, has_default)

    if get_origin(annotation) is Annotated:
        base_type, *metadata = get_args(annotation)
        component_name = next((m for m in metadata if isinstance(m, str)), param.name)
        return Dependency(
            param.name, base_type, component_name, keyword_only, has_default
        )

    return Dependency(param.name, annotation, param.name, keyword_only, has_default)
