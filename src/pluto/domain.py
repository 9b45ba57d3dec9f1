"""Domain models used throughout the container."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class BindingStrategy(str, Enum):
    """How a bound target is turned into a resolved value."""

    INSTANCE = "instance"
    FACTORY = "factory"
    CONSTRUCTOR = "constructor"


@dataclass(frozen=True)
class Binding:
    """A name mapped to a resolution strategy and its target.

    Attributes:
        name: The name the target is bound to, unique within a container.
        strategy: How the target is resolved.
        target: The instance itself, or the factory or constructor to invoke.
            Any of these may be an awaitable that settles to the real target.
    """

    name: str
    strategy: BindingStrategy
    target: Any


@dataclass(frozen=True)
class Dependency:
    """Represents a dependency required by a factory or constructor.

    Attributes:
        parameter_name: The parameter name in the target's signature.
        declared_type: The annotated type of the parameter, if any.
        component_name: The bound name that fulfils this dependency.
        keyword_only: Whether the argument must be passed by keyword.
        has_default: Whether the parameter can fall back to its default value.
    """

    parameter_name: str
    declared_type: Optional[type]
    component_name: str
    keyword_only: bool = False
    has_default: bool = False
