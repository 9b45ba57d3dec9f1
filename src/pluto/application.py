"""Read-only snapshot of an eagerly loaded container."""

from collections.abc import Mapping
from typing import Any, Iterator

__all__ = ["Application"]


class Application(Mapping):
    """
    A mapping of bound names to fully resolved values.

    The owning container fills the application when it is eagerly loaded. From
    then on every value can be read synchronously, since all awaitables have
    already settled.

    Example:
        >>> app = await container.eagerly_load_all()
        >>> greet = app["greet"]
    """

    def __init__(self):
        self._components: dict[str, Any] = {}

    def _load(self, components: dict[str, Any]):
        self._components.update(components)

    def __getitem__(self, name: str) -> Any:
        return self._components[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        return f"Application({sorted(self._components)})"
