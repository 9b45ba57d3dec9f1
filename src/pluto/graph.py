"""
Recording of the dependency relationships established during resolution.

The container notifies every registered :class:`ResolutionObserver` when it
starts resolving a name and when a target's dependencies have resolved.
:class:`DependencyGraph` is the built-in observer: it keeps one
:class:`GraphNode` per requested name, wired to its parents and children, for
inspection and debugging. Recording never influences resolution.
"""

from collections import deque
from typing import Any, Iterator, Optional, Protocol

from pluto.domain import BindingStrategy
from pluto.errors import DependencyError

__all__ = ["RESERVED_NAMES", "ResolutionObserver", "GraphNode", "DependencyGraph"]

RESERVED_NAMES = frozenset({"pluto_binder", "pluto_app", "pluto_graph"})


class ResolutionObserver(Protocol):
    """Receives notifications as a container resolves names.

    Observers are passed to the container at construction and are called
    synchronously from the resolution engine. An exception raised by an
    observer fails the resolution that triggered it.
    """

    def node_requested(self, name: str) -> None:
        """Called once per name, when its first resolution starts.

        Later requests for the same name share that resolution and do not
        notify again. Unbound names are never reported.
        """
        ...

    def dependencies_resolved(
        self, name: str, strategy: BindingStrategy, dependency_names: list[str]
    ) -> None:
        """Called when every dependency of ``name`` has resolved.

        For factories and constructors this happens before the target is
        invoked, with the names that were injected in declared order. For
        instances it happens once the instance has settled, with an empty
        list. It is not called if resolving a dependency fails.
        """
        ...


class GraphNode:
    """A bound name together with the names it depends on and is depended on by."""

    def __init__(self, name: str):
        self.name = name
        self.parents: dict[str, "GraphNode"] = {}
        self.children: dict[str, "GraphNode"] = {}
        self.binding_strategy: Optional[BindingStrategy] = None

    def add_child(self, child: "GraphNode"):
        self.children[child.name] = child
        child.parents[self.name] = self

    @property
    def is_built_in(self) -> bool:
        return self.name in RESERVED_NAMES

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "parents": list(self.parents),
            "children": list(self.children),
            "bindingStrategy": (
                self.binding_strategy.value if self.binding_strategy else None
            ),
            "isBuiltIn": self.is_built_in,
        }

    def __repr__(self) -> str:
        return f"GraphNode({self.name!r})"


class DependencyGraph:
    """Observer that records a :class:`GraphNode` for each resolved name."""

    def __init__(self):
        self._nodes: dict[str, GraphNode] = {}

    def node_requested(self, name: str):
        self._nodes.setdefault(name, GraphNode(name))

    def dependencies_resolved(
        self, name: str, strategy: BindingStrategy, dependency_names: list[str]
    ):
        node = self._nodes.setdefault(name, GraphNode(name))
        node.binding_strategy = strategy
        for child_name in dependency_names:
            node.add_child(self._nodes.setdefault(child_name, GraphNode(child_name)))

    def get_node(self, name: str) -> GraphNode:
        return self._nodes[name]

    def __contains__(self, name: str) -> bool:
        return name in self._nodes

    @property
    def nodes(self) -> list[dict[str, Any]]:
        return [node.to_json() for node in self._nodes.values()]

    def to_json(self) -> list[dict[str, Any]]:
        return self.nodes

    def traverse(self) -> Iterator[str]:
        """
        Perform a topological traversal of the recorded graph.

        Yields:
            Names in an order where all dependencies of each node
            are yielded before the node itself.

        Raises:
            DependencyError: If the recorded dependencies contain a cycle.
        """
        remaining = {name: set(node.children) for name, node in self._nodes.items()}
        ready = deque(name for name, children in remaining.items() if not children)

        while ready:
            next_item = ready.popleft()
            yield next_item

            del remaining[next_item]
            for parent in self._nodes[next_item].parents:
                children = remaining.get(parent)
                if children is not None and next_item in children:
                    children.discard(next_item)
                    if not children:
                        ready.append(parent)

        if remaining:
            raise DependencyError(f"Unresolvable dependencies: {set(remaining)}")
