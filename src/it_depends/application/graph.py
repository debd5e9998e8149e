"""Application layer - Dependency graph and construction order."""

from typing import Dict, Iterator, List, Mapping, Sequence, Set, Tuple

from it_depends.application.circular_detector import CircularDependencyDetector
from it_depends.application.resolver import flatten
from it_depends.domain import ComponentLookupError, ResolvedDependency


class DependencyGraph:
    """Directed graph from each component to the components it depends on.

    Nodes keep the order they were added in, which is discovery order; it
    breaks ties between otherwise unordered components so that the same
    input always yields the same construction order.

    Attributes:
        _edges: Flattened dependency names keyed by component name.
    """

    def __init__(self, edges: Mapping[str, Sequence[str]]) -> None:
        """Initialize the graph, checking that every dependency is a node.

        Args:
            edges: Dependency names keyed by component name.

        Raises:
            ComponentLookupError: If a dependency is not itself a node.
        """
        self._edges: Dict[str, List[str]] = {name: list(dependencies) for name, dependencies in edges.items()}
        for name, dependency in self.edges():
            if dependency not in self._edges:
                raise ComponentLookupError(dependency, "dependency is not a registered component", requested_by=name)

    @classmethod
    def from_resolutions(cls, resolutions: Mapping[str, List[ResolvedDependency]]) -> "DependencyGraph":
        """Build the graph from unflattened per-component resolutions."""
        return cls({name: flatten(dependencies) for name, dependencies in resolutions.items()})

    def edges(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(component, dependency)`` pairs."""
        for name, dependencies in self._edges.items():
            for dependency in dependencies:
                yield name, dependency

    def as_dict(self) -> Dict[str, List[str]]:
        return {name: list(dependencies) for name, dependencies in self._edges.items()}

    def topological_order(self) -> List[str]:
        """Order the nodes so that every dependency precedes its dependents.

        Depth-first, post-order walk: roots are taken in node order and
        dependencies in declaration order.

        Returns:
            Every node, dependencies first.

        Raises:
            CycleError: If the graph contains a cycle.

        Example:
            >>> DependencyGraph({"app.C": ["app.B"], "app.B": ["app.A"], "app.A": []}).topological_order()
            ['app.A', 'app.B', 'app.C']
        """
        order: List[str] = []
        visited: Set[str] = set()
        detector = CircularDependencyDetector()

        for root in self._edges:
            if root in visited:
                continue

            detector.push(root)
            stack = [(root, iter(self._edges[root]))]
            while stack:
                name, dependencies = stack[-1]
                for dependency in dependencies:
                    if dependency in visited:
                        continue
                    detector.push(dependency)
                    stack.append((dependency, iter(self._edges[dependency])))
                    break
                else:
                    stack.pop()
                    detector.pop()
                    visited.add(name)
                    order.append(name)

        return order

    def __contains__(self, name: object) -> bool:
        return name in self._edges

    def __len__(self) -> int:
        return len(self._edges)
