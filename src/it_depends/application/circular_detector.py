"""Application layer - Circular dependency detection."""

from typing import List

from it_depends.domain import CycleError


class CircularDependencyDetector:
    """Detects cycles while the dependency graph is being walked.

    Tracks the path of components currently being visited. When a component
    appears twice on the path, the graph contains a cycle.

    Attributes:
        _stack: Names on the current visiting path, outermost first.
    """

    def __init__(self) -> None:
        """Initialize the detector with an empty path."""
        self._stack: List[str] = []

    def push(self, name: str) -> None:
        """Add a component to the visiting path.

        Args:
            name: The component being visited.

        Raises:
            CycleError: If the component is already on the path.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push("app.A")
            >>> detector.push("app.B")
            >>> detector.push("app.A")  # Raises CycleError
        """
        if name in self._stack:
            # Build cycle path from first occurrence to current
            cycle_start_index = self._stack.index(name)
            cycle = self._stack[cycle_start_index:] + [name]
            raise CycleError(cycle)

        self._stack.append(name)

    def pop(self) -> None:
        """Remove the last component from the visiting path.

        Called once every dependency of that component has been visited.
        """
        if self._stack:
            self._stack.pop()

