from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from it_depends.domain import ComponentLookupError, IComponentContainer


class ComponentContainer(IComponentContainer):
    """Read-only lookup over the instances built by a bootstrap run.

    Attributes:
        _instances: Instances keyed by component name, in construction order.
        _ids: Component names keyed by declared id.
        _types: Component names grouped by declared type, in discovery order.
    """

    def __init__(
        self,
        instances: Mapping[str, Any],
        ids: Optional[Mapping[str, str]] = None,
        types: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        """Initialize the container from a completed instance table.

        Args:
            instances: Instances keyed by component name, in construction order.
            ids: Component names keyed by declared id.
            types: Component names grouped by declared type.
        """
        self._instances: Dict[str, Any] = dict(instances)
        self._ids: Dict[str, str] = dict(ids or {})
        self._types: Dict[str, List[str]] = {declared_type: list(names) for declared_type, names in (types or {}).items()}

    def resolve(self, name: str) -> Any:
        """Return the instance built for ``name``.

        Raises:
            ComponentLookupError: If no component of that name was built.

        Example:
            >>> manager = container.resolve("app.services.Manager")
        """
        try:
            return self._instances[name]
        except KeyError:
            raise ComponentLookupError(name, "no component was built under this name") from None

    def resolve_id(self, component_id: str) -> Any:
        """Return the instance built for the component declared with ``component_id``.

        Raises:
            ComponentLookupError: If no component declares that id.
        """
        if component_id not in self._ids:
            raise ComponentLookupError(component_id, "no component declares this id")
        return self.resolve(self._ids[component_id])

    def resolve_type(self, declared_type: str) -> List[Any]:
        """Return every instance of ``declared_type`` in discovery order; empty when undeclared."""
        return [self.resolve(name) for name in self._types.get(declared_type, ())]

    def names(self) -> List[str]:
        return list(self._instances)

    @property
    def construction_order(self) -> List[str]:
        """Component names in the order they were built."""
        return list(self._instances)

    def as_mapping(self) -> Mapping[str, Any]:
        """Get a read-only view of the instance table."""
        return MappingProxyType(self._instances)

    def __getitem__(self, name: str) -> Any:
        return self.resolve(name)

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __iter__(self) -> Iterator[str]:
        return iter(self._instances)

    def __len__(self) -> int:
        return len(self._instances)
