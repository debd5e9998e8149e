"""Application layer - Component registry."""

import logging
from typing import Dict, List, Tuple

from it_depends.domain import (
    AmbiguityError,
    ComponentDeclaration,
    ComponentLookupError,
    ConfigurationError,
    DuplicateIdError,
    IRegistry,
)

logger = logging.getLogger(__name__)


class ComponentRegistry(IRegistry):
    """Accumulates declarations keyed by name, id and type.

    Attributes:
        _by_name: Declarations keyed by fully-qualified name, in discovery order.
        _by_id: Component names keyed by declared id.
        _by_type: Component names grouped by declared type, in discovery order.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._by_name: Dict[str, ComponentDeclaration] = {}
        self._by_id: Dict[str, str] = {}
        self._by_type: Dict[str, List[str]] = {}

    def register(self, declaration: ComponentDeclaration) -> None:
        """Add a declaration to the lookup tables.

        Args:
            declaration: The component to register.

        Raises:
            DuplicateIdError: If another component already declared the same id.
            ConfigurationError: If a component with the same name is already registered.

        Example:
            >>> registry = ComponentRegistry()
            >>> registry.register(ComponentDeclaration(name="app.Manager", declared_type="manager", declared_id="mgr"))
            >>> registry.resolve_by_id("mgr")
            'app.Manager'
        """
        name = declaration.name
        component_id = declaration.declared_id

        if component_id and component_id in self._by_id:
            raise DuplicateIdError(component_id, self._by_id[component_id], name)
        if name in self._by_name:
            raise ConfigurationError(f"Component {name} is already registered")

        self._by_name[name] = declaration
        if component_id:
            self._by_id[component_id] = name
        self._by_type.setdefault(declaration.declared_type, []).append(name)

        logger.debug("Registered %s (type=%s, id=%s)", name, declaration.declared_type, component_id)

    def resolve_by_id(self, component_id: str) -> str:
        """Return the name of the component declared with ``component_id``.

        Raises:
            ComponentLookupError: If no component declares that id.
        """
        try:
            return self._by_id[component_id]
        except KeyError:
            raise ComponentLookupError(component_id, "no component declares this id") from None

    def resolve_type_singleton(self, declared_type: str) -> str:
        """Return the name of the only component of ``declared_type``.

        Raises:
            ComponentLookupError: If no component has that type.
            AmbiguityError: If more than one component has that type.
        """
        names = self._by_type.get(declared_type)
        if not names:
            raise ComponentLookupError(declared_type, "no component declares this type")
        if len(names) > 1:
            raise AmbiguityError(declared_type, names)
        return names[0]

    def resolve_type_collection(self, declared_type: str) -> Tuple[str, ...]:
        """Return every component name of ``declared_type``; empty when the type is undeclared."""
        return tuple(self._by_type.get(declared_type, ()))

    def declarations(self) -> List[ComponentDeclaration]:
        return list(self._by_name.values())

    def get(self, name: str) -> ComponentDeclaration:
        """Return the declaration registered under ``name``.

        Raises:
            ComponentLookupError: If nothing is registered under that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise ComponentLookupError(name, "no component registered under this name") from None

    def ids(self) -> Dict[str, str]:
        """Get a copy of the id lookup table."""
        return dict(self._by_id)

    def types(self) -> Dict[str, Tuple[str, ...]]:
        """Get a copy of the type lookup table."""
        return {declared_type: tuple(names) for declared_type, names in self._by_type.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)
