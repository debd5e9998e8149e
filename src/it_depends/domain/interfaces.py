from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from it_depends.domain.models import ComponentDeclaration, ResolvedDependency


class IRegistry(ABC):
    """Abstract interface for the component registry."""

    @abstractmethod
    def register(self, declaration: ComponentDeclaration) -> None:
        """Add a declaration to the registry.

        Args:
            declaration: The component to register.

        Raises:
            DuplicateIdError: If the declaration's id is already taken.
        """

    @abstractmethod
    def resolve_by_id(self, component_id: str) -> str:
        """Return the name of the component declared with the given id."""

    @abstractmethod
    def resolve_type_singleton(self, declared_type: str) -> str:
        """Return the name of the only component of the given type."""

    @abstractmethod
    def resolve_type_collection(self, declared_type: str) -> Tuple[str, ...]:
        """Return the names of every component of the given type, in discovery order."""

    @abstractmethod
    def declarations(self) -> List[ComponentDeclaration]:
        """Return every registered declaration, in discovery order."""

    @abstractmethod
    def ids(self) -> Dict[str, str]:
        """Return component names keyed by declared id."""

    @abstractmethod
    def types(self) -> Dict[str, Tuple[str, ...]]:
        """Return component names grouped by declared type."""


class IReferenceResolver(ABC):
    """Abstract interface for turning dependency tokens into component names."""

    @abstractmethod
    def resolve(self, declaration: ComponentDeclaration, registry: IRegistry) -> List[ResolvedDependency]:
        """Resolve every raw dependency of a declaration.

        Args:
            declaration: The component whose dependencies are resolved.
            registry: Lookup tables for ids and types.

        Returns:
            One resolved dependency per raw token, in declaration order.

        Raises:
            ComponentLookupError: If a reference matches no component.
            AmbiguityError: If a type reference matches several components.
        """


class IInstantiator(ABC):
    """Abstract interface for the primitive that builds a component."""

    @abstractmethod
    def construct(self, name: str, arguments: Sequence[Any]) -> Any:
        """Build the named component from positional arguments.

        Args:
            name: Fully-qualified name of the component.
            arguments: Constructor arguments, in parameter order.

        Returns:
            The live instance.
        """


class IComponentContainer(ABC):
    """Abstract interface for the read-only result of a bootstrap run."""

    @abstractmethod
    def resolve(self, name: str) -> Any:
        """Return the instance built for the named component."""

    @abstractmethod
    def resolve_id(self, component_id: str) -> Any:
        """Return the instance built for the component with the given id."""

    @abstractmethod
    def resolve_type(self, declared_type: str) -> List[Any]:
        """Return every instance of the given type, in discovery order."""

    @abstractmethod
    def names(self) -> Iterable[str]:
        """Return component names in construction order."""
