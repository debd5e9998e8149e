import logging
from typing import List

from it_depends.domain import (
    AmbiguityError,
    ComponentDeclaration,
    ComponentLookupError,
    ConfigurationError,
    DependencyReference,
    IReferenceResolver,
    IRegistry,
    ReferenceKind,
    ResolvedDependency,
)

logger = logging.getLogger(__name__)

DEFAULT_ID_PREFIX = "the_"
DEFAULT_COLLECTION_PREFIX = "every_"


class DependencyReferenceResolver(IReferenceResolver):
    """Resolves raw dependency tokens into concrete component names.

    A token is read, in this order, as an id reference (``the_<id>``), a
    collection reference (``every_<type>``) or a bare type reference.

    Attributes:
        id_prefix: Prefix marking an id reference.
        collection_prefix: Prefix marking a collection reference.
    """

    def __init__(self, id_prefix: str = DEFAULT_ID_PREFIX, collection_prefix: str = DEFAULT_COLLECTION_PREFIX) -> None:
        self.id_prefix = id_prefix
        self.collection_prefix = collection_prefix

    def parse(self, token: str) -> DependencyReference:
        """Split a raw token into its reference kind and target.

        Args:
            token: The raw dependency token, e.g. ``the_mgr``.

        Returns:
            The parsed reference.

        Raises:
            ConfigurationError: If the token is a bare prefix with no target.

        Example:
            >>> DependencyReferenceResolver().parse("every_worker").kind
            <ReferenceKind.COLLECTION: 'collection'>
        """
        if token.startswith(self.id_prefix):
            kind, target = ReferenceKind.IDENTIFIER, token[len(self.id_prefix) :]
        elif token.startswith(self.collection_prefix):
            kind, target = ReferenceKind.COLLECTION, token[len(self.collection_prefix) :]
        else:
            kind, target = ReferenceKind.TYPE, token

        if not target:
            raise ConfigurationError(f"Dependency token '{token}' does not name a target")
        return DependencyReference(kind=kind, target=target, token=token)

    def resolve_reference(self, reference: DependencyReference, registry: IRegistry) -> ResolvedDependency:
        """Resolve a single parsed reference against the registry."""
        if reference.kind == ReferenceKind.IDENTIFIER:
            return ResolvedDependency.single(registry.resolve_by_id(reference.target))
        if reference.kind == ReferenceKind.COLLECTION:
            return ResolvedDependency.group(registry.resolve_type_collection(reference.target))
        return ResolvedDependency.single(registry.resolve_type_singleton(reference.target))

    def resolve(self, declaration: ComponentDeclaration, registry: IRegistry) -> List[ResolvedDependency]:
        """Resolve every raw dependency of ``declaration``, keeping declaration order.

        Args:
            declaration: The component whose dependencies are resolved.
            registry: Lookup tables for ids and types.

        Returns:
            One resolved dependency per raw token.

        Raises:
            ComponentLookupError: If an id or type reference matches no component.
            AmbiguityError: If a type reference matches several components.
            ConfigurationError: If a token names no target.
        """
        resolved = []
        for token in declaration.raw_dependencies:
            reference = self.parse(token)
            try:
                dependency = self.resolve_reference(reference, registry)
            except ComponentLookupError as e:
                raise ComponentLookupError(e.reference, e.reason, requested_by=declaration.name) from e
            except AmbiguityError as e:
                raise AmbiguityError(e.declared_type, e.candidates, requested_by=declaration.name) from e

            logger.debug("Resolved %s of %s to %s", token, declaration.name, list(dependency.names))
            resolved.append(dependency)
        return resolved


def flatten(dependencies: List[ResolvedDependency]) -> List[str]:
    """Expand groups in place, giving the names a component depends on."""
    return [name for dependency in dependencies for name in dependency.names]
