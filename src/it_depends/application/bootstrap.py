import logging
from typing import Iterable, List, Optional

from it_depends.application.container import ComponentContainer
from it_depends.application.driver import InstantiationDriver
from it_depends.application.graph import DependencyGraph
from it_depends.application.registry import ComponentRegistry
from it_depends.application.resolver import DependencyReferenceResolver
from it_depends.domain import (
    BootstrapContext,
    BootstrapSettings,
    ComponentDeclaration,
    IInstantiator,
    IReferenceResolver,
)

logger = logging.getLogger(__name__)


class ItDepends:
    """Bootstraps an application's components.

    Registers the declarations eligible under the active profile, resolves
    their dependency tokens, orders them so dependencies come first and
    builds each one exactly once.

    Attributes:
        _instantiator: The primitive used to build each component.
        _settings: Active profile and reference prefixes.
        _resolver: Component turning dependency tokens into component names.
    """

    def __init__(
        self,
        instantiator: IInstantiator,
        settings: Optional[BootstrapSettings] = None,
        resolver: Optional[IReferenceResolver] = None,
    ) -> None:
        """Initialize the bootstrap.

        Args:
            instantiator: The primitive used to build each component.
            settings: Bootstrap settings; read from the environment when omitted.
            resolver: Reference resolver; built from the settings' prefixes when omitted.
        """
        self._instantiator = instantiator
        self._settings = settings if settings is not None else BootstrapSettings.from_env()
        self._resolver: IReferenceResolver = resolver or DependencyReferenceResolver(
            id_prefix=self._settings.id_prefix,
            collection_prefix=self._settings.collection_prefix,
        )

    @property
    def settings(self) -> BootstrapSettings:
        return self._settings

    def eligible(self, declarations: Iterable[ComponentDeclaration]) -> List[ComponentDeclaration]:
        """Keep the declarations whose profile is the active profile."""
        return [declaration for declaration in declarations if declaration.profile == self._settings.profile]

    def plan(self, declarations: Iterable[ComponentDeclaration]) -> BootstrapContext:
        """Register, resolve and order components without building them.

        Args:
            declarations: Every discovered declaration, in discovery order.

        Returns:
            A context holding the registry, the resolutions, the graph and
            the construction order.

        Raises:
            DuplicateIdError: If two components declare the same id.
            ComponentLookupError: If a reference matches no component.
            AmbiguityError: If a type reference matches several components.
            CycleError: If the components depend on each other in a cycle.
        """
        registry = ComponentRegistry()
        for declaration in self.eligible(declarations):
            registry.register(declaration)

        context = BootstrapContext(registry=registry)
        for declaration in registry.declarations():
            context.resolutions[declaration.name] = self._resolver.resolve(declaration, registry)

        graph = DependencyGraph.from_resolutions(context.resolutions)
        context.graph = graph.as_dict()
        context.order = graph.topological_order()
        return context

    def run(self, declarations: Iterable[ComponentDeclaration]) -> ComponentContainer:
        """Build every eligible component and hand back the results.

        Args:
            declarations: Every discovered declaration, in discovery order.

        Returns:
            A read-only container over the built instances.

        Raises:
            DIException: On the first configuration, resolution, ordering or
                construction error. No instance is exposed in that case.

        Example:
            >>> container = ItDepends(catalog, BootstrapSettings(profile="production")).run(catalog.declarations())
            >>> report = container.resolve("app.reports.Report")
        """
        context = self.plan(declarations)
        try:
            context.instances = InstantiationDriver(self._instantiator).run(context.order, context.resolutions)
            container = ComponentContainer(
                context.instances,
                ids=context.registry.ids(),
                types=context.registry.types(),
            )
        finally:
            context.clear()

        logger.info("Bootstrapped %d components (profile=%s)", len(container), self._settings.profile)
        return container
