import inspect
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar

from it_depends.domain import (
    ComponentConfig,
    ComponentDeclaration,
    ConfigurationError,
    ConstructionError,
    IInstantiator,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def component_name(target: Callable[..., Any]) -> str:
    """Return the fully-qualified name of a class or factory, e.g. ``app.services.Manager``."""
    return f"{target.__module__}.{target.__qualname__}"


def constructor_parameters(target: Callable[..., Any]) -> Tuple[str, ...]:
    """Return the names of the positional parameters a component requires.

    Parameters with defaults, ``*args`` and ``**kwargs`` are skipped.

    Args:
        target: The class or factory to inspect.

    Returns:
        Parameter names in declaration order.

    Raises:
        ConfigurationError: If the signature cannot be read or requires
            keyword-only parameters.

    Example:
        >>> class Report:
        ...     def __init__(self, every_worker, the_mgr, title="weekly"):
        ...         pass
        >>> constructor_parameters(Report)
        ('every_worker', 'the_mgr')
    """
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Cannot read the constructor of {component_name(target)}: {e}") from e

    parameters = []
    for param_name, param in signature.parameters.items():
        # Skip 'self' parameter
        if param_name == "self":
            continue

        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        # Skip parameters with defaults (let them use default values)
        if param.default is not inspect.Parameter.empty:
            continue

        if param.kind == inspect.Parameter.KEYWORD_ONLY:
            raise ConfigurationError(
                f"Parameter '{param_name}' of {component_name(target)} is keyword-only and has no default value"
            )

        parameters.append(param_name)
    return tuple(parameters)


class ComponentCatalog(IInstantiator):
    """Explicit table of declared components and the factories that build them.

    Components are added with the :meth:`component` decorator or :meth:`add`.
    The catalog then serves both as the source of declarations and as the
    instantiator of a bootstrap run.

    Attributes:
        _declarations: Declarations keyed by component name, in declaration order.
        _factories: Factories keyed by component name.

    Example:
        >>> catalog = ComponentCatalog()
        >>>
        >>> @catalog.component(type="worker")
        ... class Worker:
        ...     pass
        >>>
        >>> @catalog.component(type="manager", id="mgr")
        ... class Manager:
        ...     def __init__(self, worker):
        ...         self.worker = worker
        >>>
        >>> container = ItDepends(catalog, BootstrapSettings()).run(catalog.declarations())
    """

    def __init__(self) -> None:
        """Initialize an empty catalog."""
        self._declarations: Dict[str, ComponentDeclaration] = {}
        self._factories: Dict[str, Callable[..., Any]] = {}

    def add(self, declaration: ComponentDeclaration, factory: Callable[..., Any]) -> None:
        """Add a declaration together with its factory.

        Raises:
            ConfigurationError: If a component of the same name was already added.
        """
        if declaration.name in self._declarations:
            raise ConfigurationError(f"Component {declaration.name} is already declared")
        self._declarations[declaration.name] = declaration
        self._factories[declaration.name] = factory
        logger.debug("Declared %s", declaration.name)

    def component(
        self,
        type: str,
        id: Optional[str] = None,
        profile: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Callable[[F], F]:
        """Decorator declaring a class or factory as a component.

        Dependency tokens are taken from the constructor's parameter names.

        Args:
            type: Type tag of the component.
            id: Optional unique identifier.
            profile: Execution profile the component belongs to.
            name: Overrides the fully-qualified name derived from the target.

        Returns:
            A decorator returning the target unchanged.
        """
        try:
            config = ComponentConfig(type=type, id=id, profile=profile)
        except ValueError as e:
            raise ConfigurationError(f"Invalid component configuration: {e}") from e

        def decorator(target: F) -> F:
            declaration = ComponentDeclaration.from_config(
                name or component_name(target),
                config,
                constructor_parameters(target),
            )
            self.add(declaration, target)
            return target

        return decorator

    def declarations(self) -> List[ComponentDeclaration]:
        """Get every declaration, in declaration order."""
        return list(self._declarations.values())

    def construct(self, name: str, arguments: Sequence[Any]) -> Any:
        if name not in self._factories:
            raise ConstructionError(name, "no factory is registered for this component")
        return self._factories[name](*arguments)

    def clear(self) -> None:
        """Remove every declaration and factory."""
        self._declarations.clear()
        self._factories.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)


class FactoryInstantiator(IInstantiator):
    """Instantiator backed by a plain name-to-factory mapping.

    Used with declarations produced by source scanning, whose factories are
    listed explicitly by the application.

    Attributes:
        _factories: Factories keyed by component name.
    """

    def __init__(self, factories: Mapping[str, Callable[..., Any]]) -> None:
        self._factories = dict(factories)

    def construct(self, name: str, arguments: Sequence[Any]) -> Any:
        if name not in self._factories:
            raise ConstructionError(name, "no factory is registered for this component")
        return self._factories[name](*arguments)
