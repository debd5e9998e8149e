import logging
from typing import Any, Dict, List, Mapping, Sequence

from it_depends.domain import (
    ConstructionError,
    IInstantiator,
    ResolvedDependency,
)

logger = logging.getLogger(__name__)


class InstantiationDriver:
    """Builds every component exactly once, in construction order.

    Attributes:
        _instantiator: The primitive that turns a name and arguments into an instance.
    """

    def __init__(self, instantiator: IInstantiator) -> None:
        """Initialize the driver.

        Args:
            instantiator: The primitive used to build each component.
        """
        self._instantiator = instantiator

    @staticmethod
    def build_arguments(dependencies: Sequence[ResolvedDependency], instances: Mapping[str, Any]) -> List[Any]:
        """Assemble constructor arguments from already-built instances.

        Args:
            dependencies: A component's unflattened resolved dependencies.
            instances: Instances built so far.

        Returns:
            One argument per dependency: an instance for a single reference,
            a list of instances for a group.
        """
        arguments: List[Any] = []
        for dependency in dependencies:
            if dependency.is_group:
                arguments.append([instances[name] for name in dependency.names])
            else:
                arguments.append(instances[dependency.names[0]])
        return arguments

    def run(self, order: Sequence[str], resolutions: Mapping[str, Sequence[ResolvedDependency]]) -> Dict[str, Any]:
        """Construct every component in ``order``.

        Args:
            order: Component names, dependencies first.
            resolutions: Unflattened resolved dependencies keyed by component name.

        Returns:
            The instance table, keyed by component name in construction order.

        Raises:
            ConstructionError: If a component cannot be built, naming that
                component. Nothing built so far is returned.

        Example:
            >>> driver = InstantiationDriver(catalog)
            >>> instances = driver.run(["app.A", "app.B"], {"app.A": [], "app.B": [ResolvedDependency.single("app.A")]})
        """
        instances: Dict[str, Any] = {}
        for name in order:
            arguments = self.build_arguments(resolutions.get(name, ()), instances)
            try:
                instance = self._instantiator.construct(name, arguments)
            except Exception as e:
                if isinstance(e, ConstructionError) and e.name == name:
                    raise
                logger.error("Construction of %s failed after %d components: %s", name, len(instances), e)
                raise ConstructionError(name, f"Failed to create instance: {e}") from e

            instances[name] = instance
            logger.debug("Constructed %s", name)
        return instances
