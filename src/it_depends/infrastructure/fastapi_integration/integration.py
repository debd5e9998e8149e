from typing import Any, Callable

from fastapi import FastAPI, Request

from it_depends.domain import IComponentContainer


def install_components(app: FastAPI, container: IComponentContainer) -> None:
    """Make a bootstrapped container available to request handlers.

    The container is stored as ``app.state.components``.

    Args:
        app: The FastAPI application.
        container: The container produced by a bootstrap run.

    Example:
        >>> container = ItDepends(catalog).run(catalog.declarations())
        >>> app = FastAPI()
        >>> install_components(app, container)
    """
    app.state.components = container


def create_fastapi_dependency(container: IComponentContainer, name: str) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable returning a built component.

    Args:
        container: The container produced by a bootstrap run.
        name: Fully-qualified name of the component.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_report = create_fastapi_dependency(container, "app.reports.Report")
        >>>
        >>> @app.get("/report")
        >>> async def show_report(report: Report = Depends(get_report)):
        ...     return report.render()
    """

    def dependency() -> Any:
        """Return the component from the container."""
        return container.resolve(name)

    return dependency


def create_component_dependency(name: str) -> Callable[[Request], Any]:
    """Create a FastAPI dependency returning a component from the application's container.

    Requires :func:`install_components` to have been called on the application.

    Args:
        name: Fully-qualified name of the component.

    Returns:
        A callable resolving from ``request.app.state.components``.

    Example:
        >>> install_components(app, container)
        >>> get_manager = create_component_dependency("app.services.Manager")
        >>>
        >>> @app.get("/workers")
        >>> async def list_workers(manager: Manager = Depends(get_manager)):
        ...     return manager.workers()
    """

    def component_dependency(request: Request) -> Any:
        """Resolve from the application's container."""
        if not hasattr(request.app.state, "components"):
            raise RuntimeError(
                "Application does not have a component container. Did you forget to call install_components?"
            )
        container: IComponentContainer = request.app.state.components
        return container.resolve(name)

    return component_dependency
