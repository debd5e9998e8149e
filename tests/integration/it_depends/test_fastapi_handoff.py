"""Integration tests for handing bootstrapped components to FastAPI."""

import pytest

pytest.importorskip("fastapi")

from unittest.mock import MagicMock

from fastapi import Depends, FastAPI

from it_depends import BootstrapSettings, ComponentCatalog, ItDepends
from it_depends.infrastructure.fastapi_integration import (
    create_component_dependency,
    create_fastapi_dependency,
    install_components,
)


@pytest.fixture
def catalog():
    catalog = ComponentCatalog()

    @catalog.component(type="repository", name="app.UserRepository")
    class UserRepository:
        def all(self):
            return ["ada", "grace"]

    @catalog.component(type="service", id="users", name="app.UserService")
    class UserService:
        def __init__(self, repository):
            self.repository = repository

        def list_users(self):
            return self.repository.all()

    return catalog


class TestFastAPIHandoff:
    """Test complete FastAPI hand-off scenarios."""

    def test_endpoint_dependency_from_container(self, catalog):
        """Test wiring an endpoint to a bootstrapped component."""
        app = FastAPI()
        container = ItDepends(catalog, BootstrapSettings()).run(catalog.declarations())
        get_users = create_fastapi_dependency(container, "app.UserService")

        @app.get("/users")
        def list_users(service=Depends(get_users)):
            return service.list_users()

        assert get_users().list_users() == ["ada", "grace"]
        assert any(getattr(route, "path", None) == "/users" for route in app.routes)

    def test_request_bound_dependency(self, catalog):
        """Test resolving through the application state set up at startup."""
        app = FastAPI()
        container = ItDepends(catalog, BootstrapSettings()).run(catalog.declarations())
        install_components(app, container)
        request = MagicMock()
        request.app = app

        service = create_component_dependency("app.UserService")(request)

        assert service is container.resolve_id("users")
        assert service.repository is container.resolve("app.UserRepository")
