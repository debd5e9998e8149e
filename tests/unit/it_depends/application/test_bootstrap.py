"""Unit tests for ItDepends."""

import pytest

from it_depends.application.bootstrap import ItDepends
from it_depends.application.container import ComponentContainer
from it_depends.application.resolver import DependencyReferenceResolver
from it_depends.domain import (
    AmbiguityError,
    BootstrapSettings,
    ComponentDeclaration,
    ComponentLookupError,
    ConstructionError,
    CycleError,
    DuplicateIdError,
    ResolvedDependency,
)
from it_depends.infrastructure.testing import RecordingInstantiator


def declare(name, declared_type, declared_id=None, *raw_dependencies, profile=None):
    return ComponentDeclaration(
        name=name,
        declared_type=declared_type,
        declared_id=declared_id,
        raw_dependencies=raw_dependencies,
        profile=profile,
    )


@pytest.fixture
def declarations():
    return [
        declare("NS.C", "report", None, "every_worker", "the_mgr"),
        declare("NS.B", "manager", "mgr", "worker"),
        declare("NS.A", "worker"),
    ]


class TestItDepends:
    """Test cases for ItDepends class."""

    def test_default_settings_come_from_environment(self, monkeypatch):
        """Test that settings are read from the environment when omitted."""
        monkeypatch.setenv("PROFILE", "production")

        bootstrap = ItDepends(RecordingInstantiator())

        assert bootstrap.settings.profile == "production"

    def test_eligible_filters_by_profile(self):
        """Test that only components of the active profile are eligible."""
        bootstrap = ItDepends(RecordingInstantiator(), BootstrapSettings(profile="production"))
        production = declare("app.A", "worker", profile="production")
        test = declare("app.B", "worker", profile="test")
        unprofiled = declare("app.C", "worker")

        assert bootstrap.eligible([production, test, unprofiled]) == [production]

    def test_eligible_without_profile_keeps_unprofiled(self):
        """Test that without an active profile only unprofiled components are eligible."""
        bootstrap = ItDepends(RecordingInstantiator(), BootstrapSettings())
        production = declare("app.A", "worker", profile="production")
        unprofiled = declare("app.C", "worker")

        assert bootstrap.eligible([production, unprofiled]) == [unprofiled]

    def test_plan(self, declarations):
        """Test that plan resolves and orders without building."""
        instantiator = RecordingInstantiator()

        context = ItDepends(instantiator, BootstrapSettings()).plan(declarations)

        assert context.order == ["NS.A", "NS.B", "NS.C"]
        assert context.graph == {"NS.C": ["NS.A", "NS.B"], "NS.B": ["NS.A"], "NS.A": []}
        assert context.resolutions["NS.C"] == [
            ResolvedDependency.group(("NS.A",)),
            ResolvedDependency.single("NS.B"),
        ]
        assert context.instances == {}
        assert instantiator.calls == []

    def test_run(self, declarations):
        """Test that run builds every component with assembled arguments."""
        instantiator = RecordingInstantiator()

        container = ItDepends(instantiator, BootstrapSettings()).run(declarations)

        assert isinstance(container, ComponentContainer)
        assert instantiator.order == ["NS.A", "NS.B", "NS.C"]
        a, b, c = container["NS.A"], container["NS.B"], container["NS.C"]
        assert b.arguments == [a]
        assert c.arguments == [[a], b]
        assert container.resolve_id("mgr") is b
        assert container.resolve_type("worker") == [a]

    def test_run_uses_custom_prefixes(self):
        """Test that the settings' prefixes drive reference parsing."""
        settings = BootstrapSettings(id_prefix="id_", collection_prefix="all_")
        instantiator = RecordingInstantiator()

        container = ItDepends(instantiator, settings).run(
            [declare("app.W", "worker", "w"), declare("app.R", "report", None, "all_worker", "id_w")]
        )

        w = container["app.W"]
        assert container["app.R"].arguments == [[w], w]

    def test_run_uses_given_resolver(self):
        """Test that a custom resolver replaces the default one."""
        resolver = DependencyReferenceResolver(id_prefix="ref_")

        container = ItDepends(RecordingInstantiator(), BootstrapSettings(), resolver=resolver).run(
            [declare("app.W", "worker", "w"), declare("app.R", "report", None, "ref_w")]
        )

        assert container["app.R"].arguments == [container["app.W"]]

    def test_run_duplicate_id_builds_nothing(self):
        """Test that a duplicate id aborts before any construction."""
        instantiator = RecordingInstantiator()

        with pytest.raises(DuplicateIdError):
            ItDepends(instantiator, BootstrapSettings()).run(
                [declare("app.A", "worker", "w"), declare("app.B", "worker", "w")]
            )

        assert instantiator.calls == []

    def test_run_duplicate_id_in_other_profile_is_ignored(self):
        """Test that ineligible components never reach the registry."""
        container = ItDepends(RecordingInstantiator(), BootstrapSettings(profile="production")).run(
            [
                declare("app.A", "worker", "w", profile="production"),
                declare("app.B", "worker", "w", profile="test"),
            ]
        )

        assert container.names() == ["app.A"]

    def test_run_ambiguous_type_builds_nothing(self):
        """Test that an ambiguous bare type aborts before any construction."""
        instantiator = RecordingInstantiator()

        with pytest.raises(AmbiguityError):
            ItDepends(instantiator, BootstrapSettings()).run(
                [declare("app.A", "worker"), declare("app.B", "worker"), declare("app.M", "manager", None, "worker")]
            )

        assert instantiator.calls == []

    def test_run_missing_type_builds_nothing(self):
        """Test that a bare type with no component aborts before any construction."""
        instantiator = RecordingInstantiator()

        with pytest.raises(ComponentLookupError):
            ItDepends(instantiator, BootstrapSettings()).run([declare("app.M", "manager", None, "worker")])

        assert instantiator.calls == []

    def test_run_cycle_builds_nothing(self):
        """Test that a cycle aborts before any construction."""
        instantiator = RecordingInstantiator()

        with pytest.raises(CycleError) as exc_info:
            ItDepends(instantiator, BootstrapSettings()).run(
                [declare("app.A", "a", None, "b"), declare("app.B", "b", None, "a")]
            )

        assert exc_info.value.cycle == ["app.A", "app.B", "app.A"]
        assert instantiator.calls == []

    def test_run_construction_failure_exposes_nothing(self, declarations):
        """Test that a failing factory aborts the walk without returning a container."""
        instantiator = RecordingInstantiator()
        instantiator.fail("NS.B", RuntimeError("boom"))

        with pytest.raises(ConstructionError) as exc_info:
            ItDepends(instantiator, BootstrapSettings()).run(declarations)

        assert exc_info.value.name == "NS.B"
        assert instantiator.order == ["NS.A", "NS.B"]

    def test_run_lookup_error_inside_factory_names_component(self, declarations):
        """Test that a lookup failing inside a factory is reported against that component."""
        instantiator = RecordingInstantiator()
        instantiator.fail("NS.B", ComponentLookupError("cfg"))

        with pytest.raises(ConstructionError) as exc_info:
            ItDepends(instantiator, BootstrapSettings()).run(declarations)

        assert exc_info.value.name == "NS.B"
        assert "NS.B" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ComponentLookupError)

    def test_run_is_repeatable(self, declarations):
        """Test that running twice on the same input gives the same order."""
        bootstrap = ItDepends(RecordingInstantiator(), BootstrapSettings())

        first = bootstrap.run(declarations)
        second = bootstrap.run(declarations)

        assert first.construction_order == second.construction_order
        assert first["NS.A"] is not second["NS.A"]
