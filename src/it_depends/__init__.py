"""
it-depends: Declarative component bootstrap with dependency ordering.

Public API exports for the it-depends package.
"""

# Application exports
from it_depends.application.bootstrap import ItDepends
from it_depends.application.container import ComponentContainer

# Domain exports
from it_depends.domain.exceptions import (
    AmbiguityError,
    ComponentLookupError,
    ConfigurationError,
    ConstructionError,
    CycleError,
    DIException,
    DuplicateIdError,
)
from it_depends.domain.models import BootstrapSettings, ComponentConfig, ComponentDeclaration

# Infrastructure exports
from it_depends.infrastructure.introspection import ComponentCatalog, FactoryInstantiator, SourceScanner

__version__ = "0.1.0"

__all__ = [
    # Bootstrap
    "ItDepends",
    "ComponentContainer",
    "ComponentCatalog",
    "FactoryInstantiator",
    "SourceScanner",
    # Models
    "BootstrapSettings",
    "ComponentConfig",
    "ComponentDeclaration",
    # Exceptions
    "DIException",
    "ConfigurationError",
    "DuplicateIdError",
    "AmbiguityError",
    "ComponentLookupError",
    "CycleError",
    "ConstructionError",
]
