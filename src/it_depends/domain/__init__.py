"""
Domain layer - Core models and rules of component bootstrap.

This layer contains the declarations, references and errors the bootstrap
pipeline works with. It has no dependencies on other layers.
"""

from .enums import ReferenceKind
from .exceptions import (
    AmbiguityError,
    ComponentLookupError,
    ConfigurationError,
    ConstructionError,
    CycleError,
    DIException,
    DuplicateIdError,
)
from .interfaces import IComponentContainer, IInstantiator, IReferenceResolver, IRegistry
from .models import (
    BootstrapContext,
    BootstrapSettings,
    ComponentConfig,
    ComponentDeclaration,
    DependencyReference,
    ResolvedDependency,
)

# Rebuild Pydantic models to resolve forward references
BootstrapContext.model_rebuild()

__all__ = [
    # Enums
    "ReferenceKind",
    # Exceptions
    "DIException",
    "ConfigurationError",
    "DuplicateIdError",
    "AmbiguityError",
    "ComponentLookupError",
    "CycleError",
    "ConstructionError",
    # Interfaces
    "IRegistry",
    "IReferenceResolver",
    "IInstantiator",
    "IComponentContainer",
    # Models
    "ComponentConfig",
    "ComponentDeclaration",
    "DependencyReference",
    "ResolvedDependency",
    "BootstrapContext",
    "BootstrapSettings",
]
