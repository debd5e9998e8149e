"""
Source introspection module.

Turns decorated classes or component source files into declarations.
"""

from .catalog import ComponentCatalog, FactoryInstantiator, component_name, constructor_parameters
from .scanner import SourceScanner

__all__ = [
    "ComponentCatalog",
    "FactoryInstantiator",
    "SourceScanner",
    "component_name",
    "constructor_parameters",
]
