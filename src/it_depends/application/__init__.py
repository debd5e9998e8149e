"""
Application layer - Bootstrap pipeline.

This layer registers declarations, resolves their references, orders and
builds components. It depends only on the Domain layer.
"""

from .bootstrap import ItDepends
from .circular_detector import CircularDependencyDetector
from .container import ComponentContainer
from .driver import InstantiationDriver
from .graph import DependencyGraph
from .registry import ComponentRegistry
from .resolver import DependencyReferenceResolver, flatten

__all__ = [
    "ItDepends",
    "ComponentContainer",
    "ComponentRegistry",
    "DependencyReferenceResolver",
    "DependencyGraph",
    "CircularDependencyDetector",
    "InstantiationDriver",
    "flatten",
]
