"""
FastAPI integration module.

Provides helpers for handing bootstrapped components to FastAPI endpoints.
"""

from .integration import (
    create_component_dependency,
    create_fastapi_dependency,
    install_components,
)

__all__ = [
    "install_components",
    "create_fastapi_dependency",
    "create_component_dependency",
]
