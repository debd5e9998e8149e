"""
Infrastructure layer - Introspection and external integrations.

This layer reads declarations from code and hands built components to
external frameworks. It depends on both Application and Domain layers.
"""

from . import fastapi_integration, introspection, testing

__all__ = [
    "fastapi_integration",
    "introspection",
    "testing",
]
