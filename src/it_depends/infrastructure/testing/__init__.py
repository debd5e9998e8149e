"""
Testing utilities module.

Provides helpers for testing applications bootstrapped with it-depends.
"""

from .utilities import BuiltComponent, RecordingInstantiator, create_mock_container

__all__ = [
    "RecordingInstantiator",
    "BuiltComponent",
    "create_mock_container",
]
