"""
Infrastructure layer - Tooling around the factory.

This layer contains helpers for code that uses beanwire.
It depends on both Application and Domain layers.
"""

from . import testing

__all__ = [
    "testing",
]
