"""
Testing utilities module.

Provides helpers and utilities for testing applications using beanwire.
"""

from .utilities import TestBeanFactory, create_mock_factory

__all__ = [
    "TestBeanFactory",
    "create_mock_factory",
]
