"""
Application layer - Bean creation and orchestration.

This layer builds beans from domain definitions.
It depends only on the Domain layer.
"""

from .containers import PrototypeContainer, SingletonContainer
from .creation_tracker import CreationTracker
from .factory import BeanFactory
from .introspection import allocate, check_shape, describe
from .processors import AopBeanProcessor, PopulateBeanProcessor
from .registry import TypeRegistry
from .singleton_cache import SingletonCache

__all__ = [
    "BeanFactory",
    "TypeRegistry",
    "SingletonCache",
    "CreationTracker",
    "SingletonContainer",
    "PrototypeContainer",
    "PopulateBeanProcessor",
    "AopBeanProcessor",
    "allocate",
    "check_shape",
    "describe",
]
