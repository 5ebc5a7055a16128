"""
beanwire: Named-bean dependency injection with field auto-wiring.

Public API exports for the beanwire package.
"""

# Application exports
from beanwire.application.factory import BeanFactory
from beanwire.application.processors import AopBeanProcessor

# Domain exports
from beanwire.domain.enums import BeanKind
from beanwire.domain.exceptions import (
    BeanException,
    BeanNameConflictError,
    CapabilityViolationError,
    CyclicCreationError,
    InvalidKindError,
    InvalidShapeError,
    NotRegisteredError,
)
from beanwire.domain.interfaces import IBeanProcessor
from beanwire.domain.models import FactoryOptions, inject

__version__ = "0.1.0"

__all__ = [
    # Factory
    "BeanFactory",
    "FactoryOptions",
    "inject",
    # Processors
    "IBeanProcessor",
    "AopBeanProcessor",
    # Enums
    "BeanKind",
    # Exceptions
    "BeanException",
    "BeanNameConflictError",
    "InvalidKindError",
    "NotRegisteredError",
    "CyclicCreationError",
    "InvalidShapeError",
    "CapabilityViolationError",
]
