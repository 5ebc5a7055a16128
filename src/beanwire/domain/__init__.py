"""
Domain layer - Core bean model.

This layer contains the fundamental definitions, descriptors and errors of the bean factory.
It has no dependencies on other layers.
"""

from .enums import BeanKind
from .exceptions import (
    BeanException,
    BeanNameConflictError,
    CapabilityViolationError,
    CyclicCreationError,
    InvalidKindError,
    InvalidShapeError,
    NotRegisteredError,
)
from .interfaces import PROCESSOR_CAPABILITIES, IBeanFactory, IBeanProcessor, IContainer, missing_capabilities
from .models import (
    BeanDefinition,
    CreationPath,
    FactoryOptions,
    FieldDescriptor,
    InjectionDirective,
    TypeDescriptor,
    inject,
)

__all__ = [
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
    # Interfaces
    "IBeanFactory",
    "IBeanProcessor",
    "IContainer",
    "PROCESSOR_CAPABILITIES",
    "missing_capabilities",
    # Models
    "BeanDefinition",
    "CreationPath",
    "FactoryOptions",
    "FieldDescriptor",
    "InjectionDirective",
    "TypeDescriptor",
    "inject",
]
