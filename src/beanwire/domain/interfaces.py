from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Type, Union

from beanwire.domain.enums import BeanKind
from beanwire.domain.models import TypeDescriptor

PROCESSOR_CAPABILITIES: Tuple[str, ...] = (
    "process_before_instantiation",
    "process_property_values",
    "process_after_initialization",
)


def missing_capabilities(candidate: Any) -> Tuple[str, ...]:
    """Return the processor operations ``candidate`` does not provide."""
    return tuple(method for method in PROCESSOR_CAPABILITIES if not callable(getattr(candidate, method, None)))


class IBeanProcessor(ABC):
    """Abstract interface for bean creation lifecycle hooks.

    Any object providing the three operations satisfies this interface, whether or
    not it inherits from it.
    """

    @classmethod
    def __subclasshook__(cls, subclass: type) -> Any:
        if cls is IBeanProcessor:
            return not missing_capabilities(subclass)
        return NotImplemented

    @abstractmethod
    def process_before_instantiation(self, bean_name: str, bean_type: Type) -> Optional[Any]:
        """Called before a bean is allocated.

        Args:
            bean_name: Name of the bean about to be created.
            bean_type: The registered type.

        Returns:
            A substitute instance to skip creation entirely, or None.
        """

    @abstractmethod
    def process_property_values(self, bean_name: str, bean: Any, descriptor: TypeDescriptor) -> None:
        """Called to populate the fields of a freshly allocated bean.

        Args:
            bean_name: Name of the bean being created.
            bean: The allocated instance.
            descriptor: Field layout of the bean type.
        """

    @abstractmethod
    def process_after_initialization(self, bean_name: str, bean: Any, descriptor: TypeDescriptor) -> Optional[Any]:
        """Called once the bean is fully populated.

        Args:
            bean_name: Name of the bean being created.
            bean: The populated instance.
            descriptor: Field layout of the bean type.

        Returns:
            A replacement instance, or None to keep ``bean``.
        """


class IContainer(ABC):
    """Abstract interface for lifecycle-specific bean retrieval."""

    @abstractmethod
    def get(self, name: str) -> Any:
        """Return the bean registered under ``name`` according to the container's policy.

        Args:
            name: The bean name.
        """


class IBeanFactory(ABC):
    """Abstract interface for bean factory operations."""

    @abstractmethod
    def register(self, name: str, bean_type: Type, kind: Union[BeanKind, str] = BeanKind.SINGLETON) -> None:
        """Register a bean definition.

        Args:
            name: Unique bean name.
            bean_type: The class to instantiate.
            kind: Singleton or prototype.
        """

    @abstractmethod
    def register_processor(self, name: str, bean_type: Type) -> None:
        """Register a singleton bean and admit it to the processor chain.

        Args:
            name: Unique bean name.
            bean_type: The processor class.
        """

    @abstractmethod
    def get_bean(self, name: str) -> Optional[Any]:
        """Return the bean registered under ``name``, or None if it cannot be provided.

        Args:
            name: The bean name.
        """

    @abstractmethod
    def require_bean(self, name: str) -> Any:
        """Return the bean registered under ``name`` or raise the failure.

        Args:
            name: The bean name.
        """
