"""Application layer - Lifecycle containers."""

from typing import TYPE_CHECKING, Any

from beanwire.domain import IContainer

if TYPE_CHECKING:
    from beanwire.application.factory import BeanFactory


class SingletonContainer(IContainer):
    """Serves singleton beans, creating each at most once.

    Holds no cache of its own, the factory owns every cache tier.
    """

    def __init__(self, factory: "BeanFactory") -> None:
        self._factory = factory

    def get(self, name: str) -> Any:
        bean = self._factory.get_cached_singleton(name)
        if bean is not None:
            return bean
        return self._factory.create_bean(self._factory.get_bean_definition(name))


class PrototypeContainer(IContainer):
    """Serves prototype beans, creating a new instance on every request."""

    def __init__(self, factory: "BeanFactory") -> None:
        self._factory = factory

    def get(self, name: str) -> Any:
        return self._factory.create_bean(self._factory.get_bean_definition(name))
