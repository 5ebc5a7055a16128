from enum import Enum


class BeanKind(str, Enum):
    """Defines the lifecycle kind of a bean.

    Attributes:
        SINGLETON: Single instance per bean name for the factory's lifetime.
        PROTOTYPE: New instance created on each request, never cached.
    """

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"

    def __str__(self) -> str:
        return self.value
