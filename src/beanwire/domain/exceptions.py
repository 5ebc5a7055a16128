from typing import Any, Iterable, List, Optional


class BeanException(Exception):
    """Base exception for bean factory errors."""


class BeanNameConflictError(BeanException):
    """Raised when a bean name is registered twice.

    Attributes:
        name: The conflicting bean name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Bean name already registered: {name}")


class InvalidKindError(BeanException):
    """Raised when a bean kind is neither singleton nor prototype.

    Attributes:
        kind: The rejected kind value.
    """

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"Invalid bean kind: {kind!r}")


class NotRegisteredError(BeanException):
    """Raised when no definition exists for a bean name.

    Attributes:
        name: The unknown bean name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No bean registered under name: {name}")


class CyclicCreationError(BeanException):
    """Raised when a bean is requested again while it is still being created.

    Attributes:
        chain: Bean names forming the cycle, first and last entries equal.
    """

    def __init__(self, chain: List[str]) -> None:
        self.chain = chain
        super().__init__(f"Cyclic bean creation detected: {' -> '.join(chain)}")


class InvalidShapeError(BeanException):
    """Raised when a bean type cannot be allocated and injected.

    This occurs when:
    - The registered type is not a class, or is a builtin type.
    - The class is abstract.
    - The constructor requires arguments.

    Attributes:
        bean_type: The offending type.
        reason: Optional reason for the failure.
    """

    def __init__(self, bean_type: Any, reason: Optional[str] = None) -> None:
        self.bean_type = bean_type
        self.reason = reason
        message = f"Type is not an injectable aggregate: {getattr(bean_type, '__name__', repr(bean_type))}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class CapabilityViolationError(BeanException):
    """Raised when a processor bean lacks required processor operations.

    Attributes:
        name: The processor bean name.
        missing: Names of the missing operations.
        reason: Optional reason when the bean could not be created at all.
    """

    def __init__(self, name: str, missing: Iterable[str], reason: Optional[str] = None) -> None:
        self.name = name
        self.missing = list(missing)
        self.reason = reason
        message = f"Bean {name} is not a processor"
        if self.missing:
            message += f", missing: {', '.join(self.missing)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)
