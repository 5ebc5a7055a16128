from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from beanwire.domain.enums import BeanKind
from beanwire.domain.exceptions import CyclicCreationError


class InjectionDirective(BaseModel):
    """Marks a class attribute as an injection point.

    Attributes:
        name: Explicit target bean name. When absent the target is autowired by type.
        kind: Lifecycle kind used if the target has to be auto-registered.
        by_value: Whether the field holds a private copy instead of a shared reference.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="Explicit target bean name.")
    kind: Optional[BeanKind] = Field(default=None, description="Kind token for auto-registration.")
    by_value: bool = Field(default=False, description="Inject a private instance instead of a reference.")


def inject(
    name: Optional[str] = None,
    *,
    kind: Optional[BeanKind] = None,
    by_value: bool = False,
) -> Any:
    """Declare an injected field.

    Example:
        >>> class OrderService:
        ...     repository: OrderRepository = inject("orders")
        ...     clock: Clock = inject(kind=BeanKind.PROTOTYPE)
    """
    return InjectionDirective(name=name, kind=kind, by_value=by_value)


class FieldDescriptor(BaseModel):
    """Static description of one field of a bean type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    field_type: Any = Field(..., description="Declared type, or its name if it could not be evaluated.")
    is_reference: bool = True
    directive: Optional[InjectionDirective] = None

    @property
    def type_name(self) -> str:
        if isinstance(self.field_type, str):
            return self.field_type
        return getattr(self.field_type, "__name__", str(self.field_type))


class TypeDescriptor(BaseModel):
    """Ordered field layout of a bean type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    bean_type: Any
    fields: Tuple[FieldDescriptor, ...] = ()

    @property
    def injected_fields(self) -> Tuple[FieldDescriptor, ...]:
        return tuple(field for field in self.fields if field.directive is not None)


class BeanDefinition(BaseModel):
    """Value object representing a bean registration.

    Attributes:
        name: Unique bean name.
        bean_type: The class instantiated for this bean.
        kind: Singleton or prototype lifecycle.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Unique bean name.")
    bean_type: Any = Field(..., description="The type instantiated for this bean.")
    kind: BeanKind = Field(..., description="The lifecycle kind of the bean.")

    @property
    def is_singleton(self) -> bool:
        return self.kind == BeanKind.SINGLETON


class FactoryOptions(BaseModel):
    """Factory configuration, fixed at construction.

    Attributes:
        allow_early_reference: Resolve singleton cycles through early references.
        allow_populate_struct_bean: Populate ``by_value`` fields instead of skipping them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_early_reference: bool = Field(default=False, description="Enable cyclic resolution.")
    allow_populate_struct_bean: bool = Field(default=False, description="Populate value fields.")


class CreationPath(BaseModel):
    """Names of the beans currently being created on one resolution path.

    Attributes:
        stack: Bean names in creation order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    stack: List[str] = Field(default_factory=list, description="Bean names currently in creation.")

    def __contains__(self, name: str) -> bool:
        return name in self.stack

    def push(self, name: str) -> None:
        """Add a bean to the path.

        Raises:
            CyclicCreationError: If the bean is already on the path.
        """
        if name in self.stack:
            raise CyclicCreationError(self.cycle_to(name))
        self.stack.append(name)

    def pop(self) -> None:
        if self.stack:
            self.stack.pop()

    def cycle_to(self, name: str) -> List[str]:
        """Return the cycle closed by requesting ``name`` again."""
        return self.stack[self.stack.index(name) :] + [name]

    def clear(self) -> None:
        self.stack.clear()
