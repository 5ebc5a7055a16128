"""Application layer - Built-in bean processors."""

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional, Type

import structlog

from beanwire.domain import BeanKind, FieldDescriptor, IBeanProcessor, TypeDescriptor

if TYPE_CHECKING:
    from beanwire.application.factory import BeanFactory

logger = structlog.get_logger(__name__)

Advisor = Callable[[str, Any], Optional[Any]]


class PopulateBeanProcessor(IBeanProcessor):
    """Injects dependencies into fields carrying an injection directive.

    The target bean name of a field is resolved from, in order:
    1. The directive's explicit name.
    2. The first registered bean whose type is the field's declared type.
    3. The declared type's name, auto-registering the type under that name
       (with the directive's kind) if nothing is registered yet.

    Attributes:
        _factory: The factory used to resolve and register dependencies.
    """

    def __init__(self, factory: "BeanFactory") -> None:
        self._factory = factory

    def process_before_instantiation(self, bean_name: str, bean_type: Type) -> Optional[Any]:
        return None

    def process_property_values(self, bean_name: str, bean: Any, descriptor: TypeDescriptor) -> None:
        """Populate every injected field of ``bean``.

        Fields whose dependency cannot be provided are left at None.

        Raises:
            CyclicCreationError: If a dependency closes a cycle that cannot be resolved.
        """
        for field in descriptor.injected_fields:
            # Value fields are only wired when explicitly allowed
            if not field.is_reference and not self._factory.options.allow_populate_struct_bean:
                continue

            target_name = self.resolve_target_name(field)
            if target_name is None:
                logger.debug("bean.field.unresolvable", bean=bean_name, field=field.name, type=field.type_name)
                continue

            if field.is_reference:
                value = self._factory.resolve_dependency(target_name)
            else:
                value = self._factory.create_private_bean(target_name)

            if value is None:
                logger.debug("bean.field.absent", bean=bean_name, field=field.name, target=target_name)
                continue
            setattr(bean, field.name, value)

    def resolve_target_name(self, field: FieldDescriptor) -> Optional[str]:
        """Return the bean name a field should be wired to, or None."""
        directive = field.directive
        if directive is None:
            return None
        if directive.name:
            return directive.name

        found = self._factory.lookup_by_type(field.field_type)
        if found is not None:
            return found

        target_name = field.type_name
        if self._factory.contains_bean(target_name):
            return target_name
        if isinstance(field.field_type, str):
            # Unevaluated forward reference, nothing to register
            return None
        self._factory.auto_register(target_name, field.field_type, directive.kind or BeanKind.SINGLETON)
        return target_name

    def process_after_initialization(self, bean_name: str, bean: Any, descriptor: TypeDescriptor) -> Optional[Any]:
        return None


class AopBeanProcessor(IBeanProcessor):
    """Applies advisors to finished beans.

    An advisor is a callable ``(bean_name, bean)`` returning a replacement or None.
    With no advisors beans pass through unchanged. A bean whose early reference was
    already advised is not advised again when its own construction completes.

    Attributes:
        _advisors: Advisors applied in order.
        _early_proxy_references: Raw beans advised through the early path, by name,
            held until their construction reaches after-initialization.
    """

    def __init__(self, advisors: Optional[Iterable[Advisor]] = None) -> None:
        self._advisors: List[Advisor] = list(advisors or [])
        self._early_proxy_references: Dict[str, Any] = {}

    def process_before_instantiation(self, bean_name: str, bean_type: Type) -> Optional[Any]:
        return None

    def process_property_values(self, bean_name: str, bean: Any, descriptor: TypeDescriptor) -> None:
        pass

    def get_early_bean_reference(self, bean_name: str, bean: Any) -> Any:
        """Advise a bean handed out before its construction has finished."""
        self._early_proxy_references[bean_name] = bean
        return self.wrap_if_necessary(bean_name, bean)

    def process_after_initialization(self, bean_name: str, bean: Any, descriptor: TypeDescriptor) -> Optional[Any]:
        if self._early_proxy_references.pop(bean_name, None) is bean:
            return None
        return self.wrap_if_necessary(bean_name, bean)

    def forget(self, bean_name: str) -> None:
        """Drop early bookkeeping for a construction that did not complete."""
        self._early_proxy_references.pop(bean_name, None)

    def wrap_if_necessary(self, bean_name: str, bean: Any) -> Any:
        wrapped = bean
        for advisor in self._advisors:
            replacement = advisor(bean_name, wrapped)
            if replacement is not None:
                wrapped = replacement
        if wrapped is not bean:
            logger.debug("bean.aop.wrapped", bean=bean_name, wrapper=type(wrapped).__name__)
        return wrapped
