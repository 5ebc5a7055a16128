import inspect
import sys
import types
from functools import lru_cache
from typing import Any, ClassVar, Dict, Type, Union, get_args, get_origin, get_type_hints

from beanwire.domain import FieldDescriptor, InjectionDirective, InvalidShapeError, TypeDescriptor


def check_shape(bean_type: Any) -> None:
    """Verify that ``bean_type`` can be allocated with no arguments and injected.

    Args:
        bean_type: The registered type.

    Raises:
        InvalidShapeError: If the type is not an injectable aggregate.
    """
    if not inspect.isclass(bean_type):
        raise InvalidShapeError(bean_type, "not a class")
    if bean_type.__module__ == "builtins":
        raise InvalidShapeError(bean_type, "builtin types cannot be injected")
    if inspect.isabstract(bean_type):
        raise InvalidShapeError(bean_type, "abstract classes cannot be instantiated")

    try:
        signature = inspect.signature(bean_type)
    except (TypeError, ValueError):
        # No introspectable signature, allocation will tell
        return

    required = [
        param_name
        for param_name, param in signature.parameters.items()
        if param.default is inspect.Parameter.empty
        and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if required:
        raise InvalidShapeError(bean_type, f"constructor requires arguments: {', '.join(required)}")


def describe(bean_type: Any) -> TypeDescriptor:
    """Return the field layout of ``bean_type``.

    Descriptors are built once per type and cached.

    Raises:
        InvalidShapeError: If the type is not an injectable aggregate.

    Example:
        >>> class OrderService:
        ...     repository: OrderRepository = inject("orders")
        ...     retries: int = 3
        >>> [field.name for field in describe(OrderService).fields]
        ['repository', 'retries']
    """
    check_shape(bean_type)
    return _describe(bean_type)


@lru_cache(maxsize=None)
def _describe(bean_type: Type) -> TypeDescriptor:
    fields = []
    for field_name, field_type in _field_hints(bean_type).items():
        if get_origin(field_type) is ClassVar:
            continue

        directive = getattr(bean_type, field_name, None)
        if not isinstance(directive, InjectionDirective):
            directive = None

        fields.append(
            FieldDescriptor(
                name=field_name,
                field_type=_unwrap_optional(field_type),
                is_reference=not (directive is not None and directive.by_value),
                directive=directive,
            )
        )
    return TypeDescriptor(bean_type=bean_type, fields=tuple(fields))


def _field_hints(bean_type: Type) -> Dict[str, Any]:
    try:
        return get_type_hints(bean_type)
    except (NameError, TypeError, AttributeError):
        pass

    # Forward references that cannot be evaluated stay as strings
    hints: Dict[str, Any] = {}
    for klass in reversed(bean_type.__mro__):
        module_globals = getattr(sys.modules.get(klass.__module__), "__dict__", {})
        for field_name, annotation in inspect.get_annotations(klass).items():
            if isinstance(annotation, str):
                annotation = module_globals.get(annotation, annotation)
            hints[field_name] = annotation
    return hints


def _unwrap_optional(field_type: Any) -> Any:
    if get_origin(field_type) in (Union, types.UnionType):
        args = [arg for arg in get_args(field_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return field_type


def allocate(descriptor: TypeDescriptor) -> Any:
    """Create a zero-valued instance of the described type.

    Every injected field is reset to None until it is populated.

    Raises:
        InvalidShapeError: If the constructor fails.
    """
    bean_type = descriptor.bean_type
    try:
        instance = bean_type()
        for field in descriptor.injected_fields:
            setattr(instance, field.name, None)
    except Exception as e:
        raise InvalidShapeError(bean_type, f"Failed to allocate instance: {e}") from e
    return instance
