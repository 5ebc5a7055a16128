from typing import Any, Dict, List, Optional

from beanwire.domain import BeanDefinition, BeanNameConflictError, NotRegisteredError


class TypeRegistry:
    """Stores bean definitions by name, in registration order.

    Attributes:
        _definitions: Dictionary mapping bean names to their definitions.
    """

    def __init__(self) -> None:
        self._definitions: Dict[str, BeanDefinition] = {}

    def register(self, definition: BeanDefinition) -> None:
        """Add a definition.

        Raises:
            BeanNameConflictError: If the name is already registered.
        """
        if definition.name in self._definitions:
            raise BeanNameConflictError(definition.name)
        self._definitions[definition.name] = definition

    def lookup(self, name: str) -> BeanDefinition:
        """Return the definition registered under ``name``.

        Raises:
            NotRegisteredError: If no definition exists.
        """
        try:
            return self._definitions[name]
        except KeyError:
            raise NotRegisteredError(name) from None

    def lookup_by_type(self, *candidate_types: Any) -> Optional[str]:
        """Return the first registered name whose type matches any candidate.

        Candidates that are strings (unevaluated forward references) match by class name.
        """
        for name, definition in self._definitions.items():
            for candidate in candidate_types:
                if isinstance(candidate, str):
                    if getattr(definition.bean_type, "__name__", None) == candidate:
                        return name
                elif definition.bean_type is candidate:
                    return name
        return None

    def contains(self, name: str) -> bool:
        return name in self._definitions

    def remove(self, name: str) -> None:
        # Only used to roll back a rejected processor registration
        self._definitions.pop(name, None)

    def names(self) -> List[str]:
        return list(self._definitions)

    def clear(self) -> None:
        self._definitions.clear()
