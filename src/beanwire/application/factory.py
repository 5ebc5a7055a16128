from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Type, Union

import structlog

from beanwire.application.containers import PrototypeContainer, SingletonContainer
from beanwire.application.creation_tracker import CreationTracker
from beanwire.application.introspection import allocate, describe
from beanwire.application.processors import Advisor, AopBeanProcessor, PopulateBeanProcessor
from beanwire.application.registry import TypeRegistry
from beanwire.application.singleton_cache import SingletonCache
from beanwire.domain import (
    BeanDefinition,
    BeanException,
    BeanKind,
    CapabilityViolationError,
    CyclicCreationError,
    FactoryOptions,
    IBeanFactory,
    IBeanProcessor,
    IContainer,
    InvalidKindError,
    InvalidShapeError,
    NotRegisteredError,
    missing_capabilities,
)

logger = structlog.get_logger(__name__)


class BeanFactory(IBeanFactory):
    """Registers bean definitions and builds auto-wired instances by name.

    Singletons are created lazily on first request and cached for the factory's
    lifetime; prototypes are created on every request and never cached. Cycles
    between singletons are resolved through early references when
    ``allow_early_reference`` is enabled.

    Attributes:
        _options: Immutable factory configuration.
        _registry: Bean definitions by name.
        _cache: Three-tier singleton cache, its lock guards singleton creation.
        _tracker: Beans in creation on the current thread.
        _aop_processor: Built-in AOP processor.
        _processors: Processor chain in invocation order.
        _containers: Lifecycle containers by bean kind.

    Example:
        >>> factory = BeanFactory(allow_early_reference=True)
        >>> factory.register("orders", OrderRepository)
        >>> factory.register("service", OrderService)
        >>> service = factory.get_bean("service")
    """

    def __init__(
        self,
        options: Optional[FactoryOptions] = None,
        advisors: Optional[Iterable[Advisor]] = None,
        **settings: Any,
    ) -> None:
        """Initialize the factory with built-in processors.

        Args:
            options: Factory configuration. Mutually exclusive with keyword settings.
            advisors: Advisors applied by the built-in AOP processor.
            **settings: Fields of FactoryOptions, used when ``options`` is not given.

        Raises:
            ValueError: If both ``options`` and keyword settings are given.
            pydantic.ValidationError: If a setting is invalid.
        """
        if options is not None and settings:
            raise ValueError("Pass either options or keyword settings, not both")
        self._options = options if options is not None else FactoryOptions(**settings)
        self._registry = TypeRegistry()
        self._cache = SingletonCache()
        self._tracker = CreationTracker()
        self._aop_processor = AopBeanProcessor(advisors)
        self._processors: List[IBeanProcessor] = [PopulateBeanProcessor(self), self._aop_processor]
        self._containers: Dict[BeanKind, IContainer] = {
            BeanKind.SINGLETON: SingletonContainer(self),
            BeanKind.PROTOTYPE: PrototypeContainer(self),
        }

    @property
    def options(self) -> FactoryOptions:
        return self._options

    @property
    def processors(self) -> Tuple[IBeanProcessor, ...]:
        return tuple(self._processors)

    def register(self, name: str, bean_type: Type, kind: Union[BeanKind, str] = BeanKind.SINGLETON) -> None:
        """Register a bean definition.

        Args:
            name: Unique bean name.
            bean_type: The class to instantiate.
            kind: Singleton or prototype, as enum member or value.

        Raises:
            BeanNameConflictError: If ``name`` is already registered.
            InvalidKindError: If ``kind`` is not a recognized kind.
        """
        definition = BeanDefinition(name=name, bean_type=bean_type, kind=self._coerce_kind(kind))
        with self._cache.lock:
            self._registry.register(definition)
        logger.debug(
            "bean.registered",
            bean=name,
            kind=definition.kind.value,
            type=getattr(bean_type, "__name__", repr(bean_type)),
        )

    @staticmethod
    def _coerce_kind(kind: Any) -> BeanKind:
        try:
            return BeanKind(kind)
        except (ValueError, TypeError):
            raise InvalidKindError(kind) from None

    def register_processor(self, name: str, bean_type: Type) -> None:
        """Register a singleton bean and append it to the processor chain.

        The bean is created immediately. If it cannot be created or does not
        provide every processor operation, the registration is rolled back
        together with every definition and singleton added while creating it.

        Raises:
            BeanNameConflictError: If ``name`` is already registered.
            CapabilityViolationError: If the created bean is not a processor.
        """
        with self._cache.lock:
            registered = set(self._registry.names())
            created = self._cache.finished_names()
            self.register(name, bean_type, BeanKind.SINGLETON)
            try:
                instance = self.require_bean(name)
            except BeanException as exc:
                self._rollback(name, registered, created)
                raise CapabilityViolationError(name, (), reason=f"creation failed: {exc}") from exc

            missing = missing_capabilities(instance)
            if missing:
                self._rollback(name, registered, created)
                raise CapabilityViolationError(name, missing)

            self._processors.append(instance)
        logger.info("bean.processor.admitted", bean=name, position=len(self._processors) - 1)

    def _rollback(self, name: str, registered: Set[str], created: Set[str]) -> None:
        with self._cache.lock:
            added = [other for other in self._registry.names() if other not in registered]
            for other in added:
                self._registry.remove(other)
            finished = self._cache.finished_names() - created
            for other in finished:
                self._cache.discard(other)
        logger.warning("bean.processor.rejected", bean=name, definitions=added, singletons=sorted(finished))

    def auto_register(self, name: str, bean_type: Type, kind: BeanKind) -> bool:
        """Register ``bean_type`` under ``name`` unless the name is already taken.

        Returns:
            Whether a new definition was added.
        """
        with self._cache.lock:
            if self._registry.contains(name):
                return False
            self._registry.register(BeanDefinition(name=name, bean_type=bean_type, kind=kind))
        logger.info("bean.auto_registered", bean=name, kind=kind.value)
        return True

    def contains_bean(self, name: str) -> bool:
        return self._registry.contains(name)

    def get_bean_definition(self, name: str) -> BeanDefinition:
        """Return the definition registered under ``name``.

        Raises:
            NotRegisteredError: If no definition exists.
        """
        return self._registry.lookup(name)

    def lookup_by_type(self, *candidate_types: Any) -> Optional[str]:
        """Return the first registered bean name whose type matches any candidate."""
        return self._registry.lookup_by_type(*candidate_types)

    def is_singleton_created(self, name: str) -> bool:
        return self._cache.contains(name)

    def get_bean(self, name: str) -> Optional[Any]:
        """Return the bean registered under ``name``, or None.

        Unknown names, invalid shapes and unresolvable cycles are logged and
        reported as None.
        """
        try:
            return self.require_bean(name)
        except NotRegisteredError:
            logger.debug("bean.not_registered", bean=name)
        except InvalidShapeError as exc:
            logger.warning("bean.invalid_shape", bean=name, reason=str(exc))
        except CyclicCreationError as exc:
            logger.warning("bean.cycle_detected", bean=name, chain=exc.chain)
        return None

    def require_bean(self, name: str) -> Any:
        """Return the bean registered under ``name``.

        Raises:
            NotRegisteredError: If no definition exists.
            InvalidShapeError: If the bean type cannot be instantiated.
            CyclicCreationError: If the bean closes a cycle that cannot be resolved.
        """
        definition = self._registry.lookup(name)
        return self._containers[definition.kind].get(name)

    def resolve_dependency(self, name: str) -> Optional[Any]:
        """Return a field dependency, or None if it cannot be provided.

        Cycle errors propagate to the outermost request.
        """
        try:
            return self.require_bean(name)
        except (NotRegisteredError, InvalidShapeError) as exc:
            logger.debug("bean.dependency.absent", bean=name, reason=str(exc))
            return None

    def create_private_bean(self, name: str) -> Optional[Any]:
        """Create an uncached instance of ``name`` regardless of its kind."""
        try:
            definition = self._registry.lookup(name)
            return self.create_bean(definition.model_copy(update={"kind": BeanKind.PROTOTYPE}))
        except (NotRegisteredError, InvalidShapeError) as exc:
            logger.debug("bean.dependency.absent", bean=name, reason=str(exc))
            return None

    def get_cached_singleton(self, name: str) -> Optional[Any]:
        return self._cache.get_finished(name)

    def create_bean(self, definition: BeanDefinition) -> Any:
        """Run the creation algorithm for ``definition``.

        Singleton creation is serialized on the cache lock, which the current
        thread may re-enter while resolving a cycle.
        """
        if not definition.is_singleton:
            if self._tracker.is_in_creation(definition.name):
                raise CyclicCreationError(self._tracker.cycle_to(definition.name))
            return self._create(definition, expose_early=False)

        with self._cache.lock:
            name = definition.name
            bean = self._cache.get_finished(name)
            if bean is not None:
                return bean

            if self._tracker.is_in_creation(name):
                early = self._cache.get_early(name) if self._options.allow_early_reference else None
                if early is None:
                    raise CyclicCreationError(self._tracker.cycle_to(name))
                logger.debug("bean.early_reference.served", bean=name)
                return early

            return self._create(definition, expose_early=self._options.allow_early_reference)

    def _create(self, definition: BeanDefinition, expose_early: bool) -> Any:
        name = definition.name
        self._tracker.enter(name)
        mark = self._tracker.commit_mark()
        try:
            bean = self._do_create(definition, expose_early)
            if definition.is_singleton:
                self._cache.add_finished(name, bean)
                self._tracker.record_commit(name)
            logger.debug("bean.created", bean=name, kind=definition.kind.value, depth=self._tracker.depth)
            return bean
        except Exception:
            if definition.is_singleton:
                # Singletons finished below this one may hold its early reference
                exposed = self._cache.is_early_consumed(name)
                self._cache.discard(name)
                self._aop_processor.forget(name)
                dependents = self._tracker.commits_since(mark)
                if exposed:
                    for dependent in dependents:
                        self._cache.discard(dependent)
                    if dependents:
                        logger.warning("bean.creation.rolled_back", bean=name, dependents=dependents)
            raise
        finally:
            self._tracker.leave()

    def _do_create(self, definition: BeanDefinition, expose_early: bool) -> Any:
        name = definition.name
        processors = self.processors

        for processor in processors:
            substitute = processor.process_before_instantiation(name, definition.bean_type)
            if substitute is not None:
                logger.debug("bean.instantiation.substituted", bean=name, processor=type(processor).__name__)
                return substitute

        descriptor = describe(definition.bean_type)
        bean = allocate(descriptor)

        if expose_early:
            self._cache.add_factory(name, lambda: self._get_early_bean_reference(name, bean))

        for processor in processors:
            processor.process_property_values(name, bean, descriptor)

        exposed = bean
        for processor in processors:
            result = processor.process_after_initialization(name, exposed, descriptor)
            if result is not None:
                exposed = result

        if expose_early and self._cache.is_early_consumed(name):
            early = self._cache.get_early(name)
            if exposed is not bean and exposed is not early:
                logger.warning("bean.early_reference.overrides_wrapper", bean=name)
            logger.debug("bean.early_reference.reconciled", bean=name)
            exposed = early

        return exposed

    def _get_early_bean_reference(self, name: str, bean: Any) -> Any:
        exposed = bean
        for processor in self.processors:
            hook = getattr(processor, "get_early_bean_reference", None)
            if hook is None:
                continue
            result = hook(name, exposed)
            if result is not None:
                exposed = result
        return exposed
