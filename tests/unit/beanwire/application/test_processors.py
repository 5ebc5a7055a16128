"""Unit tests for the built-in processors."""

from beanwire.application.factory import BeanFactory
from beanwire.application.introspection import allocate, describe
from beanwire.application.processors import AopBeanProcessor, PopulateBeanProcessor
from beanwire.domain import BeanKind, FieldDescriptor, IBeanProcessor, inject


class Clock:
    pass


class Mailer:
    pass


class Notifier:
    clock: Clock = inject()
    mailer: Mailer = inject("mailer")
    backup: Mailer = inject("backup_mailer", by_value=True)
    label: str = "notifier"


class Proxy:
    def __init__(self, target):
        self.target = target


class TestPopulateBeanProcessor:
    """Test cases for PopulateBeanProcessor."""

    def test_is_processor(self):
        """Test that the populator satisfies the processor interface."""
        processor = PopulateBeanProcessor(BeanFactory())
        assert isinstance(processor, IBeanProcessor)
        assert processor.process_before_instantiation("x", Clock) is None
        assert processor.process_after_initialization("x", Clock(), describe(Clock)) is None

    def test_explicit_name_wins(self):
        """Test that an explicit directive name is used as is."""
        factory = BeanFactory()
        processor = PopulateBeanProcessor(factory)
        field = FieldDescriptor(name="mailer", field_type=Mailer, directive=inject("smtp"))
        assert processor.resolve_target_name(field) == "smtp"

    def test_lookup_by_type(self):
        """Test that the first bean of the declared type is used."""
        factory = BeanFactory()
        factory.register("system_clock", Clock)
        factory.register("other_clock", Clock)
        processor = PopulateBeanProcessor(factory)
        field = FieldDescriptor(name="clock", field_type=Clock, directive=inject())
        assert processor.resolve_target_name(field) == "system_clock"

    def test_fallback_auto_registers_type_name(self):
        """Test that an unknown type is registered under its class name."""
        factory = BeanFactory()
        processor = PopulateBeanProcessor(factory)
        field = FieldDescriptor(name="clock", field_type=Clock, directive=inject(kind=BeanKind.PROTOTYPE))

        assert processor.resolve_target_name(field) == "Clock"
        definition = factory.get_bean_definition("Clock")
        assert definition.bean_type is Clock
        assert definition.kind is BeanKind.PROTOTYPE

    def test_fallback_is_idempotent(self):
        """Test that resolving twice registers once."""
        factory = BeanFactory()
        processor = PopulateBeanProcessor(factory)
        field = FieldDescriptor(name="clock", field_type=Clock, directive=inject())

        assert processor.resolve_target_name(field) == "Clock"
        assert processor.resolve_target_name(field) == "Clock"
        assert factory.get_bean_definition("Clock").kind is BeanKind.SINGLETON

    def test_fallback_reuses_registered_name(self):
        """Test that a bean already registered under the type name is used."""
        factory = BeanFactory()
        factory.register("Clock", Mailer)
        processor = PopulateBeanProcessor(factory)
        field = FieldDescriptor(name="clock", field_type=Clock, directive=inject())

        assert processor.resolve_target_name(field) == "Clock"
        assert factory.get_bean_definition("Clock").bean_type is Mailer

    def test_unevaluated_forward_reference(self):
        """Test that an unknown forward reference resolves to nothing."""
        processor = PopulateBeanProcessor(BeanFactory())
        field = FieldDescriptor(name="clock", field_type="Sundial", directive=inject())
        assert processor.resolve_target_name(field) is None

    def test_field_without_directive(self):
        """Test that fields without a directive are never wired."""
        processor = PopulateBeanProcessor(BeanFactory())
        field = FieldDescriptor(name="label", field_type=str)
        assert processor.resolve_target_name(field) is None

    def test_populates_reference_fields(self):
        """Test populating reference fields and skipping value fields."""
        factory = BeanFactory()
        factory.register("mailer", Mailer)
        factory.register("backup_mailer", Mailer)
        processor = PopulateBeanProcessor(factory)
        descriptor = describe(Notifier)
        notifier = allocate(descriptor)

        processor.process_property_values("notifier", notifier, descriptor)

        assert isinstance(notifier.clock, Clock)
        assert notifier.mailer is factory.get_bean("mailer")
        assert notifier.backup is None
        assert notifier.label == "notifier"

    def test_populates_value_fields_when_allowed(self):
        """Test that value fields receive a private instance."""
        factory = BeanFactory(allow_populate_struct_bean=True)
        factory.register("mailer", Mailer)
        factory.register("backup_mailer", Mailer)
        processor = PopulateBeanProcessor(factory)
        descriptor = describe(Notifier)
        notifier = allocate(descriptor)

        processor.process_property_values("notifier", notifier, descriptor)

        assert isinstance(notifier.backup, Mailer)
        assert notifier.backup is not factory.get_bean("backup_mailer")

    def test_absent_dependency_leaves_none(self):
        """Test that an unregistered explicit target leaves the field at None."""
        factory = BeanFactory()
        processor = PopulateBeanProcessor(factory)
        descriptor = describe(Notifier)
        notifier = allocate(descriptor)

        processor.process_property_values("notifier", notifier, descriptor)

        assert notifier.mailer is None
        assert isinstance(notifier.clock, Clock)


class TestAopBeanProcessor:
    """Test cases for AopBeanProcessor."""

    def test_without_advisors_bean_passes_through(self):
        """Test that beans are returned unchanged with no advisors."""
        processor = AopBeanProcessor()
        bean = Clock()
        assert processor.process_after_initialization("clock", bean, describe(Clock)) is bean
        assert processor.process_before_instantiation("clock", Clock) is None

    def test_advisors_applied_in_order(self):
        """Test that each advisor sees the previous advisor's result."""
        seen = []

        def first(name, bean):
            seen.append(("first", bean))
            return Proxy(bean)

        def second(name, bean):
            seen.append(("second", bean))
            return None

        processor = AopBeanProcessor([first, second])
        bean = Clock()
        result = processor.process_after_initialization("clock", bean, describe(Clock))

        assert isinstance(result, Proxy)
        assert result.target is bean
        assert seen[0] == ("first", bean)
        assert seen[1] == ("second", result)

    def test_early_reference_not_wrapped_twice(self):
        """Test that a bean advised early is skipped at after-initialization."""
        calls = []

        def advisor(name, bean):
            calls.append(name)
            return Proxy(bean)

        processor = AopBeanProcessor([advisor])
        bean = Clock()
        early = processor.get_early_bean_reference("clock", bean)

        assert isinstance(early, Proxy)
        assert processor.process_after_initialization("clock", bean, describe(Clock)) is None
        assert calls == ["clock"]

    def test_early_tracking_is_per_construction(self):
        """Test that the next construction of the same name is advised again."""
        calls = []

        def advisor(name, bean):
            calls.append(bean)
            return None

        processor = AopBeanProcessor([advisor])
        first = Clock()
        processor.get_early_bean_reference("clock", first)
        processor.process_after_initialization("clock", first, describe(Clock))

        second = Clock()
        processor.process_after_initialization("clock", second, describe(Clock))

        assert calls == [first, second]

    def test_forget_drops_early_bookkeeping(self):
        """Test that an abandoned construction does not suppress later advice."""
        calls = []
        processor = AopBeanProcessor([lambda name, bean: calls.append(bean)])
        bean = Clock()
        processor.get_early_bean_reference("clock", bean)
        processor.forget("clock")

        processor.process_after_initialization("clock", bean, describe(Clock))
        assert calls == [bean, bean]
