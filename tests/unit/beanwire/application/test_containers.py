"""Unit tests for the lifecycle containers."""

from unittest.mock import MagicMock

import pytest

from beanwire.application.containers import PrototypeContainer, SingletonContainer
from beanwire.application.factory import BeanFactory
from beanwire.domain import BeanKind, IContainer, NotRegisteredError


class Widget:
    pass


class TestSingletonContainer:
    """Test cases for SingletonContainer."""

    def test_implements_interface(self):
        """Test that the container implements IContainer."""
        assert isinstance(SingletonContainer(BeanFactory()), IContainer)

    def test_cached_instance_short_circuits_creation(self):
        """Test that a finished singleton is returned without creation."""
        factory = MagicMock()
        cached = Widget()
        factory.get_cached_singleton.return_value = cached

        assert SingletonContainer(factory).get("widget") is cached
        factory.create_bean.assert_not_called()

    def test_missing_instance_delegates_to_factory(self):
        """Test that creation is delegated when nothing is cached."""
        factory = MagicMock()
        factory.get_cached_singleton.return_value = None
        factory.create_bean.return_value = "created"

        assert SingletonContainer(factory).get("widget") == "created"
        factory.get_bean_definition.assert_called_once_with("widget")
        factory.create_bean.assert_called_once_with(factory.get_bean_definition.return_value)

    def test_returns_same_instance(self):
        """Test identity across requests with a real factory."""
        factory = BeanFactory()
        factory.register("widget", Widget)
        container = SingletonContainer(factory)
        assert container.get("widget") is container.get("widget")

    def test_unknown_name_raises(self):
        """Test that an unknown name raises NotRegisteredError."""
        with pytest.raises(NotRegisteredError):
            SingletonContainer(BeanFactory()).get("missing")


class TestPrototypeContainer:
    """Test cases for PrototypeContainer."""

    def test_never_consults_cache(self):
        """Test that the cache is never read."""
        factory = MagicMock()
        PrototypeContainer(factory).get("widget")
        factory.get_cached_singleton.assert_not_called()
        factory.create_bean.assert_called_once()

    def test_returns_new_instances(self):
        """Test that every request creates a new instance."""
        factory = BeanFactory()
        factory.register("widget", Widget, BeanKind.PROTOTYPE)
        container = PrototypeContainer(factory)

        first = container.get("widget")
        second = container.get("widget")

        assert isinstance(first, Widget)
        assert first is not second
        assert not factory.is_singleton_created("widget")
