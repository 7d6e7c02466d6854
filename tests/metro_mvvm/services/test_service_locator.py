"""Tests for the service locator holder."""

import logging

import pytest

from metro_mvvm.services import service_locator
from metro_mvvm.services.service_locator import (
    BasicServiceLocator,
    ServiceLocatorHolder,
)


class DictServiceLocator:
    def __init__(self, services=None):
        self.services = services or {}

    def get(self, service_type):
        return self.services[service_type]


@pytest.fixture
def fresh_default_holder(monkeypatch):
    holder = ServiceLocatorHolder()
    monkeypatch.setattr(service_locator, "default_holder", holder)
    return holder


def test_get_instance_before_set_returns_none():
    """Test an unset holder returns None."""
    holder = ServiceLocatorHolder()
    assert holder.get_instance() is None
    assert holder.instance is None


def test_last_set_instance_wins():
    """Test the most recently set locator is returned."""
    holder = ServiceLocatorHolder()
    first = DictServiceLocator()
    second = DictServiceLocator()

    holder.set_instance(first)
    holder.set_instance(second)

    assert holder.get_instance() is second


def test_get_instance_has_no_side_effects():
    """Test reading the locator does not change it."""
    locator = DictServiceLocator()
    holder = ServiceLocatorHolder(locator)

    assert holder.get_instance() is locator
    assert holder.get_instance() is locator


def test_setting_none_is_accepted_but_warned(caplog):
    """Test setting None is accepted and logged as a warning."""
    holder = ServiceLocatorHolder(DictServiceLocator())

    with caplog.at_level(logging.WARNING, logger="metro_mvvm.services.service_locator"):
        holder.set_instance(None)

    assert holder.get_instance() is None
    assert "Service locator set to None" in caplog.text


def test_holders_are_isolated():
    """Test separate holders do not share their locator."""
    a = ServiceLocatorHolder()
    b = ServiceLocatorHolder()
    a.set_instance(DictServiceLocator())

    assert b.get_instance() is None


def test_module_functions_use_default_holder(fresh_default_holder):
    """Test the module functions read and write the default holder."""
    assert service_locator.get_instance() is None

    locator = DictServiceLocator({int: 42})
    service_locator.set_instance(locator)

    assert fresh_default_holder.get_instance() is locator
    assert service_locator.get_instance().get(int) == 42


def test_locator_satisfies_protocol():
    """Test objects with a get method satisfy BasicServiceLocator."""
    assert isinstance(DictServiceLocator(), BasicServiceLocator)
    assert not isinstance(object(), BasicServiceLocator)
