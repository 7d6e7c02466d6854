"""Observable base class raising property change notifications."""

from __future__ import annotations

import inspect
import logging
from functools import cached_property
from types import BuiltinFunctionType, FunctionType, MethodType
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

PropertyChangedCallback = Callable[["ObservableObject", str], None]

_MISSING = object()


class InvalidPropertyName(ValueError):
    """Raised when a notified property name does not exist on the object."""

    def __init__(self, property_name: str, owner: type):
        self.property_name = property_name
        self.owner = owner
        super().__init__(
            f"Property not found: '{property_name}' on {owner.__name__}"
        )


def resolve_property_name(accessor: Any) -> Optional[str]:
    """Resolve the declared name of a property from an accessor.

    Args:
        accessor: A property name, a ``property`` object, a
            ``functools.cached_property`` or an ``ObservableProperty``
            descriptor taken from the class (e.g. ``type(self).count``).

    Returns:
        The property name, or None when the accessor is None.

    Raises:
        TypeError: If the accessor does not identify a single property.
    """
    if accessor is None or isinstance(accessor, str):
        return accessor
    if isinstance(accessor, ObservableProperty):
        return accessor.name
    if isinstance(accessor, cached_property):
        return accessor.attrname
    if isinstance(accessor, property) and accessor.fget is not None:
        return accessor.fget.__name__
    raise TypeError(
        f"Cannot resolve a property name from {accessor!r}; "
        "pass a property name or a property accessor"
    )


def _caller_name(depth: int) -> str:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            frame = frame.f_back
        return frame.f_code.co_name
    finally:
        del frame


class ObservableObject:
    """A base class for objects of which the properties must be observable.

    Subscribers are callables receiving ``(source, property_name)``. They are
    invoked synchronously, in registration order, each time a property change
    is raised through :meth:`notify_changed` or :meth:`set_and_notify`.

    In debug runs (``__debug__`` true) the notified name is checked against
    the object's attributes and :class:`InvalidPropertyName` is raised on a
    mismatch. Set ``verify_property_names = False`` on a subclass to skip
    the check; under ``python -O`` it is compiled out entirely.
    """

    verify_property_names: bool = True

    def __init__(self):
        self._property_changed_callbacks: List[PropertyChangedCallback] = []

    @property
    def property_changed_handlers(self) -> Tuple[PropertyChangedCallback, ...]:
        """Snapshot of the registered property change callbacks."""
        return tuple(self._callbacks())

    def _callbacks(self) -> List[PropertyChangedCallback]:
        # Subclasses that skip __init__ (dataclasses, mixins) still work.
        try:
            return self.__dict__["_property_changed_callbacks"]
        except KeyError:
            callbacks: List[PropertyChangedCallback] = []
            self.__dict__["_property_changed_callbacks"] = callbacks
            return callbacks

    def subscribe(self, callback: PropertyChangedCallback):
        """Add a listener for property changes.

        Args:
            callback: Function to call when a property changes. Receives
                (source, property_name).
        """
        self._callbacks().append(callback)
        logger.debug(
            f"Subscribed {callback!r} to {self.__class__.__name__} property changes"
        )

    def unsubscribe(self, callback: PropertyChangedCallback):
        """Remove a property change listener.

        Removes the most recent registration of ``callback``; unknown
        callbacks are ignored.

        Args:
            callback: The callback function to remove.
        """
        callbacks = self._callbacks()
        for index in range(len(callbacks) - 1, -1, -1):
            if callbacks[index] == callback:
                del callbacks[index]
                logger.debug(
                    f"Unsubscribed {callback!r} from "
                    f"{self.__class__.__name__} property changes"
                )
                return

    def notify_changed(self, property_name: Any = _MISSING):
        """Raise a property change notification.

        Args:
            property_name: Name of the property that changed, or a property
                accessor (see :func:`resolve_property_name`). Defaults to the
                name of the calling function, so a property setter can call
                ``self.notify_changed()``. An empty string means that all
                properties changed. A None accessor does nothing.

        Raises:
            InvalidPropertyName: In debug runs, if the name does not exist
                on this object.
            TypeError: If the accessor cannot be resolved to a name.
        """
        if property_name is _MISSING:
            property_name = _caller_name(1)
        self._raise_property_changed(property_name)

    def set_and_notify(
        self, field_name: str, new_value: Any, property_name: Any = _MISSING
    ) -> bool:
        """Assign a new value to a backing field, then notify if it changed.

        Args:
            field_name: Attribute holding the property's value, e.g. ``"_count"``.
            new_value: The property's value after the change.
            property_name: Name or accessor of the property that changed.
                Defaults to the name of the calling function.

        Returns:
            True if the value changed and a notification was raised.
        """
        if property_name is _MISSING:
            property_name = _caller_name(1)
        if _values_equal(getattr(self, field_name, _MISSING), new_value):
            return False

        setattr(self, field_name, new_value)
        self._raise_property_changed(property_name)
        return True

    def _raise_property_changed(self, accessor: Any):
        property_name = resolve_property_name(accessor)
        if property_name is None:
            return

        if __debug__:
            self._verify_property_name(property_name)

        # Snapshot so callbacks may (un)subscribe while being notified.
        for callback in tuple(self._callbacks()):
            try:
                callback(self, property_name)
            except Exception as e:
                logger.exception(
                    f"Error in property change callback for {property_name}: {e}"
                )

    def _verify_property_name(self, property_name: str):
        """Verify that a property name exists on this object.

        Catches notifications left behind when a property is renamed. Empty
        names ("all properties") are not checked. Methods and the members
        of ObservableObject itself are not properties and are rejected.
        """
        if not property_name or not self.verify_property_names:
            return
        if property_name in _RESERVED_NAMES:
            raise InvalidPropertyName(property_name, type(self))
        member = inspect.getattr_static(self, property_name, _MISSING)
        if member is _MISSING or isinstance(member, _METHOD_TYPES):
            raise InvalidPropertyName(property_name, type(self))


_RESERVED_NAMES = frozenset(vars(ObservableObject)) | {
    "_property_changed_callbacks",
}

_METHOD_TYPES = (
    FunctionType,
    BuiltinFunctionType,
    MethodType,
    staticmethod,
    classmethod,
)


def _values_equal(current: Any, new_value: Any) -> bool:
    # Identity first so a value that is unequal to itself (NaN) counts as unchanged.
    return current is new_value or bool(current == new_value)


class ObservableProperty(Generic[T]):
    """Descriptor storing a value and notifying its owner when it changes.

    Example:
        class CounterViewModel(ObservableObject):
            count = ObservableProperty(default=0)

        vm = CounterViewModel()
        vm.count = 5  # notifies "count"

    Use ``default_factory`` for mutable defaults such as lists; each instance
    then gets its own value.
    """

    def __init__(
        self,
        default: T = None,
        default_factory: Optional[Callable[[], T]] = None,
    ):
        if default is not None and default_factory is not None:
            raise ValueError("Cannot specify both default and default_factory")
        self.default = default
        self.default_factory = default_factory
        self.name: str = ""
        self._field_name: str = ""

    def __set_name__(self, owner: type, name: str):
        self.name = name
        self._field_name = f"_observable_{name}"

    def __get__(self, obj: Optional[ObservableObject], objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        try:
            return obj.__dict__[self._field_name]
        except KeyError:
            value = (
                self.default_factory()
                if self.default_factory is not None
                else self.default
            )
            obj.__dict__[self._field_name] = value
            return value

    def __set__(self, obj: ObservableObject, value: T):
        # Materialize the default so an assignment equal to it does not notify.
        self.__get__(obj)
        obj.set_and_notify(self._field_name, value, self.name)
