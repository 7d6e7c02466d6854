from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from nicegui import binding

from ..observable_object import ObservableObject

logger = logging.getLogger(__name__)


def is_bindable(target: Any, name: str) -> bool:
    """Return True if ``target.name`` is a NiceGUI bindable property."""
    for klass in type(target).__mro__:
        if name in klass.__dict__:
            return isinstance(klass.__dict__[name], binding.BindableProperty)
    return False


class PropertyBinding:
    """One-way binding from an ObservableObject property to a NiceGUI object.

    The target is usually a NiceGUI element (``label.text``) or an instance of
    a ``binding.bindable_dataclass``. Assigning a bindable property makes
    NiceGUI propagate the value to everything bound to it, so view models
    can push changes instead of being polled.
    """

    def __init__(
        self,
        source: ObservableObject,
        property_name: str,
        target: Any,
        target_name: Optional[str] = None,
        forward: Optional[Callable[[Any], Any]] = None,
    ):
        if not isinstance(source, ObservableObject):
            logger.error("Binding source is not an ObservableObject!")
            raise ValueError("Binding source is not an ObservableObject!")

        self.source = source
        self.property_name = property_name
        self.target = target
        self.target_name = target_name or property_name
        self.forward = forward or (lambda value: value)
        self._active = False

        if not is_bindable(target, self.target_name):
            logger.debug(
                f"{type(target).__name__}.{self.target_name} is not a bindable "
                "property; NiceGUI will only see updates when polling"
            )

        self.update()
        source.subscribe(self._on_property_changed)
        self._active = True
        logger.debug(
            f"Bound {type(source).__name__}.{property_name} to "
            f"{type(target).__name__}.{self.target_name}"
        )

    @property
    def is_active(self) -> bool:
        return self._active

    # Only propagate one-way from the source to the target
    def update(self):
        """Copy the current source value onto the target."""
        value = self.forward(getattr(self.source, self.property_name))
        setattr(self.target, self.target_name, value)

    def dispose(self):
        """Stop forwarding changes. Calling it again does nothing."""
        if not self._active:
            return
        self.source.unsubscribe(self._on_property_changed)
        self._active = False
        logger.debug(
            f"Disposed binding for {type(self.source).__name__}.{self.property_name}"
        )

    def _on_property_changed(self, source: ObservableObject, property_name: str):
        if property_name in ("", self.property_name):
            self.update()


def bind_property(
    source: ObservableObject,
    property_name: str,
    target: Any,
    target_name: Optional[str] = None,
    forward: Optional[Callable[[Any], Any]] = None,
) -> PropertyBinding:
    """Bind ``source.property_name`` to ``target.target_name``.

    Args:
        source: The observable object to read from.
        property_name: Name of the observed property.
        target: NiceGUI element or bindable object to write to.
        target_name: Attribute on the target. Defaults to ``property_name``.
        forward: Optional conversion applied to each value.

    Returns:
        The binding; call ``dispose()`` to stop it.
    """
    return PropertyBinding(source, property_name, target, target_name, forward)
