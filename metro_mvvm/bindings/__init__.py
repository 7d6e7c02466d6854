"""Adapters pushing property change notifications into UI bindings."""

from .nicegui_binding import PropertyBinding, bind_property, is_bindable

__all__ = [
    "PropertyBinding",
    "bind_property",
    "is_bindable",
]
