from .observable_object import (
    InvalidPropertyName,
    ObservableObject,
    ObservableProperty,
    resolve_property_name,
)
from .services import BasicServiceLocator, ServiceLocatorHolder

__all__ = [
    "InvalidPropertyName",
    "ObservableObject",
    "ObservableProperty",
    "resolve_property_name",
    "BasicServiceLocator",
    "ServiceLocatorHolder",
]
