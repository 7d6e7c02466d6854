"""Services layer: access to the application's service locator."""

from .service_locator import (
    BasicServiceLocator,
    ServiceLocatorHolder,
    default_holder,
    get_instance,
    set_instance,
)

__all__ = [
    "BasicServiceLocator",
    "ServiceLocatorHolder",
    "default_holder",
    "get_instance",
    "set_instance",
]
