"""Holder for the application's service locator."""

import logging
from typing import Optional, Protocol, Type, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class BasicServiceLocator(Protocol):
    """Capability for looking up services by type.

    The implementation belongs to the application; this package only stores
    and hands out the registered instance.
    """

    def get(self, service_type: Type[T]) -> T: ...


class ServiceLocatorHolder:
    """Holds the current service locator instance.

    Startup code sets the instance once, everything else reads it. Components
    that need isolation (tests, embedded apps) can construct their own holder
    and pass it along instead of using :data:`default_holder`.
    """

    def __init__(self, locator: Optional[BasicServiceLocator] = None):
        self._instance: Optional[BasicServiceLocator] = locator

    @property
    def instance(self) -> Optional[BasicServiceLocator]:
        return self._instance

    def set_instance(self, locator: Optional[BasicServiceLocator]):
        """Store the service locator, replacing any previous one.

        Args:
            locator: The service locator to register.
        """
        if locator is None:
            logger.warning("Service locator set to None")
        elif self._instance is not None and self._instance is not locator:
            logger.debug(
                f"Replacing service locator {type(self._instance).__name__} "
                f"with {type(locator).__name__}"
            )
        else:
            logger.debug(f"Registered service locator: {type(locator).__name__}")
        self._instance = locator

    def get_instance(self) -> Optional[BasicServiceLocator]:
        """Get the current service locator.

        Returns:
            The registered service locator, or None if none has been set.
        """
        return self._instance


default_holder = ServiceLocatorHolder()


def set_instance(locator: Optional[BasicServiceLocator]):
    """Register the process-wide service locator on :data:`default_holder`."""
    default_holder.set_instance(locator)


def get_instance() -> Optional[BasicServiceLocator]:
    """Return the process-wide service locator, or None if unset."""
    return default_holder.get_instance()
