"""Dependency injection container for herald.

Listener classes named by string references are built through the
container, so an application can hand them their collaborators.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


class Container:
    """Dependency injection container.

    Usage:
        container = Container()
        container.register(Mailer, lambda: SmtpMailer(host="localhost"))
        container.register(
            SendWelcomeEmail,
            lambda: SendWelcomeEmail(container.get(Mailer)),
        )
        listener = container.make(SendWelcomeEmail)
    """

    def __init__(self) -> None:
        self._singletons: dict[type, Any] = {}
        self._factories: dict[type, Callable[[], Any]] = {}

    def register(self, interface: type[T], factory: Callable[[], T]) -> None:
        """Register a factory for a type.

        Args:
            interface: Type to register factory for
            factory: Factory callable that creates instances
        """
        self._factories[interface] = factory

    def register_singleton(self, interface: type[T], instance: T) -> None:
        """Register a singleton instance.

        Args:
            interface: Type to register instance for
            instance: Pre-created instance
        """
        self._singletons[interface] = instance

    def get(self, interface: type[T]) -> T:
        """Get instance of a type.

        Args:
            interface: Type to get instance of

        Returns:
            Instance of requested type

        Raises:
            ValueError: If no factory registered for type
        """
        if interface in self._singletons:
            return self._singletons[interface]

        if interface in self._factories:
            instance = self._factories[interface]()
            self._singletons[interface] = instance
            return instance

        raise ValueError(f"No factory registered for {interface}")

    def has(self, interface: type) -> bool:
        """Check if a type is registered."""
        return interface in self._singletons or interface in self._factories

    def make(self, cls: type[T]) -> T:
        """Build an instance of ``cls``.

        Registered types come from ``get``; anything else is instantiated
        without arguments and not cached.
        """
        if self.has(cls):
            return self.get(cls)
        return cls()

    def reset(self) -> None:
        """Clear all singletons (useful for testing)."""
        self._singletons.clear()
