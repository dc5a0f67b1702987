"""
Event emitter for application listeners.

Listeners are registered either as callables or as string references
(``"SendWelcomeEmail"``, ``"user.UserListener.on_created"``) resolved
through the container against the listeners namespace. String references
are resolved at registration time and remembered, so ``off`` with the
same string removes the listener that was registered.

Usage:
    emitter = Emitter()
    emitter.on("user:created", "SendWelcomeEmail")
    emitter.on_any(audit_log)
    await emitter.emit("user:created", {"id": 1})
    emitter.off("user:created", "SendWelcomeEmail")
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

from herald.config import EmitterConfig
from herald.container import Container
from herald.events.handlers import Direct, Handler, Named, as_handler_ref
from herald.events.registry import ResolutionRegistry
from herald.events.resolver import ContainerResolver
from herald.events.transport import Transport
from herald.events.typed import TypedEmitter
from herald.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Emitter:
    """
    Async event emitter with container-resolved listeners.

    ``on``, ``once``, ``on_any`` and ``namespace`` return the emitter so
    calls can be chained.
    """

    def __init__(
        self,
        config: EmitterConfig | None = None,
        *,
        container: Container | None = None,
        transport: Transport | None = None,
        registry: ResolutionRegistry | None = None,
    ):
        """
        Initialize the emitter.

        Args:
            config: Namespace and default listener method
            container: Container listener classes are built from
            transport: Emission engine (a fresh ``Transport`` by default)
            registry: Resolution registry; overrides ``config`` and ``container``
        """
        config = config or EmitterConfig()
        self.transport = transport or Transport()
        if registry is None:
            resolver = ContainerResolver(container, default_method=config.default_method)
            registry = ResolutionRegistry(resolver, namespace=config.namespace)
        self._registry = registry

    @property
    def registry(self) -> ResolutionRegistry:
        return self._registry

    def for_event(self, event: str, payload_type: type[T] | None = None) -> TypedEmitter[T]:
        """
        Return a view of this emitter bound to ``event``.

        Args:
            event: Event name every call on the view uses
            payload_type: Payload type, for type checkers and introspection
        """
        return TypedEmitter(self, event, payload_type)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def on(self, event: str, handler: Handler) -> Emitter:
        """Listen to every emission of ``event``.

        Raises:
            ResolutionError: If ``handler`` is a reference that cannot be resolved
        """
        ref = as_handler_ref(handler)
        if isinstance(ref, Named):
            listener = self._registry.resolve_event_handler(event, ref.reference)
        else:
            listener = ref.handler
        self.transport.on(event, listener)
        return self

    def once(self, event: str, handler: Handler) -> Emitter:
        """Listen to the next emission of ``event`` only.

        A string reference is resolved now; its registry entry is dropped
        once the listener has run, whether or not it raised.
        """
        ref = as_handler_ref(handler)
        if isinstance(ref, Named):
            listener = self._registry.resolve_event_handler(event, ref.reference)
            self.transport.once(event, self._one_shot(event, ref.reference, listener), key=listener)
        else:
            self.transport.once(event, ref.handler)
        return self

    def on_any(self, handler: Handler) -> Emitter:
        """Listen to every event. Listeners are called with ``(event, payload)``."""
        ref = as_handler_ref(handler)
        if isinstance(ref, Named):
            listener = self._registry.resolve_any_handler(ref.reference)
        else:
            listener = ref.handler
        self.transport.on_any(listener)
        return self

    def _one_shot(self, event: str, reference: str, listener: Callable[[Any], Any]) -> Callable[[Any], Any]:
        registry = self._registry

        @functools.wraps(listener)
        async def fire(payload: Any) -> None:
            try:
                result = listener(payload)
                if inspect.isawaitable(result):
                    await result
            finally:
                # A later on()/once() may have replaced the entry
                if registry.get_event_handler(event, reference) is listener:
                    registry.remove_event_handler(event, reference)

        return fire

    # -------------------------------------------------------------------------
    # Emission
    # -------------------------------------------------------------------------

    async def emit(self, event: str, payload: Any = None) -> None:
        """Emit ``event``; resolves once every current listener has completed."""
        await self.transport.emit(event, payload)

    # -------------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------------

    def off(self, event: str, handler: Handler) -> None:
        """Remove a listener. Unknown listeners and references are ignored."""
        ref = as_handler_ref(handler)
        if isinstance(ref, Direct):
            self.transport.off(event, ref.handler)
            return

        listener = self._registry.remove_event_handler(event, ref.reference)
        if listener is not None:
            self.transport.off(event, listener)

    def off_any(self, handler: Handler) -> None:
        """Remove a catch-all listener. Unknown listeners and references are ignored."""
        ref = as_handler_ref(handler)
        if isinstance(ref, Direct):
            self.transport.off_any(ref.handler)
            return

        listener = self._registry.remove_any_handler(ref.reference)
        if listener is not None:
            self.transport.off_any(listener)

    def clear_listener(self, event: str, handler: Handler) -> None:
        """Alias of ``off``."""
        self.off(event, handler)

    def clear_listeners(self, event: str | None = None) -> None:
        """
        Remove every listener of ``event``, or of every event.

        Catch-all listeners are left in place; use ``off_any`` or
        ``clear_all_listeners`` for those.
        """
        self.transport.clear_listeners(event)

    def clear_all_listeners(self) -> None:
        """Remove every event listener and every catch-all listener."""
        self.transport.clear_listeners(include_any=True)

    # -------------------------------------------------------------------------
    # Introspection & configuration
    # -------------------------------------------------------------------------

    def listener_count(self, event: str | None = None) -> int:
        """Count listeners of ``event``, or of every event (catch-all excluded)."""
        return self.transport.listener_count(event)

    def has_listeners(self, event: str | None = None) -> bool:
        return self.listener_count(event) > 0

    def namespace(self, namespace: str) -> Emitter:
        """Resolve future string references against ``namespace``.

        It is ``app.listeners`` by default.
        """
        self._registry.set_namespace(namespace)
        return self


# =============================================================================
# Global Instance
# =============================================================================

_emitter: Emitter | None = None


def get_emitter() -> Emitter:
    """Get or create the process-wide emitter."""
    global _emitter
    if _emitter is None:
        _emitter = Emitter()
    return _emitter


def reset_emitter() -> None:
    """Drop the process-wide emitter (for testing)."""
    global _emitter
    _emitter = None
