"""
Async emission engine.

Stores listeners per event name plus a catch-all channel and delivers
payloads to them. It knows nothing about string references: it only
ever sees concrete callables.

Provides:
- Persistent and one-shot listeners
- Catch-all listeners receiving ``(event, payload)``
- Awaitable one-shot delivery via ``wait_for``
- Sync and async listener support
"""

from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from herald.logging_config import get_logger

logger = get_logger(__name__)


# Listener types: can be sync or async functions
Listener = Callable[[Any], Any] | Callable[[Any], Awaitable[Any]]
AnyListener = Callable[[str, Any], Any] | Callable[[str, Any], Awaitable[Any]]


def _assert_event_name(event: Any) -> None:
    if not isinstance(event, str):
        raise TypeError(f"event name must be a string, got {type(event).__name__}")


def _assert_listener(listener: Any) -> None:
    if not callable(listener):
        raise TypeError(f"listener must be callable, got {type(listener).__name__}")


def _listener_name(listener: Callable[..., Any]) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


@dataclass(eq=False)
class Subscription:
    """A single listener registration."""

    listener: Callable[..., Any]
    once: bool = False
    key: Callable[..., Any] | None = None

    def matches(self, listener: Callable[..., Any]) -> bool:
        """Whether ``listener`` is the registered callable or its removal key."""
        if self.listener == listener:
            return True
        return self.key is not None and self.key == listener


class Transport:
    """
    In-process async emitter.

    Listeners for one event are called in registration order and awaited
    together; catch-all listeners run alongside them. Registering the same
    callable twice registers it twice.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = defaultdict(list)
        self._any_listeners: list[AnyListener] = []

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def on(self, event: str, listener: Listener, *, key: Callable[..., Any] | None = None) -> None:
        """Register ``listener`` for every emission of ``event``.

        ``off(event, key)`` also removes the registration when a key is given.
        """
        _assert_event_name(event)
        _assert_listener(listener)
        self._subscriptions[event].append(Subscription(listener, key=key))
        logger.debug("listener_added", event_name=event, listener=_listener_name(listener))

    def once(self, event: str, listener: Listener, *, key: Callable[..., Any] | None = None) -> None:
        """Register ``listener`` for the next emission of ``event`` only.

        The registration is removed before the listener is called.
        """
        _assert_event_name(event)
        _assert_listener(listener)
        self._subscriptions[event].append(Subscription(listener, once=True, key=key))
        logger.debug("listener_added", event_name=event, listener=_listener_name(listener), once=True)

    def wait_for(self, event: str) -> asyncio.Future:
        """Return a future resolved with the payload of the next ``event``.

        Must be called with a running event loop.
        """
        _assert_event_name(event)
        future = asyncio.get_running_loop().create_future()

        def resolve(payload: Any) -> None:
            if not future.done():
                future.set_result(payload)

        self.once(event, resolve)
        return future

    def on_any(self, listener: AnyListener) -> None:
        """Register a catch-all listener called as ``listener(event, payload)``."""
        _assert_listener(listener)
        self._any_listeners.append(listener)
        logger.debug("any_listener_added", listener=_listener_name(listener))

    def off(self, event: str, listener: Listener) -> None:
        """Remove the first registration of ``listener`` for ``event``.

        Unknown listeners are ignored.
        """
        _assert_event_name(event)
        subs = self._subscriptions.get(event)
        if not subs:
            return
        for sub in subs:
            if sub.matches(listener):
                subs.remove(sub)
                logger.debug("listener_removed", event_name=event, listener=_listener_name(listener))
                break
        if not subs:
            del self._subscriptions[event]

    def off_any(self, listener: AnyListener) -> None:
        """Remove the first registration of a catch-all listener."""
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)
            logger.debug("any_listener_removed", listener=_listener_name(listener))

    def clear_listeners(self, event: str | None = None, *, include_any: bool = False) -> None:
        """
        Remove listeners.

        Args:
            event: Only clear this event, or None for every event
            include_any: Also drop catch-all listeners
        """
        if event is not None:
            _assert_event_name(event)
            self._subscriptions.pop(event, None)
        else:
            self._subscriptions.clear()
        if include_any:
            self._any_listeners.clear()
        logger.debug("listeners_cleared", event_name=event, include_any=include_any)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def listener_count(self, event: str | None = None) -> int:
        """Count event listeners for ``event``, or for every event.

        Catch-all listeners are not included.
        """
        if event is not None:
            _assert_event_name(event)
            return len(self._subscriptions.get(event, ()))
        return sum(len(subs) for subs in self._subscriptions.values())

    def any_listener_count(self) -> int:
        """Count catch-all listeners."""
        return len(self._any_listeners)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def emit(self, event: str, payload: Any = None) -> None:
        """
        Deliver ``payload`` to the listeners of ``event`` and to catch-all listeners.

        Resolves once every listener has completed. The first listener
        exception propagates to the caller.
        """
        _assert_event_name(event)

        subs = list(self._subscriptions.get(event, ()))
        for sub in subs:
            if sub.once:
                self._discard(event, sub)
        any_listeners = list(self._any_listeners)

        logger.debug(
            "event_emitting",
            event_name=event,
            listeners=len(subs),
            any_listeners=len(any_listeners),
        )

        calls = [self._call(sub.listener, payload) for sub in subs]
        calls.extend(self._call(listener, event, payload) for listener in any_listeners)
        if calls:
            results = await asyncio.gather(*calls, return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException):
                    raise result

        logger.debug("event_emitted", event_name=event)

    def _discard(self, event: str, sub: Subscription) -> None:
        subs = self._subscriptions.get(event)
        if subs and sub in subs:
            subs.remove(sub)
            if not subs:
                del self._subscriptions[event]

    @staticmethod
    async def _call(listener: Callable[..., Any], *args: Any) -> Any:
        result = listener(*args)
        if inspect.isawaitable(result):
            return await result
        return result
