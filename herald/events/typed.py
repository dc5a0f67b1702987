"""
Typed emitter views.

``Emitter.for_event("user:created", UserCreated)`` returns a
``TypedEmitter[UserCreated]``: the same emitter with the event name fixed,
so type checkers see the payload type of that one event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, Union

if TYPE_CHECKING:
    from herald.events.emitter import Emitter

T = TypeVar("T")

TypedHandler = Union[Callable[[T], Any], str]


class TypedEmitter(Generic[T]):
    """Per-event view of an ``Emitter``. Holds no listeners of its own."""

    def __init__(self, emitter: Emitter, event: str, payload_type: type[T] | None = None):
        self._emitter = emitter
        self._event = event
        self._payload_type = payload_type

    @property
    def event(self) -> str:
        return self._event

    @property
    def payload_type(self) -> type[T] | None:
        return self._payload_type

    def on(self, handler: TypedHandler[T]) -> TypedEmitter[T]:
        self._emitter.on(self._event, handler)
        return self

    def once(self, handler: TypedHandler[T]) -> TypedEmitter[T]:
        self._emitter.once(self._event, handler)
        return self

    def off(self, handler: TypedHandler[T]) -> None:
        self._emitter.off(self._event, handler)

    async def emit(self, payload: T) -> None:
        await self._emitter.emit(self._event, payload)

    def clear_listener(self, handler: TypedHandler[T]) -> None:
        self._emitter.clear_listener(self._event, handler)

    def clear_listeners(self) -> None:
        self._emitter.clear_listeners(self._event)

    def listener_count(self) -> int:
        return self._emitter.listener_count(self._event)

    def has_listeners(self) -> bool:
        return self._emitter.has_listeners(self._event)

    def __repr__(self) -> str:
        type_name = getattr(self._payload_type, "__name__", "Any")
        return f"TypedEmitter(event={self._event!r}, payload_type={type_name})"
