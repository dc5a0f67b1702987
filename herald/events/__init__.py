"""
Event emitter module.

Async pub/sub with listeners given as callables or as string references
resolved through the dependency injection container.
"""

from herald.events.emitter import Emitter, get_emitter, reset_emitter
from herald.events.handlers import Direct, Handler, HandlerRef, Named, as_handler_ref
from herald.events.registry import ResolutionRegistry
from herald.events.resolver import ContainerResolver, ReferenceResolver
from herald.events.transport import Transport
from herald.events.typed import TypedEmitter

__all__ = [
    "ContainerResolver",
    "Direct",
    "Emitter",
    "Handler",
    "HandlerRef",
    "Named",
    "ReferenceResolver",
    "ResolutionRegistry",
    "Transport",
    "TypedEmitter",
    "as_handler_ref",
    "get_emitter",
    "reset_emitter",
]
