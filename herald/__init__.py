"""
herald - async event emitter with container-resolved listeners.

This package contains:
- Emitter (on/once/on_any/off/emit over a single event space)
- Typed per-event views
- Resolution of string listener references through a DI container
"""

from herald.config import EmitterConfig
from herald.container import Container
from herald.errors import HeraldError, ResolutionError
from herald.events import Emitter, TypedEmitter, get_emitter, reset_emitter

__version__ = "0.1.0"

__all__ = [
    "Container",
    "Emitter",
    "EmitterConfig",
    "HeraldError",
    "ResolutionError",
    "TypedEmitter",
    "get_emitter",
    "reset_emitter",
]
