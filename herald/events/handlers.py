"""
Handler references.

A handler is either a callable (``Direct``) or a string naming a
listener to be resolved through the container (``Named``). The variant is
decided once, where a handler enters the public API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class Direct:
    """A callable passed straight to the transport."""

    handler: Callable[..., Any]


@dataclass(frozen=True)
class Named:
    """A string reference resolved against the listeners namespace."""

    reference: str


HandlerRef = Union[Direct, Named]

# What the public API accepts
Handler = Union[Callable[..., Any], str]


def as_handler_ref(handler: Any) -> HandlerRef:
    """Wrap ``handler`` in its ``HandlerRef`` variant.

    Raises:
        TypeError: If ``handler`` is neither a string nor callable
        ValueError: If ``handler`` is an empty string
    """
    if isinstance(handler, (Direct, Named)):
        return handler
    if isinstance(handler, str):
        if not handler.strip():
            raise ValueError("listener reference is required")
        return Named(handler)
    if callable(handler):
        return Direct(handler)
    raise TypeError(f"handler must be a callable or a string reference, got {type(handler).__name__}")
