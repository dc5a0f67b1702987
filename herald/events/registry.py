"""
Resolution registry.

Resolves string listener references when they are registered and keeps the
resolved callable, so the same reference can later be used to remove the
exact listener handed to the transport. The transport stays the single
source of truth for which listeners are active; this registry only
remembers which callable each reference produced.
"""

from __future__ import annotations

from typing import Any, Callable

from herald.config import DEFAULT_NAMESPACE
from herald.events.resolver import ContainerResolver, ReferenceResolver
from herald.logging_config import get_logger

logger = get_logger(__name__)


class ResolutionRegistry:
    """
    Maps ``(event, reference)`` pairs and catch-all references to resolved callables.

    Every ``resolve_*`` call resolves afresh and overwrites the previous
    entry for the same key. Namespace changes only apply to later
    resolutions.
    """

    def __init__(
        self,
        resolver: ReferenceResolver | None = None,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        """
        Initialize the registry.

        Args:
            resolver: Reference resolver (defaults to a ``ContainerResolver``)
            namespace: Namespace references are resolved against
        """
        self.resolver = resolver or ContainerResolver()
        self._namespace = namespace
        self._event_handlers: dict[tuple[str, str], Callable[[Any], Any]] = {}
        self._any_handlers: dict[str, Callable[[str, Any], Any]] = {}

    @property
    def namespace(self) -> str:
        return self._namespace

    def set_namespace(self, namespace: str) -> None:
        """Use ``namespace`` for all future resolutions."""
        self._namespace = namespace
        logger.debug("listeners_namespace_set", namespace=namespace)

    # -------------------------------------------------------------------------
    # Event handlers
    # -------------------------------------------------------------------------

    def resolve_event_handler(self, event: str, reference: str) -> Callable[[Any], Any]:
        """
        Resolve ``reference`` for ``event`` and remember the result.

        Raises:
            ResolutionError: Propagated from the resolver; nothing is stored
        """
        handler = self.resolver.resolve_named_event_handler(self._namespace, event, reference)
        self._event_handlers[(event, reference)] = handler
        logger.debug("listener_resolved", event_name=event, reference=reference, namespace=self._namespace)
        return handler

    def remove_event_handler(self, event: str, reference: str) -> Callable[[Any], Any] | None:
        """Forget the entry for ``(event, reference)``.

        Returns:
            The callable previously resolved, or None if there was none
        """
        handler = self._event_handlers.pop((event, reference), None)
        if handler is not None:
            logger.debug("listener_unresolved", event_name=event, reference=reference)
        return handler

    def get_event_handler(self, event: str, reference: str) -> Callable[[Any], Any] | None:
        return self._event_handlers.get((event, reference))

    def has_event_handler(self, event: str, reference: str) -> bool:
        return (event, reference) in self._event_handlers

    # -------------------------------------------------------------------------
    # Catch-all handlers
    # -------------------------------------------------------------------------

    def resolve_any_handler(self, reference: str) -> Callable[[str, Any], Any]:
        """
        Resolve a catch-all ``reference`` and remember the result.

        Raises:
            ResolutionError: Propagated from the resolver; nothing is stored
        """
        handler = self.resolver.resolve_named_any_handler(self._namespace, reference)
        self._any_handlers[reference] = handler
        logger.debug("any_listener_resolved", reference=reference, namespace=self._namespace)
        return handler

    def remove_any_handler(self, reference: str) -> Callable[[str, Any], Any] | None:
        """Forget the catch-all entry for ``reference``, returning it if present."""
        handler = self._any_handlers.pop(reference, None)
        if handler is not None:
            logger.debug("any_listener_unresolved", reference=reference)
        return handler

    def has_any_handler(self, reference: str) -> bool:
        return reference in self._any_handlers
