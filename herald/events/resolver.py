"""
Listener reference resolution.

Turns string references such as ``"SendWelcomeEmail"`` or
``"user.UserListener.on_created"`` into callables. References are dotted
paths relative to a namespace (``app.listeners`` by default); a leading
``/`` makes the path absolute. A path ending at a class resolves to
``default_method`` of an instance built by the container, a path ending
at ``Class.method`` resolves to that method, and a path ending at a
plain function resolves to the function itself.
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any, Callable, Protocol, runtime_checkable

from herald.config import DEFAULT_METHOD
from herald.container import Container
from herald.errors import ResolutionError
from herald.logging_config import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ReferenceResolver(Protocol):
    """
    Turns a string reference into a listener callable.

    Implementations raise ``ResolutionError`` when the reference cannot be
    resolved.
    """

    def resolve_named_event_handler(self, namespace: str, event: str, reference: str) -> Callable[[Any], Any]:
        ...

    def resolve_named_any_handler(self, namespace: str, reference: str) -> Callable[[str, Any], Any]:
        ...


def qualify(namespace: str, reference: str) -> str:
    """Join ``reference`` to ``namespace`` as a dotted import path."""
    reference = reference.strip()
    if reference.startswith("/"):
        return reference.lstrip("/").replace("/", ".")
    reference = reference.replace("/", ".")
    prefix = namespace.replace("/", ".").strip(".")
    return f"{prefix}.{reference}" if prefix else reference


class ContainerResolver:
    """Resolves references by importing them and building classes through a container."""

    def __init__(self, container: Container | None = None, default_method: str = DEFAULT_METHOD):
        self.container = container or Container()
        self.default_method = default_method

    def resolve_named_event_handler(self, namespace: str, event: str, reference: str) -> Callable[[Any], Any]:
        handler = self._resolve(namespace, reference)
        logger.debug("event_handler_resolved", event_name=event, reference=reference, namespace=namespace)
        return handler

    def resolve_named_any_handler(self, namespace: str, reference: str) -> Callable[[str, Any], Any]:
        handler = self._resolve(namespace, reference)
        logger.debug("any_handler_resolved", reference=reference, namespace=namespace)
        return handler

    def _resolve(self, namespace: str, reference: str) -> Callable[..., Any]:
        path = qualify(namespace, reference)
        parts = [p for p in path.split(".") if p]
        if not parts:
            raise ResolutionError(namespace, reference)

        module, rest = self._import_longest_prefix(namespace, reference, parts)

        target: Any = module
        while rest and not inspect.isclass(target):
            name, rest = rest[0], rest[1:]
            try:
                target = getattr(target, name)
            except AttributeError as e:
                raise ResolutionError(
                    namespace, reference, f"'{path}' not found: no attribute '{name}'"
                ) from e

        if inspect.isclass(target):
            if len(rest) > 1:
                raise ResolutionError(namespace, reference, f"'{path}' is not a method reference")
            method = rest[0] if rest else self.default_method
            instance = self.container.make(target)
            handler = getattr(instance, method, None)
            if not callable(handler):
                raise ResolutionError(
                    namespace, reference, f"{target.__name__} has no callable method '{method}'"
                )
            return handler

        if inspect.ismodule(target) or not callable(target):
            raise ResolutionError(namespace, reference, f"'{path}' is not callable")
        return target

    @staticmethod
    def _import_longest_prefix(namespace: str, reference: str, parts: list[str]) -> tuple[Any, list[str]]:
        for i in range(len(parts), 0, -1):
            module_name = ".".join(parts[:i])
            try:
                return importlib.import_module(module_name), parts[i:]
            except ModuleNotFoundError as e:
                # Only a missing prefix means "try a shorter one"
                if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                    continue
                raise ResolutionError(namespace, reference, f"Failed to import '{module_name}': {e}") from e
            except ImportError as e:
                raise ResolutionError(namespace, reference, f"Failed to import '{module_name}': {e}") from e
        dotted = ".".join(parts)
        raise ResolutionError(namespace, reference, f"No module found for '{dotted}'")
