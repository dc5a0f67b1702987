"""Exceptions raised by herald."""

from __future__ import annotations


class HeraldError(Exception):
    """Base class for herald errors."""


class ResolutionError(HeraldError, LookupError):
    """Raised when a listener reference cannot be turned into a callable."""

    def __init__(
        self,
        namespace: str,
        reference: str,
        message: str | None = None,
    ):
        self.namespace = namespace
        self.reference = reference
        self.message = message or f"Cannot resolve listener '{reference}' in namespace '{namespace}'"
        super().__init__(self.message)
