"""Emitter configuration.

Holds the defaults used when string listener references are resolved.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_NAMESPACE = "app.listeners"
DEFAULT_METHOD = "handle"


@dataclass
class EmitterConfig:
    """Configuration for an ``Emitter``.

    Attributes:
        namespace: Dotted module prefix string references are resolved against
        default_method: Method called on a listener class when the reference
            names no method
    """

    namespace: str = DEFAULT_NAMESPACE
    default_method: str = DEFAULT_METHOD

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EmitterConfig:
        """Load configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            EmitterConfig instance
        """
        env = os.environ if environ is None else environ
        return cls(
            namespace=env.get("HERALD_LISTENERS_NAMESPACE", DEFAULT_NAMESPACE).strip() or DEFAULT_NAMESPACE,
            default_method=env.get("HERALD_DEFAULT_METHOD", DEFAULT_METHOD).strip() or DEFAULT_METHOD,
        )
