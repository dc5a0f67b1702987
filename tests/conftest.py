"""Pytest configuration and shared fixtures."""
from typing import Any, Callable

import pytest

from herald import Emitter, EmitterConfig
from herald.events import ResolutionRegistry
from herald.errors import ResolutionError

LISTENERS_NAMESPACE = "listeners_app"


class StubResolver:
    """Resolver handing out a fresh recording callable per resolution.

    References starting with ``missing`` fail to resolve.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.resolutions: list[tuple] = []

    def resolve_named_event_handler(self, namespace: str, event: str, reference: str) -> Callable[[Any], Any]:
        if reference.startswith("missing"):
            raise ResolutionError(namespace, reference)

        def handler(payload):
            self.calls.append((namespace, event, reference, payload))

        self.resolutions.append((namespace, event, reference, handler))
        return handler

    def resolve_named_any_handler(self, namespace: str, reference: str) -> Callable[[str, Any], Any]:
        if reference.startswith("missing"):
            raise ResolutionError(namespace, reference)

        def handler(event, payload):
            self.calls.append((namespace, event, reference, payload))

        self.resolutions.append((namespace, None, reference, handler))
        return handler


@pytest.fixture
def calls():
    """Recorder shared by the sample listeners, emptied around each test."""
    from listeners_app import CALLS

    CALLS.clear()
    yield CALLS
    CALLS.clear()


@pytest.fixture
def emitter(calls):
    """Emitter resolving references against the sample listeners package."""
    return Emitter(EmitterConfig(namespace=LISTENERS_NAMESPACE))


@pytest.fixture
def stub_resolver():
    return StubResolver()


@pytest.fixture
def stub_emitter(stub_resolver):
    """Emitter whose string references resolve through ``StubResolver``."""
    return Emitter(registry=ResolutionRegistry(stub_resolver, namespace="stub"))
