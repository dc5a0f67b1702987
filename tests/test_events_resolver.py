"""Tests for string reference resolution."""
import pytest

from herald.container import Container
from herald.errors import ResolutionError
from herald.events.resolver import ContainerResolver, ReferenceResolver, qualify


class TestQualify:
    """Joining references to namespaces."""

    def test_relative_reference(self):
        assert qualify("app.listeners", "SendWelcomeEmail") == "app.listeners.SendWelcomeEmail"

    def test_slash_namespace(self):
        assert qualify("App/Listeners", "User.on_created") == "App.Listeners.User.on_created"

    def test_absolute_reference_ignores_namespace(self):
        assert qualify("app.listeners", "/listeners_app.H") == "listeners_app.H"

    def test_slash_separated_relative_reference(self):
        assert qualify("app.listeners", "admin/UserListener") == "app.listeners.admin.UserListener"

    def test_empty_namespace(self):
        assert qualify("", "listeners_app.H") == "listeners_app.H"


class TestContainerResolver:
    """ContainerResolver lookups."""

    @pytest.fixture
    def resolver(self):
        return ContainerResolver()

    def test_implements_protocol(self, resolver):
        assert isinstance(resolver, ReferenceResolver)

    def test_class_reference_uses_default_method(self, resolver, calls):
        handler = resolver.resolve_named_event_handler("listeners_app", "user:created", "SendWelcomeEmail")
        handler({"id": 1})
        assert calls == [("SendWelcomeEmail", {"id": 1})]

    def test_class_method_reference(self, resolver, calls):
        handler = resolver.resolve_named_event_handler("listeners_app", "user:deleted", "user.UserListener.on_deleted")
        handler({"id": 2})
        assert calls == [("UserListener.on_deleted", {"id": 2})]

    def test_slash_separated_reference_resolves(self, resolver, calls):
        handler = resolver.resolve_named_event_handler("listeners_app", "user:deleted", "user/UserListener.on_deleted")
        handler({"id": 4})
        assert calls == [("UserListener.on_deleted", {"id": 4})]

    def test_function_reference(self, resolver, calls):
        handler = resolver.resolve_named_event_handler("listeners_app", "ping", "notify")
        handler("x")
        assert calls == [("notify", "x")]

    def test_any_handler(self, resolver, calls):
        handler = resolver.resolve_named_any_handler("listeners_app", "AuditLog")
        handler("ping", 1)
        assert calls == [("AuditLog", "ping", 1)]

    def test_custom_default_method(self, calls):
        resolver = ContainerResolver(default_method="on_deleted")
        handler = resolver.resolve_named_event_handler("listeners_app.user", "ping", "UserListener")
        handler(3)
        assert calls == [("UserListener.on_deleted", 3)]

    def test_each_resolution_builds_new_instance(self, resolver):
        first = resolver.resolve_named_event_handler("listeners_app", "ping", "H")
        second = resolver.resolve_named_event_handler("listeners_app", "ping", "H")
        assert first.__self__ is not second.__self__

    def test_container_builds_listener(self):
        recorder = []
        container = Container()
        from listeners_app import SendWelcomeEmail

        container.register(SendWelcomeEmail, lambda: SendWelcomeEmail(recorder))
        resolver = ContainerResolver(container)

        handler = resolver.resolve_named_event_handler("listeners_app", "user:created", "SendWelcomeEmail")
        handler({"id": 7})

        assert recorder == [("SendWelcomeEmail", {"id": 7})]

    @pytest.mark.parametrize(
        "reference",
        [
            "DoesNotExist",
            "SendWelcomeEmail.missing_method",
            "NoHandle",
            "user",
            "user.UserListener.on_created.extra",
            "nosuchmodule.Listener",
        ],
    )
    def test_unresolvable_references(self, resolver, reference):
        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve_named_event_handler("listeners_app", "ping", reference)
        assert exc_info.value.reference == reference
        assert exc_info.value.namespace == "listeners_app"

    def test_missing_namespace(self, resolver):
        with pytest.raises(ResolutionError):
            resolver.resolve_named_event_handler("app.listeners", "ping", "SendWelcomeEmail")

    def test_resolution_error_is_lookup_error(self, resolver):
        with pytest.raises(LookupError):
            resolver.resolve_named_any_handler("listeners_app", "Nope")
