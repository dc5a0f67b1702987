"""Listener classes the tests resolve by string reference.

Listeners append ``(name, payload)`` to ``CALLS`` unless the container
hands them another recorder.
"""

CALLS: list[tuple] = []


class SendWelcomeEmail:
    def __init__(self, recorder: list | None = None):
        self.recorder = CALLS if recorder is None else recorder

    def handle(self, payload):
        self.recorder.append(("SendWelcomeEmail", payload))


class H:
    def handle(self, payload):
        CALLS.append(("H", payload))


class Failing:
    def handle(self, payload):
        raise RuntimeError(f"listener failed for {payload!r}")


class AuditLog:
    def handle(self, event, payload):
        CALLS.append(("AuditLog", event, payload))


class NoHandle:
    handle = "not callable"


def notify(payload):
    CALLS.append(("notify", payload))
