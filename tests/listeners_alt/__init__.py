"""Second listeners namespace, used to check namespace switching."""

from listeners_app import CALLS


class SendWelcomeEmail:
    def handle(self, payload):
        CALLS.append(("alt.SendWelcomeEmail", payload))
