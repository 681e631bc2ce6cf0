"""
puppycare.errors
================
Error kinds surfaced by the engine. Components raise these; the
PetEngine command layer catches them and hands them back to the host
inside a CommandResult.
"""


class PuppyCareError(Exception):
    """Base class for all engine errors."""


class InvalidCommand(PuppyCareError):
    """Unknown command, or a command not allowed in the current state."""

    def __init__(self, command: str, reason: str = "unknown_command"):
        self.command = command
        self.reason = reason
        super().__init__(f"{command}: {reason}")


class EmptyResponseSet(PuppyCareError):
    """A conversation choice carries no responses."""

    def __init__(self, prompt: str):
        self.prompt = prompt
        super().__init__(f"no responses for prompt {prompt!r}")


class CorruptedProfile(PuppyCareError):
    """A persisted record failed validation on load."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"corrupted record: {reason}")
