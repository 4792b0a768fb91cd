"""Exception types for the Quote Intake tool.

ConfigurationError means the branch catalog itself is broken and is never
caught by the engine. ValidationError and SubmissionError are expected at
runtime and are handled by whoever drives the session (API or dashboard).
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """A branch or field definition is malformed, or no branch can be selected."""


class ValidationError(Exception):
    """One or more visible fields failed validation on submit."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"{len(self.errors)} field(s) failed validation")


class SubmissionError(Exception):
    """The request-creation endpoint rejected the payload or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class InvalidTransition(RuntimeError):
    """A session operation was attempted in a state that does not allow it."""
