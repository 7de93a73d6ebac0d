"""Fatal error types surfaced to callers.

Per-attempt generation problems are not exceptions; the generator absorbs
them and reports exhaustion as a :class:`~brollgen.generator.GenerationFailure`.
"""
from __future__ import annotations


class BrollError(Exception):
    """Base class. ``status_code`` is the HTTP status the API renders it with."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ConfigurationError(BrollError):
    """A required credential or setting is missing. Not retried."""

    status_code = 503


class InvalidInputError(BrollError):
    """A required request field is missing or blank. Not retried."""

    status_code = 400


class InvalidScriptError(InvalidInputError):
    """The script is missing, blank, or could not be read from the upload."""


class UnauthenticatedError(BrollError):
    status_code = 401


class ProjectNotFoundError(BrollError):
    status_code = 404
