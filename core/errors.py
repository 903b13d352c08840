# =============================================================================
# core/errors.py  -  Error taxonomy for the tool service
# =============================================================================
#
# Two families of failure exist:
#
#   Registry-level (raised BEFORE any handler runs):
#     - DuplicateIdentifier  -> two tools share an id (fatal at startup)
#     - UnknownTool          -> caller asked for an id nobody registered
#     - InvalidInput         -> input failed the tool's input schema
#
#   Handler-level (raised while a handler is talking to a collaborator):
#     - TransportError       -> connection / DNS / timeout
#     - DecodeError          -> collaborator answered with something that
#                               is not JSON
#     Both subclass ExternalCallFailed, so callers can catch either the
#     family or the precise cause.
#
# A partially filled collaborator response is NOT an error: handlers degrade
# the missing fields to defaults (see core/external.py -> decode_partial).
# =============================================================================

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.schema import ValidationFailure


class ToolServiceError(Exception):
    """Base class for every error raised by the tool service."""


class ConfigError(ToolServiceError):
    """A required setting is missing or malformed."""


class DuplicateIdentifier(ToolServiceError):
    """A tool with the same identifier is already registered."""

    def __init__(self, identifier: str):
        super().__init__(f"Tool '{identifier}' is already registered.")
        self.identifier = identifier


class UnknownTool(ToolServiceError):
    """No tool is registered under the requested identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"Tool '{identifier}' is not registered.")
        self.identifier = identifier


class InvalidInput(ToolServiceError):
    """Input did not satisfy the tool's input schema.

    Carries every field-level failure so the caller can fix all of them in
    one round-trip instead of discovering them one at a time.
    """

    def __init__(self, identifier: str, failures: tuple[ValidationFailure, ...]):
        details = "; ".join(str(failure) for failure in failures)
        super().__init__(f"Invalid input for tool '{identifier}': {details}")
        self.identifier = identifier
        self.failures = failures

    @property
    def fields(self) -> list[str]:
        """Paths of every failing field, in report order."""
        return [failure.path for failure in self.failures]


class ExternalCallFailed(ToolServiceError):
    """A call to an external collaborator could not produce a JSON body."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"External call to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class TransportError(ExternalCallFailed):
    """Connection, DNS or timeout failure."""


class DecodeError(ExternalCallFailed):
    """The response body was not valid JSON."""


class IncompleteEnvelope(ToolServiceError):
    """A result envelope was built without display text."""
