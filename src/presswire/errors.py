"""Exception taxonomy for the publish fan-out.

Only ``ContentNotFoundError`` and ``PrimaryTransitionError`` escape a
publish call.  Everything else is caught at a dispatcher boundary and
recorded on the dispatcher's own entity (audio version, campaign,
share-log row).
"""

from __future__ import annotations


class PresswireError(Exception):
    """Base error for presswire."""


class ContentNotFoundError(PresswireError, KeyError):
    """Raised when a content item, campaign or record id is unknown."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")

    def __str__(self) -> str:
        return f"{self.kind} not found: {self.identifier}"


class PrimaryTransitionError(PresswireError):
    """The authoritative status transition failed; the publish call fails."""


class NotConfiguredError(PresswireError):
    """An integration is disabled or missing its settings."""


class NoSubscribersError(PresswireError):
    """A newsletter campaign has no active subscribers to send to."""


class SynthesisError(PresswireError):
    """The speech synthesis provider rejected or failed a request."""


class StorageError(PresswireError):
    """Writing an object to audio storage failed."""


class HttpError(PresswireError):
    """A network-level failure talking to an outbound endpoint."""


class PlatformPostError(PresswireError):
    """A social platform adapter failed to post."""
