"""Tagged results for publish effects.

Each dispatcher returns ``Ok(value)`` or ``Err(kind, detail)`` instead of
raising, so the orchestrator can log an outcome without unwrapping it.

    >>> match trigger_audio(item_id):
    ...     case Ok(version):
    ...         ...
    ...     case Err(kind, detail):
    ...         ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Err kinds shared by dispatchers and the API's status mapping.
NOT_FOUND = "not_found"
NOT_CONFIGURED = "not_configured"
NO_SUBSCRIBERS = "no_subscribers"
SYNTHESIS_FAILED = "synthesis_failed"
UPLOAD_FAILED = "upload_failed"
SEND_FAILED = "send_failed"
WRITE_FAILED = "write_failed"
HTTP_FAILED = "http_failed"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def describe(self) -> str:
        return "ok"


@dataclass(frozen=True, slots=True)
class Err:
    """A recorded, non-fatal failure.

    ``kind`` is a short machine-readable tag ("not_configured",
    "synthesis_failed", ...); ``detail`` is the human-readable message.
    """

    kind: str
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        return f"{self.kind}: {self.detail}" if self.detail else self.kind

    @classmethod
    def from_exception(cls, kind: str, exc: BaseException) -> Err:
        return cls(kind=kind, detail=str(exc) or type(exc).__name__)


DispatchResult = Ok[Any] | Err
