"""Invocation boundary between the chain executor and capability runners."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Protocol

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvocationOutcome(BaseModel):
    """Result of invoking one capability.

    A successful outcome carries ``output``; a failed one carries ``error``
    and a non-zero ``status_code``.
    """

    capability_name: str
    success: bool
    output: Optional[str] = None
    error: Optional[str] = None
    status_code: int = 0
    duration_ms: int = 0
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def failed(cls, capability_name: str, error: str, status_code: int = 1, duration_ms: int = 0) -> "InvocationOutcome":
        return cls(
            capability_name=capability_name,
            success=False,
            error=error,
            status_code=status_code or 1,
            duration_ms=duration_ms,
        )


class CapabilityInvoker(Protocol):
    """Runs a capability with a prompt.

    Returning an outcome with ``success=False`` means the capability itself
    reported failure. Raising (typically ``CollaboratorError``) means the
    invocation could not be attempted at all.
    """

    async def invoke(self, name: str, prompt: str) -> InvocationOutcome:
        ...
