"""Error taxonomy for chainAgent.

Only ``NotFoundError`` and ``ChainCancelledError`` ever reach callers of the
orchestrator. ``CollaboratorError`` is converted into a failed outcome inside
the chain, and ``ValidationError`` is raised at registration time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from chainAgent.orchestrator import ChainReport


class ChainAgentError(Exception):
    """Base exception for chainAgent errors."""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class ValidationError(ChainAgentError):
    """Capability descriptor rejected at registration (empty or duplicate name)."""
    pass


class NotFoundError(ChainAgentError):
    """A capability named in an explicit chain is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Capability not found: {name!r}")
        self.name = name


class CollaboratorError(ChainAgentError):
    """The invocation collaborator could not attempt the call at all."""

    def __init__(self, capability_name: str, message: str):
        super().__init__(f"Could not invoke capability {capability_name!r}: {message}")
        self.capability_name = capability_name


class ChainCancelledError(ChainAgentError):
    """Upstream cancellation observed between chain steps.

    Attributes:
        report: Partial report holding the outcomes completed before cancellation
    """

    def __init__(self, report: Optional["ChainReport"] = None):
        completed = len(report.outcomes) if report is not None else 0
        super().__init__(
            f"Chain cancelled after {completed} step(s)",
            user_message="The request was cancelled before the chain finished.",
        )
        self.report = report


__all__ = [
    "ChainAgentError",
    "ValidationError",
    "NotFoundError",
    "CollaboratorError",
    "ChainCancelledError",
]
