"""Utilities for chainAgent."""

from .errors import (
    ChainAgentError,
    ChainCancelledError,
    CollaboratorError,
    NotFoundError,
    ValidationError,
)
from .logging_utils import (
    log_capability_call,
    log_capability_result,
    log_error,
    log_routing_decision,
    resolve_level,
    setup_logging,
)

__all__ = [
    "ChainAgentError",
    "ChainCancelledError",
    "CollaboratorError",
    "NotFoundError",
    "ValidationError",
    "setup_logging",
    "resolve_level",
    "log_routing_decision",
    "log_capability_call",
    "log_capability_result",
    "log_error",
]
