"""Capability invocation boundary and the Copilot CLI invoker."""

from .interfaces import CapabilityInvoker, InvocationOutcome
from .cli_invoker import TIMEOUT_STATUS, CopilotCliInvoker, parse_output

__all__ = [
    "CapabilityInvoker",
    "InvocationOutcome",
    "CopilotCliInvoker",
    "parse_output",
    "TIMEOUT_STATUS",
]
