"""Conditional routing for the chain execution graph."""

from __future__ import annotations

import logging
from typing import Literal

from chainAgent.utils.logging_utils import log_routing_decision

from .state import ChainState

LOGGER = logging.getLogger(__name__)


def start_route(state: ChainState) -> Literal["invoke", "synthesize"]:
    """An empty chain goes straight to synthesis."""
    if state.get("capabilities"):
        decision = "invoke"
        reason = f"{len(state['capabilities'])} capability(ies) scheduled"
    else:
        decision = "synthesize"
        reason = "Empty chain"
    log_routing_decision(LOGGER, "start", decision, reason)
    return decision


def invoke_route(state: ChainState) -> Literal["record", "synthesize"]:
    """After invoke: record the outcome, or stop on cancellation."""
    if state.get("cancelled"):
        decision = "synthesize"
        reason = "Upstream cancellation"
    else:
        decision = "record"
        reason = "Invocation finished"
    log_routing_decision(LOGGER, "invoke", decision, reason)
    return decision


def record_route(state: ChainState) -> Literal["invoke", "synthesize"]:
    """After record: invoke the next capability, or synthesize after the last."""
    step = state.get("step", 0)
    total = len(state.get("capabilities", []))
    if step < total:
        decision = "invoke"
        reason = f"Step {step + 1}/{total}"
    else:
        decision = "synthesize"
        reason = f"All {total} capability(ies) executed"
    log_routing_decision(LOGGER, "record", decision, reason)
    return decision
