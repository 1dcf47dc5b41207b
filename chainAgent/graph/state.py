"""Shared state definition for the chain execution graph."""

from __future__ import annotations

import operator
from typing import Annotated, List, Optional, TypedDict

from chainAgent.capabilities.schema import CapabilityDescriptor
from chainAgent.invocation.interfaces import InvocationOutcome


class ChainState(TypedDict, total=False):
    """Per-request state of one chain execution.

    Every request builds a fresh state, so concurrent chains never share
    anything mutable. ``outcomes`` and ``forwarded`` use list concatenation as
    their reducer: nodes return only the new items and the lists only grow.
    """

    # ========== Input ==========
    base_prompt: str                          # Refined (automatic) or raw (explicit) prompt
    capabilities: List[CapabilityDescriptor]  # Ordered chain to execute

    # ========== Progress ==========
    step: int                                          # Index of the next capability to invoke
    current_outcome: Optional[InvocationOutcome]       # Set by invoke, consumed by record
    outcomes: Annotated[List[InvocationOutcome], operator.add]   # Every outcome, in execution order
    forwarded: Annotated[List[InvocationOutcome], operator.add]  # Successful outcomes only

    # ========== Termination ==========
    cancelled: bool      # Upstream cancellation observed at a step boundary
    final_output: str    # Synthesized report text
