"""Synthesize node - final report text."""

from __future__ import annotations

from chainAgent.graph.prompts import synthesize_output
from chainAgent.graph.state import ChainState


async def synthesize_node(state: ChainState) -> dict:
    return {"final_output": synthesize_output(state.get("outcomes", []))}
