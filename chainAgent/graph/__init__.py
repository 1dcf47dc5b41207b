"""Chain execution graph."""

from .builder import build_chain_graph, recursion_limit_for
from .prompts import (
    NO_MATCH_RATIONALE,
    build_capability_prompt,
    build_explicit_rationale,
    build_rationale,
    synthesize_output,
)
from .state import ChainState

__all__ = [
    "ChainState",
    "NO_MATCH_RATIONALE",
    "build_chain_graph",
    "recursion_limit_for",
    "build_capability_prompt",
    "build_explicit_rationale",
    "build_rationale",
    "synthesize_output",
]
