"""Factory for assembling the chain execution state machine."""

from __future__ import annotations

from langgraph.graph import END, START, StateGraph

from chainAgent.graph.nodes import build_invoke_node, record_node, synthesize_node
from chainAgent.graph.routing import invoke_route, record_route, start_route
from chainAgent.graph.state import ChainState
from chainAgent.invocation.interfaces import CapabilityInvoker


def build_chain_graph(invoker: CapabilityInvoker):
    """Compose the sequential chain graph.

    Architecture:

        START → invoke → record → invoke → ... → synthesize → END
                  ↓                                  ↑
                  └──────── (cancelled) ─────────────┘

    - invoke: poll cancellation, build the augmented prompt, call the invoker
    - record: append the outcome, forward it if successful, advance the step
    - synthesize: render the final report from all outcomes

    Steps run strictly one after another; later prompts depend on earlier
    successful outputs.
    """
    graph = StateGraph(ChainState)

    graph.add_node("invoke", build_invoke_node(invoker))
    graph.add_node("record", record_node)
    graph.add_node("synthesize", synthesize_node)

    graph.add_conditional_edges(
        START,
        start_route,
        {
            "invoke": "invoke",
            "synthesize": "synthesize",
        },
    )
    graph.add_conditional_edges(
        "invoke",
        invoke_route,
        {
            "record": "record",
            "synthesize": "synthesize",  # Cancelled
        },
    )
    graph.add_conditional_edges(
        "record",
        record_route,
        {
            "invoke": "invoke",          # Next capability
            "synthesize": "synthesize",  # Chain complete
        },
    )
    graph.add_edge("synthesize", END)

    return graph.compile()


def recursion_limit_for(chain_length: int) -> int:
    """Graph supersteps needed for a chain: invoke + record per step, plus synthesis."""
    return 2 * chain_length + 5
