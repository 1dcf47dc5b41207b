"""Invoke and record nodes - one capability per pass."""

from __future__ import annotations

import logging
import time

from langchain_core.runnables import RunnableConfig

from chainAgent.graph.prompts import build_capability_prompt
from chainAgent.graph.state import ChainState
from chainAgent.invocation.interfaces import CapabilityInvoker, InvocationOutcome
from chainAgent.utils.logging_utils import log_capability_call, log_capability_result, log_error

LOGGER = logging.getLogger(__name__)


def build_invoke_node(invoker: CapabilityInvoker):
    """Create the node that invokes the capability at ``state["step"]``.

    Cancellation is polled here, before the invocation starts, through the
    ``should_cancel`` callable passed in ``config["configurable"]``. A
    cancelled run invokes nothing further and routes to synthesis.
    """

    async def invoke_node(state: ChainState, config: RunnableConfig) -> dict:
        step = state.get("step", 0)
        capability = state["capabilities"][step]

        should_cancel = (config.get("configurable") or {}).get("should_cancel")
        if should_cancel is not None and should_cancel():
            LOGGER.info(f"Cancellation observed before step {step + 1} ({capability.name})")
            return {"cancelled": True, "current_outcome": None}

        prompt = build_capability_prompt(state["base_prompt"], capability, state.get("forwarded", []))
        log_capability_call(LOGGER, step, capability.name, prompt)

        start = time.monotonic()
        try:
            outcome = await invoker.invoke(capability.name, prompt)
        except Exception as e:
            # The collaborator could not run the capability; the chain goes on
            log_error(LOGGER, e, context=f"invoking capability {capability.name}")
            outcome = InvocationOutcome.failed(
                capability.name,
                str(e) or type(e).__name__,
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        return {"current_outcome": outcome}

    return invoke_node


async def record_node(state: ChainState) -> dict:
    """Append the current outcome and advance to the next step.

    Successful outcomes with output are also added to the forwarded context.
    """
    outcome = state["current_outcome"]
    log_capability_result(LOGGER, outcome.capability_name, outcome.success, outcome.output or outcome.error)

    update = {
        "outcomes": [outcome],
        "step": state.get("step", 0) + 1,
        "current_outcome": None,
    }
    if outcome.success and outcome.output is not None:
        update["forwarded"] = [outcome]
    return update
