"""Chain orchestrator - selects capabilities and runs them as a chain.

Two entry points:

- ``run_automatic``: evaluate and refine the prompt, extract keywords, rank
  capabilities, pick the best few (or fall back to registration order when
  nothing matches) and run them.
- ``run_explicit``: run a caller-chosen chain with the prompt as given. Every
  name is resolved before anything runs.

A failing capability never aborts a chain; it shows up as a failed step in
the report. Only ``NotFoundError`` (explicit mode) and ``ChainCancelledError``
propagate to callers.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, Field

from chainAgent.capabilities.registry import CapabilityRegistry
from chainAgent.capabilities.schema import CapabilityDescriptor
from chainAgent.graph import (
    build_chain_graph,
    build_explicit_rationale,
    build_rationale,
    recursion_limit_for,
)
from chainAgent.invocation.interfaces import CapabilityInvoker, InvocationOutcome
from chainAgent.prompt.evaluator import EvaluationResult, PromptClarityEvaluator, extract_keywords
from chainAgent.utils.errors import ChainCancelledError, NotFoundError

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_SELECTED = 2
DEFAULT_FALLBACK_COUNT = 3

CancelCheck = Callable[[], bool]


class ChainReport(BaseModel):
    """Everything one orchestration request produced."""

    original_prompt: str
    refined_prompt: str
    evaluation: EvaluationResult
    selected_capabilities: List[str] = Field(default_factory=list)
    rationale: str = ""
    outcomes: List[InvocationOutcome] = Field(default_factory=list)
    final_output: str = ""
    total_duration_ms: int = 0
    cancelled: bool = False

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)


class ChainOrchestrator:
    """Orchestrates capability chains.

    Args:
        registry: Populated capability registry (read-only from here on)
        invoker: Collaborator that runs one capability
        evaluator: Prompt clarity evaluator (default: a fresh instance)
        max_selected: Upper bound on keyword-selected capabilities
        fallback_count: Capabilities taken in registration order when no
            keyword matches
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        invoker: CapabilityInvoker,
        evaluator: Optional[PromptClarityEvaluator] = None,
        *,
        max_selected: int = DEFAULT_MAX_SELECTED,
        fallback_count: int = DEFAULT_FALLBACK_COUNT,
    ):
        self.registry = registry
        self.invoker = invoker
        self.evaluator = evaluator or PromptClarityEvaluator()
        self.max_selected = max_selected
        self.fallback_count = fallback_count
        self._graph = build_chain_graph(invoker)

    # ========== Read-only operations ==========

    def list_capabilities(self) -> List[CapabilityDescriptor]:
        return self.registry.all()

    def evaluate_prompt(self, prompt: str) -> EvaluationResult:
        return self.evaluator.evaluate(prompt)

    # ========== Chain execution ==========

    async def run_automatic(self, prompt: str, should_cancel: Optional[CancelCheck] = None) -> ChainReport:
        """Evaluate ``prompt``, select capabilities by keyword and run them.

        Args:
            prompt: Free-text request
            should_cancel: Polled between steps; returning True stops the chain

        Returns:
            ChainReport

        Raises:
            ChainCancelledError: Cancellation observed; carries the partial report
        """
        start = time.monotonic()

        evaluation = self.evaluator.evaluate(prompt)
        refined_prompt = evaluation.refined_prompt
        if not evaluation.is_clear:
            LOGGER.info(f"Prompt refined: {prompt!r} → {refined_prompt!r}")

        keywords = extract_keywords(refined_prompt)
        matched = self.select_capabilities(keywords)
        selected = matched
        if not selected:
            LOGGER.warning(
                f"No capabilities matched keywords {keywords}, "
                f"falling back to the first {self.fallback_count} registered"
            )
            selected = self.registry.all()[:self.fallback_count]

        rationale = build_rationale(keywords, matched)
        LOGGER.info(f"Capabilities selected: {[c.name for c in selected]} ({rationale})")

        report = ChainReport(
            original_prompt=prompt,
            refined_prompt=refined_prompt,
            evaluation=evaluation,
            selected_capabilities=[c.name for c in selected],
            rationale=rationale,
        )
        return await self._execute(report, refined_prompt, selected, start, should_cancel)

    async def run_explicit(
        self,
        prompt: str,
        names: Sequence[str],
        should_cancel: Optional[CancelCheck] = None,
    ) -> ChainReport:
        """Run the capabilities named in ``names``, in that order.

        The prompt is evaluated for the report but used unrefined.

        Raises:
            NotFoundError: A name is not registered; nothing was invoked
            ChainCancelledError: Cancellation observed; carries the partial report
        """
        start = time.monotonic()

        selected = []
        for name in names:
            capability = self.registry.get(name)
            if capability is None:
                LOGGER.error(f"Explicit chain rejected, unknown capability: {name}")
                raise NotFoundError(name)
            selected.append(capability)

        report = ChainReport(
            original_prompt=prompt,
            refined_prompt=prompt,
            evaluation=self.evaluator.evaluate(prompt),
            selected_capabilities=list(names),
            rationale=build_explicit_rationale(names),
        )
        return await self._execute(report, prompt, selected, start, should_cancel)

    def select_capabilities(self, keywords: Sequence[str]) -> List[CapabilityDescriptor]:
        """Top keyword-ranked capabilities, at most ``max_selected``."""
        matches = self.registry.match_keywords(keywords)
        return [m.descriptor for m in matches[:self.max_selected]]

    async def _execute(
        self,
        report: ChainReport,
        base_prompt: str,
        capabilities: List[CapabilityDescriptor],
        start: float,
        should_cancel: Optional[CancelCheck],
    ) -> ChainReport:
        initial_state = {
            "base_prompt": base_prompt,
            "capabilities": capabilities,
            "step": 0,
            "outcomes": [],
            "forwarded": [],
            "cancelled": False,
            "final_output": "",
        }
        config = {
            "configurable": {"should_cancel": should_cancel},
            "recursion_limit": recursion_limit_for(len(capabilities)),
        }

        final_state = await self._graph.ainvoke(initial_state, config=config)

        report.outcomes = list(final_state.get("outcomes", []))
        report.final_output = final_state.get("final_output", "")
        report.cancelled = bool(final_state.get("cancelled"))
        report.total_duration_ms = int((time.monotonic() - start) * 1000)

        LOGGER.info(
            f"Chain finished: {report.success_count}/{len(report.outcomes)} succeeded "
            f"in {report.total_duration_ms} ms"
        )

        if report.cancelled:
            raise ChainCancelledError(report)
        return report


__all__ = ["ChainOrchestrator", "ChainReport", "DEFAULT_MAX_SELECTED", "DEFAULT_FALLBACK_COUNT"]
