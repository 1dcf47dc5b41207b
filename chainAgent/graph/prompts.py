"""Prompt augmentation, selection rationale and result synthesis.

Context flow: each capability in a chain receives

    <base prompt>

    [Context: you are <name>. <description>]

    [Previous Capability Results:]
    - Capability 1 (<name>): <output>
    - Capability 2 (<name>): <output>
    [Consider these results in your response]

The results block lists successful outcomes only, in execution order, and is
omitted entirely until at least one capability has succeeded. Context grows
with every successful step, so chain order matters.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from chainAgent.capabilities.schema import CapabilityDescriptor
from chainAgent.invocation.interfaces import InvocationOutcome

PREVIOUS_RESULTS_HEADER = "[Previous Capability Results:]"
PREVIOUS_RESULTS_FOOTER = "[Consider these results in your response]"

REPORT_HEADER = "=== Capability Chain Results ==="
SUMMARY_HEADER = "=== Summary ==="

NO_MATCH_RATIONALE = "No capabilities matched the prompt keywords"


def build_capability_prompt(
    base_prompt: str,
    capability: CapabilityDescriptor,
    forwarded: Sequence[InvocationOutcome] = (),
) -> str:
    """Build the augmented prompt sent to ``capability``.

    Args:
        base_prompt: Prompt shared by the whole chain
        capability: Capability about to be invoked
        forwarded: Prior outcomes to share. Failed outcomes are skipped even
            if passed in.

    Returns:
        Prompt with identity preamble and, when available, prior results
    """
    prompt = base_prompt
    prompt += f"\n\n[Context: you are {capability.name}. {capability.description}]"

    previous = [o for o in forwarded if o.success and o.output is not None]
    if previous:
        prompt += f"\n\n{PREVIOUS_RESULTS_HEADER}"
        for i, outcome in enumerate(previous, 1):
            prompt += f"\n- Capability {i} ({outcome.capability_name}): {outcome.output}"
        prompt += f"\n{PREVIOUS_RESULTS_FOOTER}"

    return prompt


def synthesize_output(outcomes: Iterable[InvocationOutcome]) -> str:
    """Combine chain outcomes into one report.

    Pure function of ``outcomes``: identical input yields identical text.
    """
    outcomes = list(outcomes)
    lines: List[str] = [REPORT_HEADER, ""]

    for i, outcome in enumerate(outcomes, 1):
        lines.append(f"## Capability {i}: {outcome.capability_name}")
        if outcome.success:
            lines.append("Status: ✓ Success")
            if outcome.output is not None:
                lines.extend(["Output:", outcome.output, ""])
        else:
            lines.append("Status: ✗ Failed")
            if outcome.error:
                lines.extend([f"Error: {outcome.error}", ""])

    success_count = sum(1 for o in outcomes if o.success)
    lines.extend([
        "",
        SUMMARY_HEADER,
        f"Total Capabilities Executed: {len(outcomes)}",
        f"Successful Executions: {success_count}",
    ])
    return "\n".join(lines) + "\n"


def build_rationale(keywords: Sequence[str], matched: Sequence[CapabilityDescriptor]) -> str:
    """Explain an automatic selection.

    ``matched`` holds the keyword-ranked capabilities that were selected; it
    is empty when ranking found nothing (including when the orchestrator fell
    back to registration order).
    """
    if not matched:
        return NO_MATCH_RATIONALE
    return (
        f"Selected based on keywords: {', '.join(keywords)}. "
        f"Capabilities: {', '.join(c.name for c in matched)}"
    )


def build_explicit_rationale(names: Sequence[str]) -> str:
    return f"Explicit chain requested: {', '.join(names)}"


__all__ = [
    "PREVIOUS_RESULTS_HEADER",
    "PREVIOUS_RESULTS_FOOTER",
    "NO_MATCH_RATIONALE",
    "build_capability_prompt",
    "synthesize_output",
    "build_rationale",
    "build_explicit_rationale",
]
