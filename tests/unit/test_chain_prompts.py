"""Unit tests for capability prompt augmentation and report synthesis."""

from chainAgent.capabilities import CapabilityDescriptor
from chainAgent.graph.prompts import (
    NO_MATCH_RATIONALE,
    build_capability_prompt,
    build_explicit_rationale,
    build_rationale,
    synthesize_output,
)
from chainAgent.invocation import InvocationOutcome


def _ok(name, output):
    return InvocationOutcome(capability_name=name, success=True, output=output)


def _failed(name, error):
    return InvocationOutcome(capability_name=name, success=False, error=error, status_code=1)


REVIEWER = CapabilityDescriptor("code-reviewer", "Reviews code for defects.", ("code-review",))


class TestBuildCapabilityPrompt:

    def test_first_step_has_no_results_block(self):
        prompt = build_capability_prompt("Review auth.go", REVIEWER)

        assert prompt == "Review auth.go\n\n[Context: you are code-reviewer. Reviews code for defects.]"

    def test_results_block_lists_successes_in_order(self):
        prompt = build_capability_prompt(
            "Review auth.go",
            REVIEWER,
            [_ok("a", "first"), _failed("b", "boom"), _ok("c", "third")],
        )

        assert prompt == (
            "Review auth.go\n\n"
            "[Context: you are code-reviewer. Reviews code for defects.]\n\n"
            "[Previous Capability Results:]\n"
            "- Capability 1 (a): first\n"
            "- Capability 2 (c): third\n"
            "[Consider these results in your response]"
        )

    def test_only_failures_means_no_results_block(self):
        prompt = build_capability_prompt("Review auth.go", REVIEWER, [_failed("a", "boom")])

        assert "[Previous Capability Results:]" not in prompt
        assert "boom" not in prompt


class TestSynthesizeOutput:

    def test_mixed_outcomes(self):
        report = synthesize_output([_ok("code-reviewer", "Looks fine"), _failed("test-generator", "timeout")])

        assert report == (
            "=== Capability Chain Results ===\n"
            "\n"
            "## Capability 1: code-reviewer\n"
            "Status: ✓ Success\n"
            "Output:\n"
            "Looks fine\n"
            "\n"
            "## Capability 2: test-generator\n"
            "Status: ✗ Failed\n"
            "Error: timeout\n"
            "\n"
            "\n"
            "=== Summary ===\n"
            "Total Capabilities Executed: 2\n"
            "Successful Executions: 1\n"
        )

    def test_no_outcomes(self):
        report = synthesize_output([])

        assert report.startswith("=== Capability Chain Results ===\n")
        assert "Total Capabilities Executed: 0" in report
        assert "Successful Executions: 0" in report
        assert "## Capability" not in report

    def test_deterministic(self):
        outcomes = [_ok("a", "x"), _failed("b", "y")]

        assert synthesize_output(outcomes) == synthesize_output(list(outcomes))


class TestRationale:

    def test_keyword_rationale(self):
        matched = [REVIEWER, CapabilityDescriptor("test-generator")]

        rationale = build_rationale(["code-review", "quality", "testing"], matched)

        assert rationale == (
            "Selected based on keywords: code-review, quality, testing. "
            "Capabilities: code-reviewer, test-generator"
        )

    def test_no_match(self):
        assert build_rationale(["docs"], []) == NO_MATCH_RATIONALE

    def test_explicit(self):
        assert build_explicit_rationale(["a", "b"]) == "Explicit chain requested: a, b"
