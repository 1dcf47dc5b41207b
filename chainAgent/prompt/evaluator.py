"""Prompt clarity evaluation and domain keyword extraction.

The evaluator scores how actionable a prompt is with a few cheap heuristics:

1. Length checks (-0.2 each):
   - fewer than 10 characters
   - fewer than 2 words
2. Vagueness (-0.2, applied once):
   - generic nouns: "thing", "stuff", "something"
   - a verb pointing at nothing in particular: "check it", "fix this", ...
3. Specificity bonuses (+0.1 each):
   - a path or file-extension token ("src/auth", "auth.go")
   - a function-call token ("parse()", "func")
   - a task verb ("review", "refactor", ...)

Base confidence is 0.7 and a prompt is clear at 0.7 or above. Unclear prompts
get a clarifying suffix appended, chosen by the first issue detected.

Example:
    >>> evaluator = PromptClarityEvaluator()
    >>> evaluator.evaluate("Review auth.go for security vulnerabilities").confidence
    0.9
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from pydantic import BaseModel, Field

LOGGER = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.7
ISSUE_PENALTY = 0.2
SPECIFICITY_BONUS = 0.1

ISSUE_TOO_SHORT = "Prompt is too short and lacks context"
ISSUE_TOO_FEW_WORDS = "Prompt lacks sufficient detail"
ISSUE_VAGUE = "Prompt uses vague terms (e.g., 'thing', 'check it', 'fix this')"

FEEDBACK_EMPTY = "Prompt is empty. Please provide a task description."
FEEDBACK_CLEAR = "Prompt is clear and actionable."
FEEDBACK_UNCLEAR = "Prompt could be improved for clarity and specificity."

VAGUE_SUFFIX = " for correctness and best practices"
DETAIL_SUFFIX = " including error handling and edge cases"

VAGUENESS_PATTERNS = (
    re.compile(r"\b(thing|stuff|something)\b"),
    re.compile(r"\b(check|look|review|fix)\s+(it|this|that)\b"),
)

PATH_PATTERN = re.compile(r"/|\\|\b[\w-]+\.[A-Za-z][A-Za-z0-9]{0,4}\b")
FUNCTION_PATTERN = re.compile(r"\b\w+\([^()]*\)|\bfunc")

ACTION_VERBS = (
    "review", "analyze", "check", "test", "generate", "design", "create",
    "refactor", "improve", "optimize", "debug", "explain", "document",
    "implement", "architect", "validate", "verify",
)

# Declaration order is the output order of extract_keywords.
DOMAIN_RULES: Tuple[Tuple[re.Pattern, Tuple[str, str]], ...] = (
    (
        re.compile(r"code|review|quality|bug|issue|fix|check|error|performance|refactor|correct"),
        ("code-review", "quality"),
    ),
    (
        re.compile(r"test|coverage|unit-test|mock|integration-test|edge-case"),
        ("test-generator", "testing"),
    ),
    (
        re.compile(r"architecture|design|pattern|structure|organize|scale|module|boundary"),
        ("architecture-advisor", "design"),
    ),
    (
        re.compile(r"doc|readme|guide|comment|explain|write|api|tutorial"),
        ("documentation-writer", "docs"),
    ),
)


class EvaluationResult(BaseModel):
    """Outcome of a prompt clarity evaluation."""

    is_clear: bool = False
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    feedback: str = ""
    detected_issues: List[str] = Field(default_factory=list)
    refined_prompt: str = ""
    suggested_refinement: str = ""
    suggested_keywords: List[str] = Field(default_factory=list)


class PromptClarityEvaluator:
    """Scores prompt clarity and suggests refinements.

    Args:
        minimum_length: Prompts shorter than this many characters are penalized
        minimum_words: Prompts with fewer words are penalized
        confidence_threshold: Confidence at or above which a prompt is clear
    """

    def __init__(
        self,
        minimum_length: int = 10,
        minimum_words: int = 2,
        confidence_threshold: float = BASE_CONFIDENCE,
    ):
        self.minimum_length = minimum_length
        self.minimum_words = minimum_words
        self.confidence_threshold = confidence_threshold

    def evaluate(self, prompt: str) -> EvaluationResult:
        """Evaluate the clarity of ``prompt``.

        Args:
            prompt: Free-text request

        Returns:
            EvaluationResult with confidence clamped to [0, 1]

        Example:
            "check it" → is_clear=False, confidence=0.4,
            issues=["too short", "vague terms"]
        """
        text = (prompt or "").strip()

        if not text:
            return EvaluationResult(
                is_clear=False,
                confidence=0.0,
                feedback=FEEDBACK_EMPTY,
                refined_prompt=prompt or "",
            )

        issues: List[str] = []
        confidence = BASE_CONFIDENCE

        if len(text) < self.minimum_length:
            issues.append(ISSUE_TOO_SHORT)
            confidence -= ISSUE_PENALTY

        if len(text.split()) < self.minimum_words:
            issues.append(ISSUE_TOO_FEW_WORDS)
            confidence -= ISSUE_PENALTY

        lowered = text.lower()
        if any(pattern.search(lowered) for pattern in VAGUENESS_PATTERNS):
            issues.append(ISSUE_VAGUE)
            confidence -= ISSUE_PENALTY

        if PATH_PATTERN.search(text):
            confidence += SPECIFICITY_BONUS
        if FUNCTION_PATTERN.search(text):
            confidence += SPECIFICITY_BONUS
        if contains_action_verb(text):
            confidence += SPECIFICITY_BONUS

        # Rounding keeps repeated +/-0.1 steps from drifting (0.7 - 0.2 + 0.1 == 0.6)
        confidence = round(min(max(confidence, 0.0), 1.0), 4)
        is_clear = confidence >= self.confidence_threshold

        if is_clear:
            feedback = FEEDBACK_CLEAR
            suggestion = ""
            refined = text
        else:
            feedback = FEEDBACK_UNCLEAR
            suggestion = suggest_refinement(text, issues)
            refined = suggestion
            LOGGER.debug(f"Prompt refined: {text!r} → {refined!r}")

        return EvaluationResult(
            is_clear=is_clear,
            confidence=confidence,
            feedback=feedback,
            detected_issues=issues,
            refined_prompt=refined,
            suggested_refinement=suggestion,
            suggested_keywords=extract_keywords(text),
        )


def suggest_refinement(prompt: str, issues: List[str]) -> str:
    """Append a clarifying qualifier chosen by the first detected issue.

    A vague prompt is asked for correctness and best practices; a short or
    underspecified one is asked to cover error handling and edge cases.
    Neither qualifier is added twice.
    """
    if not issues:
        return prompt

    first = issues[0]
    if first == ISSUE_VAGUE:
        if " for " not in prompt and " including " not in prompt:
            return prompt + VAGUE_SUFFIX
    elif first in (ISSUE_TOO_SHORT, ISSUE_TOO_FEW_WORDS):
        if " including " not in prompt:
            return prompt + DETAIL_SUFFIX
    return prompt


def contains_action_verb(prompt: str) -> bool:
    """Return True if ``prompt`` contains a task verb (case-insensitive substring)."""
    lowered = prompt.lower()
    return any(verb in lowered for verb in ACTION_VERBS)


def extract_keywords(prompt: str) -> List[str]:
    """Map a prompt to capability keywords using the fixed domain rules.

    Rules are tested in declaration order and every matching rule contributes
    its two tags. Duplicates are dropped, keeping first-seen order, so the
    result is identical across runs for the same input.

    Example:
        >>> extract_keywords("Review the authentication code and add tests")
        ['code-review', 'quality', 'test-generator', 'testing']
    """
    lowered = (prompt or "").lower()
    keywords: dict = {}
    for pattern, tags in DOMAIN_RULES:
        if pattern.search(lowered):
            for tag in tags:
                keywords.setdefault(tag, None)
    return list(keywords)


__all__ = [
    "EvaluationResult",
    "PromptClarityEvaluator",
    "ACTION_VERBS",
    "DOMAIN_RULES",
    "contains_action_verb",
    "extract_keywords",
    "suggest_refinement",
]
