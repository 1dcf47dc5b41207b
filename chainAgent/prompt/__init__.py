"""Prompt clarity evaluation and keyword extraction."""

from .evaluator import (
    ACTION_VERBS,
    DOMAIN_RULES,
    EvaluationResult,
    PromptClarityEvaluator,
    contains_action_verb,
    extract_keywords,
    suggest_refinement,
)

__all__ = [
    "ACTION_VERBS",
    "DOMAIN_RULES",
    "EvaluationResult",
    "PromptClarityEvaluator",
    "contains_action_verb",
    "extract_keywords",
    "suggest_refinement",
]
