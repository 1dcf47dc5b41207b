"""Unit tests for CapabilityRegistry."""

import json

import pytest

from chainAgent.capabilities import CapabilityDescriptor, CapabilityRegistry
from chainAgent.utils.errors import ValidationError


def _cap(name, *keywords, description=""):
    return CapabilityDescriptor(name=name, description=description, keywords=keywords)


class TestRegistration:

    def test_add_and_get(self):
        registry = CapabilityRegistry()
        reviewer = _cap("reviewer", "code-review")

        registry.add(reviewer)

        assert registry.get("reviewer") is reviewer
        assert "reviewer" in registry
        assert len(registry) == 1

    def test_get_unknown_returns_none(self):
        assert CapabilityRegistry().get("missing") is None

    def test_empty_name_rejected(self):
        registry = CapabilityRegistry()

        with pytest.raises(ValidationError):
            registry.add(_cap(""))

        assert len(registry) == 0

    def test_duplicate_rejected_and_original_kept(self):
        registry = CapabilityRegistry()
        original = _cap("reviewer", "code-review", description="first")
        registry.add(original)

        with pytest.raises(ValidationError, match="already registered"):
            registry.add(_cap("reviewer", "docs", description="second"))

        assert registry.get("reviewer") is original
        assert registry.get("reviewer").description == "first"
        assert len(registry) == 1

    def test_all_preserves_registration_order(self):
        registry = CapabilityRegistry([_cap("c"), _cap("a"), _cap("b")])

        assert [d.name for d in registry.all()] == ["c", "a", "b"]
        assert registry.names() == ["c", "a", "b"]
        assert [d.name for d in registry] == ["c", "a", "b"]

    def test_all_returns_copy(self):
        registry = CapabilityRegistry([_cap("a")])

        registry.all().clear()

        assert len(registry) == 1

    def test_descriptor_is_immutable(self):
        descriptor = _cap("a", "x")

        with pytest.raises(AttributeError):
            descriptor.name = "b"

    def test_to_json(self):
        registry = CapabilityRegistry([_cap("a", "x", "y", description="Does A")])

        data = json.loads(registry.to_json())

        assert data == [{"name": "a", "description": "Does A", "keywords": ["x", "y"]}]


class TestMatchKeywords:
    """Keyword ranking."""

    def test_empty_keywords(self, sample_registry):
        assert sample_registry.match_keywords([]) == []

    def test_empty_registry(self):
        assert CapabilityRegistry().match_keywords(["code-review"]) == []

    def test_scores_and_order(self):
        registry = CapabilityRegistry([
            _cap("B", "x"),
            _cap("A", "x", "y"),
        ])

        matches = registry.match_keywords(["x", "y"])

        assert [(m.name, m.score) for m in matches] == [("A", 4.0), ("B", 2.0)]

    def test_zero_scores_excluded(self, sample_registry):
        matches = sample_registry.match_keywords(["testing"])

        assert [m.name for m in matches] == ["test-generator"]

    def test_ties_keep_registration_order(self):
        registry = CapabilityRegistry([
            _cap("first", "a"),
            _cap("second", "b"),
            _cap("best", "a", "b"),
            _cap("third", "a"),
        ])

        matches = registry.match_keywords(["a", "b"])

        assert [m.name for m in matches] == ["best", "first", "second", "third"]
        assert [m.score for m in matches] == [4.0, 2.0, 2.0, 2.0]

    def test_exact_match_only(self):
        registry = CapabilityRegistry([_cap("reviewer", "code-review")])

        assert registry.match_keywords(["Code-Review", "code", "code-reviews"]) == []

    def test_duplicate_input_keywords_do_not_inflate_score(self):
        registry = CapabilityRegistry([_cap("reviewer", "code-review")])

        matches = registry.match_keywords(["code-review", "code-review"])

        assert matches[0].score == 2.0

    def test_accepts_any_iterable(self, sample_registry):
        matches = sample_registry.match_keywords(k for k in ["docs", "design"])

        assert [m.name for m in matches] == ["architecture-advisor", "documentation-writer"]
