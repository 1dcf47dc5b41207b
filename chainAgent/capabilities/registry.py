"""Capability Registry - ordered, name-keyed catalog with keyword ranking.

The registry is filled once during startup (see ``scanner.py``) and is only
read afterwards, so concurrent orchestration requests share it without locks.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from chainAgent.utils.errors import ValidationError

from .schema import CapabilityDescriptor, CapabilityMatch

LOGGER = logging.getLogger(__name__)

# Points awarded per exact keyword match
KEYWORD_MATCH_WEIGHT = 2.0


class CapabilityRegistry:
    """Capability registry.

    Capabilities are kept in registration order. That order is the
    tie-break for keyword ranking and the order used by the orchestrator's
    relevance-agnostic fallback.

    Query pattern:
    - get(name): lookup by name
    - all(): every capability, in registration order
    - match_keywords(keywords): capabilities ranked by keyword overlap
    """

    def __init__(self, descriptors: Iterable[CapabilityDescriptor] = ()):
        self._capabilities: Dict[str, CapabilityDescriptor] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    # ========== Registration ==========

    def add(self, descriptor: CapabilityDescriptor) -> None:
        """Register a capability.

        Args:
            descriptor: Capability descriptor

        Raises:
            ValidationError: Name is empty or already registered. On a
                duplicate the first registration is kept unchanged.
        """
        if not descriptor.name:
            raise ValidationError("Capability name cannot be empty")
        if descriptor.name in self._capabilities:
            raise ValidationError(f"Capability {descriptor.name!r} already registered")

        self._capabilities[descriptor.name] = descriptor
        LOGGER.debug(f"Registered capability: {descriptor.name}")

    # ========== Queries ==========

    def get(self, name: str) -> Optional[CapabilityDescriptor]:
        """Return the capability registered under ``name``, or None."""
        return self._capabilities.get(name)

    def all(self) -> List[CapabilityDescriptor]:
        """Return all capabilities in registration order."""
        return list(self._capabilities.values())

    def names(self) -> List[str]:
        return list(self._capabilities)

    def match_keywords(self, keywords: Iterable[str]) -> List[CapabilityMatch]:
        """Rank capabilities by exact keyword overlap.

        Each capability scores ``2.0`` per keyword of its own that appears in
        ``keywords``. Capabilities scoring zero are dropped. The rest are
        ordered by descending score; ``sorted`` is stable, so equal scores
        keep registration order.

        Args:
            keywords: Keywords extracted from the prompt

        Returns:
            Ranked matches, best first

        Examples:
            >>> # A has 2 matching keywords, B has 1
            >>> [(m.name, m.score) for m in registry.match_keywords(["x", "y"])]
            [('A', 4.0), ('B', 2.0)]
        """
        keyword_set = set(keywords)
        if not keyword_set:
            return []

        matches = []
        for descriptor in self._capabilities.values():
            score = _match_score(descriptor.keywords, keyword_set)
            if score > 0:
                matches.append(CapabilityMatch(descriptor=descriptor, score=score))

        return sorted(matches, key=lambda match: match.score, reverse=True)

    # ========== Export ==========

    def to_json(self, indent: int = 2) -> str:
        """Serialize the catalog to JSON (useful for debugging)."""
        return json.dumps([d.to_dict() for d in self._capabilities.values()], indent=indent, ensure_ascii=False)

    def __len__(self) -> int:
        return len(self._capabilities)

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __iter__(self) -> Iterator[CapabilityDescriptor]:
        return iter(self.all())


def _match_score(capability_keywords: Iterable[str], keyword_set: set) -> float:
    score = 0.0
    for kw in capability_keywords:
        if kw in keyword_set:
            score += KEYWORD_MATCH_WEIGHT
    return score


__all__ = ["CapabilityRegistry", "KEYWORD_MATCH_WEIGHT"]
