"""Capability descriptor schema.

A capability is an external, named unit of work (an agent) that is invoked
with a text prompt. Descriptors are produced by discovery and are read-only
once registered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Metadata describing one capability.

    Attributes:
        name: Unique identifier used for lookup and invocation
        description: Short summary, also injected into the capability's prompt
        keywords: Tags used for keyword ranking (exact string matching)
        source_path: File the descriptor was discovered from, if any

    Examples:
        >>> reviewer = CapabilityDescriptor(
        ...     name="code-reviewer",
        ...     description="Reviews code for bugs and style problems",
        ...     keywords=("code-review", "quality"),
        ... )
    """

    name: str
    description: str = ""
    keywords: Tuple[str, ...] = field(default_factory=tuple)
    source_path: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Accept any iterable of keywords but store an immutable tuple
        if not isinstance(self.keywords, tuple):
            object.__setattr__(self, "keywords", tuple(self.keywords))

    @classmethod
    def from_record(cls, record: Dict[str, Any], source_path: Optional[Path] = None) -> "CapabilityDescriptor":
        """Build a descriptor from a pre-parsed ``{name, description, keywords}`` record.

        ``keywords`` may be a list or a comma separated string; blank entries
        and surrounding quotes are dropped.
        """
        return cls(
            name=str(record.get("name") or "").strip(),
            description=str(record.get("description") or "").strip(),
            keywords=_normalize_keywords(record.get("keywords")),
            source_path=source_path,
        )

    def has_keyword(self, keyword: str) -> bool:
        return keyword in self.keywords

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class CapabilityMatch:
    """A capability paired with its keyword relevance score."""

    descriptor: CapabilityDescriptor
    score: float

    @property
    def name(self) -> str:
        return self.descriptor.name


def _normalize_keywords(raw: Any) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = raw.strip().strip("[]").split(",")
    if not isinstance(raw, Iterable):
        raw = [raw]

    keywords = []
    for item in raw:
        kw = str(item).strip().strip("\"'")
        if kw:
            keywords.append(kw)
    return tuple(keywords)


__all__ = ["CapabilityDescriptor", "CapabilityMatch"]
