"""Capability descriptors, registry and discovery."""

from .schema import CapabilityDescriptor, CapabilityMatch
from .registry import CapabilityRegistry, KEYWORD_MATCH_WEIGHT
from .scanner import discover_capabilities, load_capability_file, parse_frontmatter, scan_capabilities

__all__ = [
    "CapabilityDescriptor",
    "CapabilityMatch",
    "CapabilityRegistry",
    "KEYWORD_MATCH_WEIGHT",
    "discover_capabilities",
    "load_capability_file",
    "parse_frontmatter",
    "scan_capabilities",
]
