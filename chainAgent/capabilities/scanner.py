"""Capability scanner - discovers capabilities from Markdown definition files.

Each capability lives in ``<repo_root>/.github/agents/<name>.md`` and starts
with YAML frontmatter:

    ---
    name: code-reviewer
    description: Reviews code for bugs and style problems
    keywords: [code-review, quality]
    ---
    # Instructions for the agent ...

Only the frontmatter is read. Files that fail to parse and duplicate names are
logged and skipped, so one bad file never blocks startup.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import yaml

from chainAgent.utils.errors import ValidationError

from .registry import CapabilityRegistry
from .schema import CapabilityDescriptor

LOGGER = logging.getLogger(__name__)

DEFAULT_AGENTS_DIR = Path(".github") / "agents"

_FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---", re.DOTALL)


def parse_frontmatter(content: str) -> dict:
    """Extract and parse the YAML frontmatter of a definition file.

    Args:
        content: The full content of the Markdown file

    Returns:
        Frontmatter as a dictionary

    Raises:
        ValueError: If frontmatter is missing or is not a YAML mapping
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        raise ValueError("Definition must start with YAML frontmatter (--- ... ---)")

    try:
        frontmatter = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}")

    if not isinstance(frontmatter, dict):
        raise ValueError("Frontmatter must be a YAML dictionary")

    return frontmatter


def load_capability_file(path: Path) -> CapabilityDescriptor:
    """Load one Markdown definition file into a descriptor.

    Raises:
        ValueError: Frontmatter missing, invalid, or without a ``name``
    """
    with path.open("r", encoding="utf-8") as f:
        content = f.read()

    frontmatter = parse_frontmatter(content)
    descriptor = CapabilityDescriptor.from_record(frontmatter, source_path=path)
    if not descriptor.name:
        raise ValueError(f"Capability name not found in frontmatter: {path}")
    return descriptor


def discover_capabilities(directory: Union[Path, str]) -> List[CapabilityDescriptor]:
    """Parse every ``*.md`` file in ``directory``, in file-name order.

    Returns:
        Descriptors that parsed successfully. A missing directory yields an
        empty list.
    """
    directory = Path(directory)
    if not directory.is_dir():
        LOGGER.warning(f"Capabilities directory not found: {directory}")
        return []

    descriptors = []
    for path in sorted(directory.glob("*.md")):
        if not path.is_file():
            continue
        try:
            descriptors.append(load_capability_file(path))
        except (OSError, ValueError) as e:
            LOGGER.warning(f"Failed to parse capability file {path.name}: {e}")
    return descriptors


def scan_capabilities(
    repo_root: Union[Path, str] = ".",
    agents_dir: Optional[Union[Path, str]] = None,
) -> CapabilityRegistry:
    """Discover capabilities under a repository and register them.

    Args:
        repo_root: Repository root
        agents_dir: Definitions directory, relative to ``repo_root`` unless
            absolute (default: ``.github/agents``)

    Returns:
        Populated CapabilityRegistry
    """
    directory = Path(agents_dir) if agents_dir is not None else DEFAULT_AGENTS_DIR
    if not directory.is_absolute():
        directory = Path(repo_root) / directory

    registry = CapabilityRegistry()
    for descriptor in discover_capabilities(directory):
        try:
            registry.add(descriptor)
            LOGGER.debug(f"Discovered capability: {descriptor.name}")
        except ValidationError as e:
            LOGGER.warning(f"Failed to add capability from {descriptor.source_path}: {e}")

    LOGGER.info(f"Capability discovery complete: {len(registry)} registered from {directory}")
    return registry


__all__ = [
    "DEFAULT_AGENTS_DIR",
    "parse_frontmatter",
    "load_capability_file",
    "discover_capabilities",
    "scan_capabilities",
]
