"""Pytest configuration and shared fixtures.

Ensures the project root is importable and provides fake invocation
collaborators so chain tests never spawn the real CLI.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

# Ensure project root is in PYTHONPATH for imports to work
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from chainAgent.capabilities import CapabilityDescriptor, CapabilityRegistry  # noqa: E402
from chainAgent.invocation import InvocationOutcome  # noqa: E402
from chainAgent.utils.errors import CollaboratorError  # noqa: E402


class FakeInvoker:
    """Records every call and replies from a per-capability script.

    ``behaviour`` maps a capability name to either an output string (success),
    ``("fail", error)`` (the capability reports failure) or ``("raise", error)``
    (the collaborator cannot invoke at all). Unlisted names succeed with
    ``"<name> done"``.
    """

    def __init__(self, behaviour: Optional[Dict[str, object]] = None):
        self.behaviour = behaviour or {}
        self.calls: List[Tuple[str, str]] = []

    @property
    def called_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def prompt_for(self, name: str) -> str:
        for called, prompt in self.calls:
            if called == name:
                return prompt
        raise AssertionError(f"{name} was never invoked")

    async def invoke(self, name: str, prompt: str) -> InvocationOutcome:
        self.calls.append((name, prompt))
        action = self.behaviour.get(name, f"{name} done")

        if isinstance(action, tuple):
            kind, message = action
            if kind == "raise":
                raise CollaboratorError(name, message)
            return InvocationOutcome(capability_name=name, success=False, error=message, status_code=2)

        return InvocationOutcome(capability_name=name, success=True, output=action)


@pytest.fixture
def fake_invoker():
    return FakeInvoker()


@pytest.fixture
def sample_registry():
    """Four capabilities covering the four keyword domains, in a fixed order."""
    return CapabilityRegistry([
        CapabilityDescriptor("code-reviewer", "Reviews code for defects", ("code-review", "quality")),
        CapabilityDescriptor("test-generator", "Writes unit tests", ("test-generator", "testing")),
        CapabilityDescriptor("architecture-advisor", "Advises on structure", ("architecture-advisor", "design")),
        CapabilityDescriptor("documentation-writer", "Writes docs", ("documentation-writer", "docs")),
    ])


@pytest.fixture
def make_invoker():
    """Factory for FakeInvoker with a custom behaviour script."""
    return FakeInvoker
