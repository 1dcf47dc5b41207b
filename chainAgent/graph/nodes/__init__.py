"""Graph node factories."""

from .invoke import build_invoke_node, record_node
from .synthesize import synthesize_node

__all__ = ["build_invoke_node", "record_node", "synthesize_node"]
