"""chainAgent - prompt evaluation, keyword-ranked capability selection and
sequential capability chains with accumulating context."""

from .orchestrator import ChainOrchestrator, ChainReport

__all__ = ["ChainOrchestrator", "ChainReport"]
