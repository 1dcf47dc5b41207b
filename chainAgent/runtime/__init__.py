"""Runtime helpers for assembling the orchestrator."""

from .app import build_application, build_invoker

__all__ = ["build_application", "build_invoker"]
