"""Runtime assembly: settings → registry + invoker → orchestrator."""

from __future__ import annotations

import logging
from typing import Optional

from chainAgent.capabilities import CapabilityRegistry, scan_capabilities
from chainAgent.config import Settings, get_settings
from chainAgent.invocation import CapabilityInvoker, CopilotCliInvoker
from chainAgent.orchestrator import ChainOrchestrator
from chainAgent.prompt import PromptClarityEvaluator

LOGGER = logging.getLogger(__name__)


def build_invoker(settings: Settings) -> CopilotCliInvoker:
    return CopilotCliInvoker(
        binary=settings.cli.binary,
        timeout=settings.cli.timeout_seconds,
        retries=settings.cli.retries,
    )


def build_application(
    settings: Optional[Settings] = None,
    *,
    registry: Optional[CapabilityRegistry] = None,
    invoker: Optional[CapabilityInvoker] = None,
) -> ChainOrchestrator:
    """Build a ready-to-use orchestrator.

    Startup phase: the registry is discovered (unless one is passed in) and
    never written to again.

    Args:
        settings: Application settings (default: cached ``get_settings()``)
        registry: Pre-built registry, skipping discovery
        invoker: Invocation collaborator (default: Copilot CLI invoker)

    Returns:
        ChainOrchestrator
    """
    settings = settings or get_settings()

    if registry is None:
        registry = scan_capabilities(settings.repo_root, settings.agents_path)
    if invoker is None:
        invoker = build_invoker(settings)

    LOGGER.info(f"Application ready: {len(registry)} capabilities")
    return ChainOrchestrator(
        registry=registry,
        invoker=invoker,
        evaluator=PromptClarityEvaluator(),
        max_selected=settings.selection.max_selected,
        fallback_count=settings.selection.fallback_count,
    )
