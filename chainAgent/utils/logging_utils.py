"""Logging utilities for chainAgent."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = "chainAgent"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(level: Union[int, str]) -> int:
    """Map a level name such as ``"info"`` or ``"WARN"`` to a logging constant.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.strip().lower(), logging.INFO)


def setup_logging(level: Union[int, str] = logging.INFO, log_dir: Optional[Path] = None) -> logging.Logger:
    """Setup logging configuration for chainAgent.

    Args:
        level: Console logging level, as a constant or a name (default: INFO)
        log_dir: Optional directory for a timestamped, detailed log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Set to DEBUG to capture all child logs
    logger.propagate = False

    # Clear existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(resolve_level(level))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"chainagent_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)
        logger.info(f"Log file: {log_file}")

    return logger


def log_routing_decision(logger: logging.Logger, from_node: str, decision: str, reason: str = "") -> None:
    """Log a routing decision taken between chain graph nodes.

    Args:
        logger: Logger instance
        from_node: Source node making the decision
        decision: Routing destination
        reason: Reason for the routing decision
    """
    logger.debug(f"Routing decision from {from_node}: → {decision}")
    if reason:
        logger.debug(f"  → Reason: {reason}")


def log_capability_call(logger: logging.Logger, step_idx: int, name: str, prompt: str) -> None:
    """Log a capability invocation.

    Args:
        logger: Logger instance
        step_idx: Zero-based position in the chain
        name: Capability name
        prompt: Augmented prompt sent to the capability
    """
    logger.info(f"Invoking capability {step_idx + 1}: {name}")
    logger.debug(f"  Prompt: {_truncate(prompt)}")


def log_capability_result(logger: logging.Logger, name: str, success: bool, detail: Optional[str] = None) -> None:
    """Log the outcome of a capability invocation.

    Args:
        logger: Logger instance
        name: Capability name
        success: Whether the capability reported success
        detail: Output or error text
    """
    status = "✓ Success" if success else "✗ Failed"
    logger.info(f"Capability result: {name} - {status}")
    if detail:
        logger.debug(f"  Result: {_truncate(detail)}")


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """Log error with context.

    Args:
        logger: Logger instance
        error: Exception instance
        context: Additional context about where the error occurred
    """
    logger.error(f"Error occurred: {type(error).__name__}: {str(error)}")
    if context:
        logger.error(f"  Context: {context}")


def _truncate(text: str, limit: int = 500) -> str:
    if len(text) > limit:
        return text[:limit] + "... (truncated)"
    return text


__all__ = [
    "ROOT_LOGGER_NAME",
    "resolve_level",
    "setup_logging",
    "log_routing_decision",
    "log_capability_call",
    "log_capability_result",
    "log_error",
]
