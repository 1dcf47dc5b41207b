"""Command-line interface for chainAgent.

Usage:
    # List discovered capabilities
    chain-agent list

    # Score a prompt without running anything
    chain-agent evaluate "Review auth.go for security vulnerabilities"

    # Automatic selection
    chain-agent run "Review the payment module and add tests"

    # Explicit chain, JSON report
    chain-agent run --chain code-reviewer,test-generator --json "Harden parser.py"

Ctrl+C during ``run`` stops the chain at the next step boundary and prints
the partial report.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import signal
import sys
from typing import List, Optional

from chainAgent.config import get_settings
from chainAgent.orchestrator import ChainOrchestrator, ChainReport
from chainAgent.runtime import build_application
from chainAgent.utils.errors import ChainCancelledError, NotFoundError
from chainAgent.utils.logging_utils import setup_logging

LOGGER = logging.getLogger(__name__)

EXIT_NOT_FOUND = 2
EXIT_CANCELLED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="chain-agent",
        description="Run capability chains with prompt evaluation and keyword selection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    parser.add_argument("--log-level", type=str, default=None, help="debug, info, warn or error")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List discovered capabilities")

    evaluate = subparsers.add_parser("evaluate", help="Evaluate prompt clarity")
    evaluate.add_argument("prompt", type=str)

    run = subparsers.add_parser("run", help="Run a capability chain")
    run.add_argument("prompt", type=str)
    run.add_argument(
        "--chain",
        type=str,
        default=None,
        help="Comma separated capability names to run in order (skips automatic selection)",
    )

    return parser.parse_args(argv)


def _print_report(report: ChainReport, as_json: bool) -> None:
    if as_json:
        print(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return
    if report.refined_prompt != report.original_prompt:
        print(f"Refined prompt: {report.refined_prompt}")
    print(f"Selection: {report.rationale}")
    print()
    print(report.final_output)


async def _run_chain(orchestrator: ChainOrchestrator, args: argparse.Namespace) -> int:
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError):
        LOGGER.debug("Signal handlers unavailable, Ctrl+C will abort immediately")

    try:
        if args.chain:
            names = [n.strip() for n in args.chain.split(",") if n.strip()]
            report = await orchestrator.run_explicit(args.prompt, names, should_cancel=cancel_event.is_set)
        else:
            report = await orchestrator.run_automatic(args.prompt, should_cancel=cancel_event.is_set)
    except NotFoundError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except ChainCancelledError as e:
        print(f"Cancelled: {e.user_message}", file=sys.stderr)
        if e.report is not None:
            _print_report(e.report, args.json)
        return EXIT_CANCELLED
    finally:
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except (NotImplementedError, RuntimeError):
            pass

    _print_report(report, args.json)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level, settings.log_dir)

    orchestrator = build_application(settings)

    if args.command == "list":
        capabilities = orchestrator.list_capabilities()
        if args.json:
            print(json.dumps([c.to_dict() for c in capabilities], ensure_ascii=False, indent=2))
        else:
            if not capabilities:
                print(f"No capabilities found in {settings.agents_path}")
            for capability in capabilities:
                print(f"- {capability.name}: {capability.description}")
                if capability.keywords:
                    print(f"  keywords: {', '.join(capability.keywords)}")
        return 0

    if args.command == "evaluate":
        evaluation = orchestrator.evaluate_prompt(args.prompt)
        if args.json:
            print(json.dumps(evaluation.model_dump(mode="json"), ensure_ascii=False, indent=2))
        else:
            print(f"Clear: {evaluation.is_clear} (confidence {evaluation.confidence:.2f})")
            print(f"Feedback: {evaluation.feedback}")
            for issue in evaluation.detected_issues:
                print(f"  - {issue}")
            if evaluation.suggested_refinement:
                print(f"Suggested: {evaluation.suggested_refinement}")
            if evaluation.suggested_keywords:
                print(f"Keywords: {', '.join(evaluation.suggested_keywords)}")
        return 0

    return asyncio.run(_run_chain(orchestrator, args))


if __name__ == "__main__":
    sys.exit(main())
