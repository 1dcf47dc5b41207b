"""Invoke capabilities through the Copilot CLI.

Each invocation runs ``copilot --agent=<name> --prompt=<prompt>`` as a
subprocess, captures stdout/stderr and returns a structured outcome.

Outcome rules:
- exit code 0 with output → success, output is stdout (a JSON string literal
  is unwrapped, anything else is kept as trimmed text)
- exit code 0 without output → failed, "produced no output"
- non-zero exit code → failed, error is stderr (or the exit status)
- timeout → failed with status 124, retried up to ``retries`` times
- binary cannot be launched → ``CollaboratorError`` (nothing was attempted)
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import List, Optional, Tuple

from chainAgent.utils.errors import CollaboratorError

from .interfaces import InvocationOutcome

LOGGER = logging.getLogger(__name__)

TIMEOUT_STATUS = 124


class CopilotCliInvoker:
    """Runs capabilities as Copilot CLI subprocesses.

    Args:
        binary: CLI executable name or path
        timeout: Seconds allowed per attempt
        retries: Extra attempts after a timed-out attempt
    """

    def __init__(self, binary: str = "copilot", timeout: float = 300.0, retries: int = 1):
        self.binary = binary
        self.timeout = timeout
        self.retries = max(retries, 0)

    async def invoke(self, name: str, prompt: str) -> InvocationOutcome:
        """Invoke capability ``name`` with ``prompt``.

        Raises:
            CollaboratorError: The CLI binary could not be launched
        """
        attempts = self.retries + 1
        outcome = None
        for attempt in range(1, attempts + 1):
            outcome, timed_out = await self._run_once(name, prompt)
            if not timed_out:
                break
            if attempt < attempts:
                LOGGER.warning(f"Capability {name} timed out (attempt {attempt}/{attempts}), retrying")

        if outcome.success:
            LOGGER.debug(f"Capability invocation succeeded: {name} ({outcome.duration_ms} ms)")
        else:
            LOGGER.warning(
                f"Capability invocation failed: {name} "
                f"(status={outcome.status_code}, error={outcome.error})"
            )
        return outcome

    async def _run_once(self, name: str, prompt: str) -> Tuple[InvocationOutcome, bool]:
        start = time.monotonic()
        stdout, stderr, returncode, timed_out = await self._exec(
            [f"--agent={name}", f"--prompt={prompt}"],
            capability_name=name,
        )
        duration_ms = int((time.monotonic() - start) * 1000)

        if timed_out:
            return InvocationOutcome(
                capability_name=name,
                success=False,
                error=f"capability invocation timed out after {self.timeout:g}s",
                status_code=TIMEOUT_STATUS,
                duration_ms=duration_ms,
            ), True

        if returncode != 0:
            return InvocationOutcome(
                capability_name=name,
                success=False,
                error=stderr.strip() or f"exit status {returncode}",
                status_code=returncode,
                duration_ms=duration_ms,
            ), False

        output = parse_output(stdout)
        if output is None:
            return InvocationOutcome(
                capability_name=name,
                success=False,
                error="capability produced no output",
                status_code=returncode,
                duration_ms=duration_ms,
            ), False

        return InvocationOutcome(
            capability_name=name,
            success=True,
            output=output,
            status_code=0,
            duration_ms=duration_ms,
        ), False

    async def _exec(
        self,
        args: List[str],
        capability_name: str,
        timeout: Optional[float] = None,
    ) -> Tuple[str, str, int, bool]:
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CollaboratorError(capability_name, f"failed to launch {self.binary!r}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout if timeout is not None else self.timeout,
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            return "", "", TIMEOUT_STATUS, True
        except asyncio.CancelledError:
            process.kill()
            raise

        return (
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
            process.returncode,
            False,
        )

    async def is_available(self) -> bool:
        """Check that the CLI binary can be launched."""
        try:
            _, _, returncode, timed_out = await self._exec(["--version"], capability_name="copilot", timeout=10)
        except CollaboratorError:
            return False
        return returncode == 0 and not timed_out

    async def check_auth(self) -> bool:
        """Check that the CLI reports an authenticated session."""
        try:
            stdout, _, returncode, timed_out = await self._exec(["auth", "status"], capability_name="copilot", timeout=10)
        except CollaboratorError:
            return False
        return returncode == 0 and not timed_out and bool(stdout.strip())


def parse_output(stdout: str) -> Optional[str]:
    """Normalize CLI stdout into capability output text.

    Returns None when there is no output at all.
    """
    text = stdout.strip()
    if not text:
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    if isinstance(parsed, str):
        return parsed
    return text


__all__ = ["CopilotCliInvoker", "parse_output", "TIMEOUT_STATUS"]
