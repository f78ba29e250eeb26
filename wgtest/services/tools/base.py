from __future__ import annotations

"""wgtest/services/tools/base.py

Shared utilities for running the external network tools.

This module provides:

- ToolSettings: per-tool runtime configuration (timeouts, env)
- ToolResult: structured result for a single command invocation
- run_command: low-level helper that executes a command and captures its
  combined stdout/stderr text
- detect_tool_version: small helper for binaries that support --version

The WireGuard adapter (wireguard_tool) builds on top of these helpers.
"""

import logging
import os
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Dict, List

logger = logging.getLogger(__name__)


@dataclass
class ToolSettings:
    """Per-tool runtime settings."""

    timeout_seconds: int | None = None
    env: Dict[str, str] = field(default_factory=dict)


@dataclass
class ToolResult:
    """Result of a single command invocation.

    `output` holds stdout and stderr interleaved in the order the process
    wrote them, the way a shell `2>&1` capture would.
    """

    success: bool
    output: str
    error: str | None = None
    return_code: int | None = None
    command: list[str] | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration_seconds: float | None = None
    failure_reason: str | None = None

    @property
    def text(self) -> str:
        """Captured output, falling back to the runner-level error."""
        if self.output:
            return self.output
        return self.error or ""


def run_command(
    cmd: List[str],
    *,
    timeout: int | None = None,
    env: dict[str, str] | None = None,
) -> ToolResult:
    """Run a command to completion and capture its combined output.

    Never raises for process-level problems: a timeout or a spawn error
    is reported through `failure_reason` with `return_code=None`.
    """
    environment = os.environ.copy()
    environment.update(env or {})

    logger.debug("running: %s", " ".join(cmd))
    started_at = datetime.utcnow()
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
            env=environment,
        )
        finished_at = datetime.utcnow()
        return ToolResult(
            success=proc.returncode == 0,
            output=proc.stdout or "",
            return_code=proc.returncode,
            command=cmd,
            started_at=started_at,
            finished_at=finished_at,
            duration_seconds=(finished_at - started_at).total_seconds(),
        )
    except subprocess.TimeoutExpired as exc:
        finished_at = datetime.utcnow()
        partial = exc.output or ""
        if isinstance(partial, bytes):
            partial = partial.decode("utf-8", errors="replace")
        return ToolResult(
            success=False,
            output=partial,
            error=f"timed out after {timeout}s",
            return_code=None,
            command=cmd,
            started_at=started_at,
            finished_at=finished_at,
            duration_seconds=(finished_at - started_at).total_seconds(),
            failure_reason="timeout",
        )
    except OSError as exc:
        finished_at = datetime.utcnow()
        return ToolResult(
            success=False,
            output="",
            error=str(exc),
            return_code=None,
            command=cmd,
            started_at=started_at,
            finished_at=finished_at,
            duration_seconds=(finished_at - started_at).total_seconds(),
            failure_reason="process-spawn-error",
        )


@lru_cache(maxsize=32)
def detect_tool_version(binary: str) -> str | None:
    """Best-effort version detection for binaries that support --version."""
    try:
        proc = subprocess.run(
            [binary, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
        output = (proc.stdout or proc.stderr or "").strip()
        return output.splitlines()[0] if output else None
    except (OSError, subprocess.TimeoutExpired):
        return None
