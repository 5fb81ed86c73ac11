"""Blocking invocation of external tools (helm, diff, patch)."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from helm_vendor.config.settings import settings
from helm_vendor.core.errors import ToolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


class ToolRunner(ABC):
    """Runs a command to completion and reports its exit status and output.

    A non-zero exit status is returned, not raised: callers decide which
    statuses mean success for the tool they invoked. Only a failure to run
    at all raises ToolError.
    """

    @abstractmethod
    def run(self, args: Sequence[str], cwd: Path | None = None) -> ToolResult:
        pass


class SubprocessToolRunner(ToolRunner):
    def __init__(self, timeout: float | None = None):
        self.timeout = timeout if timeout is not None else settings.tool_timeout

    def run(self, args: Sequence[str], cwd: Path | None = None) -> ToolResult:
        cmd = [str(a) for a in args]
        logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd or ".")
        try:
            proc = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ToolError(f"timed out after {self.timeout}s", command=cmd) from e
        except OSError as e:
            raise ToolError(f"unable to run {cmd[0]}: {e}", command=cmd) from e
        logger.debug("%s exited with status %d", cmd[0], proc.returncode)
        return ToolResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def default_runner() -> ToolRunner:
    return SubprocessToolRunner()
