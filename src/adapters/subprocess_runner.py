"""subprocess wrapper.

Why a wrapper:
- Standardizes capture, timeouts and logging for every external command.
- Turns exit statuses into domain errors so callers stay fail-fast.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from core.domain.errors import CommandFailedError, ToolNotFoundError
from core.interfaces.runner import CommandResult

log = logging.getLogger(__name__)


class SubprocessRunner:
    """Runs argument vectors with `subprocess.run` (never through a shell)."""

    def __init__(self, *, timeout_seconds: float | None = None) -> None:
        self._timeout = timeout_seconds

    def which(self, program: str) -> str | None:
        return shutil.which(program)

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        argv = [str(a) for a in args]
        log.debug("Running: %s (cwd=%s)", " ".join(argv), cwd or ".")
        try:
            proc = subprocess.run(
                argv,
                cwd=str(cwd) if cwd else None,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(argv[0]) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandFailedError(
                argv,
                None,
                _as_text(exc.stdout),
                _as_text(exc.stderr),
                reason=f"timed out after {self._timeout}s",
            ) from exc

        if proc.stdout:
            log.debug("stdout: %s", proc.stdout.rstrip())
        if proc.stderr:
            log.debug("stderr: %s", proc.stderr.rstrip())

        if proc.returncode != 0:
            raise CommandFailedError(argv, proc.returncode, proc.stdout, proc.stderr)
        return CommandResult(
            args=tuple(argv),
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
