"""Command execution contract.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- The real subprocess runner and the test fakes are interchangeable, so the
  whole workflow can be exercised without the Stellar CLI installed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one finished command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""


@runtime_checkable
class CommandRunner(Protocol):
    """Minimal contract for running external tools.

    Rules:
    - `run` raises `CommandFailedError` on a non-zero exit instead of
      returning it, so callers are fail-fast by default.
    - `which` never raises; it returns None when the program is absent.
    """

    def which(self, program: str) -> str | None:
        ...

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        """Run `args` and return the captured result."""

        ...
