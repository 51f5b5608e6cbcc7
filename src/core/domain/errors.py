"""Deployment failures.

Only the CLI layer turns these into messages and exit codes; adapters and
services just raise them.
"""

from __future__ import annotations

from collections.abc import Sequence


class DeployError(Exception):
    """Base class for every failure of the deployment workflow."""


class ToolNotFoundError(DeployError):
    """The external executable is not installed or not on PATH."""

    def __init__(self, program: str) -> None:
        super().__init__(f"{program} not found on PATH")
        self.program = program


class MissingInputError(DeployError):
    """A required operator input is empty."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__("Missing " + " or ".join(self.names) + ".")


class CommandFailedError(DeployError):
    """An external command exited non-zero or timed out."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
        *,
        reason: str | None = None,
    ) -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = reason or f"exit status {returncode}"
        super().__init__(f"`{self.command_line}` failed ({detail})")

    @property
    def command_line(self) -> str:
        return " ".join(self.args_list)

    @property
    def exit_code(self) -> int:
        """Exit code to propagate: the command's own, or 1 when unknown."""

        if self.returncode is None or self.returncode <= 0:
            return 1
        return self.returncode


class ArtifactNotFoundError(DeployError):
    """The wasm artifact to deploy does not exist."""


class PartialDeploymentError(DeployError):
    """The contract was deployed but initializing it failed.

    Nothing is rolled back: the contract exists on-chain, uninitialized.
    """

    def __init__(self, contract_id: str, cause: DeployError) -> None:
        super().__init__(f"contract {contract_id} deployed but not initialized: {cause}")
        self.contract_id = contract_id
        self.cause = cause
