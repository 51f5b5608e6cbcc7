"""Adapter over the `stellar` command-line tool.

Each method maps to exactly one CLI invocation. Output parsing is kept to
the minimum the workflow needs: identifiers are read from stdout, stripped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from adapters.subprocess_runner import SubprocessRunner
from core.config import AppSettings
from core.domain.errors import CommandFailedError, ToolNotFoundError
from core.domain.models import NetworkProfile
from core.interfaces.runner import CommandRunner

log = logging.getLogger(__name__)


class StellarCLI:
    """Thin typed facade over `stellar` subcommands."""

    def __init__(self, runner: CommandRunner, *, binary: str = "stellar") -> None:
        self._runner = runner
        self._binary = binary

    @property
    def binary(self) -> str:
        return self._binary

    def _run(self, *args: str, cwd: Path | None = None) -> str:
        return self._runner.run([self._binary, *args], cwd=cwd).stdout

    def _single_value(self, *args: str, what: str) -> str:
        argv = [self._binary, *args]
        result = self._runner.run(argv)
        value = result.stdout.strip()
        if not value:
            raise CommandFailedError(
                argv,
                result.returncode,
                result.stdout,
                result.stderr,
                reason=f"no {what} on stdout",
            )
        return value

    def is_installed(self) -> bool:
        return self._runner.which(self._binary) is not None

    def ensure_installed(self) -> str:
        path = self._runner.which(self._binary)
        if path is None:
            raise ToolNotFoundError(self._binary)
        return path

    def version(self) -> str:
        out = self._run("--version").strip()
        return out.splitlines()[0] if out else ""

    def list_networks(self) -> list[str]:
        names: list[str] = []
        for line in self._run("network", "ls").splitlines():
            parts = line.split()
            if parts:
                names.append(parts[0])
        return names

    def add_network(self, profile: NetworkProfile) -> None:
        self._run(
            "network",
            "add",
            profile.name,
            "--rpc-url",
            profile.rpc_url,
            "--network-passphrase",
            profile.passphrase,
        )

    def ensure_network(self, profile: NetworkProfile) -> bool:
        """Register `profile` unless an entry with the same name exists.

        Returns True when the network was added by this call.
        """

        if profile.name in self.list_networks():
            log.debug("Network %s already registered", profile.name)
            return False
        log.info("Registering network %s (%s)", profile.name, profile.rpc_url)
        self.add_network(profile)
        return True

    def key_address(self, identity: str) -> str:
        return self._single_value("keys", "address", identity, what="address")

    def build_contract(
        self,
        *,
        package: str,
        profile: str,
        out_dir: Path,
        cwd: Path | None = None,
    ) -> None:
        self._run(
            "contract",
            "build",
            "--package",
            package,
            "--profile",
            profile,
            "--out-dir",
            str(out_dir),
            cwd=cwd,
        )

    def deploy_contract(self, *, wasm: Path, source: str, network: str) -> str:
        return self._single_value(
            "contract",
            "deploy",
            "--wasm",
            str(wasm),
            "--source",
            source,
            "--network",
            network,
            what="contract id",
        )

    def invoke(
        self,
        *,
        contract_id: str,
        source: str,
        network: str,
        function: str,
        arguments: Sequence[str] = (),
    ) -> str:
        return self._run(
            "contract",
            "invoke",
            "--id",
            contract_id,
            "--source",
            source,
            "--network",
            network,
            "--",
            function,
            *arguments,
        ).strip()


def build_stellar_cli(settings: AppSettings) -> StellarCLI:
    """StellarCLI backed by a real subprocess runner, configured from settings."""

    runner = SubprocessRunner(timeout_seconds=settings.command_timeout_seconds)
    return StellarCLI(runner, binary=settings.stellar_bin)
