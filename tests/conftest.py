"""Shared fixtures: isolated environment and a scripted command runner."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, Union

import pytest

from adapters.stellar_cli import StellarCLI
from core.interfaces.runner import CommandResult

Response = Union[str, Exception, Callable[[list[str], Optional[Path]], str]]


class FakeRunner:
    """`CommandRunner` that records calls and answers from a script.

    Responses are keyed by the argument prefix after the binary name, e.g.
    `("contract", "deploy")`. The longest matching prefix wins; unmatched
    commands succeed with empty output.
    """

    def __init__(self, responses: dict[tuple[str, ...], Response] | None = None, *, installed: bool = True) -> None:
        self.responses: dict[tuple[str, ...], Response] = dict(responses or {})
        self.installed = installed
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []

    def which(self, program: str) -> str | None:
        return f"/usr/local/bin/{program}" if self.installed else None

    def run(self, args: Sequence[str], *, cwd: Path | None = None) -> CommandResult:
        argv = [str(a) for a in args]
        self.calls.append(argv)
        self.cwds.append(cwd)

        response: Response = ""
        best = -1
        for prefix, candidate in self.responses.items():
            if tuple(argv[1 : 1 + len(prefix)]) == prefix and len(prefix) > best:
                response, best = candidate, len(prefix)

        if isinstance(response, Exception):
            raise response
        stdout = response(argv, cwd) if callable(response) else response
        return CommandResult(args=tuple(argv), returncode=0, stdout=stdout, stderr="")

    def subcommands(self) -> list[tuple[str, ...]]:
        """First two arguments after the binary, for asserting call order."""

        return [tuple(call[1:3]) for call in self.calls]


def write_wasm(argv: list[str], cwd: Path | None) -> str:
    """Simulate `stellar contract build`: create <out-dir>/<package>.wasm."""

    out_dir = Path(argv[argv.index("--out-dir") + 1])
    package = argv[argv.index("--package") + 1]
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / f"{package}.wasm").write_bytes(b"\0asm")
    return ""


DEPLOYER = "GDEPLOYERADDRESSXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX"
CONTRACT_ID = "CCONTRACTIDXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX"


def happy_responses(*, networks: str = "local\nfuturenet\n") -> dict[tuple[str, ...], Response]:
    return {
        ("network", "ls"): networks,
        ("keys", "address"): DEPLOYER + "\n",
        ("contract", "build"): write_wasm,
        ("contract", "deploy"): CONTRACT_ID + "\n",
    }


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test in a temp cwd without operator env vars leaking in."""

    for name in ("SOURCE_ACCOUNT", "TOKEN_ADDRESS"):
        monkeypatch.delenv(name, raising=False)

    for name in list(os.environ):
        if name.upper().startswith("VAULT_DEPLOY_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner(happy_responses())


@pytest.fixture
def stellar(fake_runner: FakeRunner) -> StellarCLI:
    return StellarCLI(fake_runner)
