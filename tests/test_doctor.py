"""
Tests for `doctor run` and `doctor setup`.
"""

from __future__ import annotations

import pytest
from rich.console import Console
from typer.testing import CliRunner

import cli.doctor as doctor
from adapters.stellar_cli import StellarCLI
from cli.main import app
from conftest import DEPLOYER, FakeRunner, happy_responses
from core.config import get_user_env_file

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(doctor, "_console", Console(width=200))


@pytest.fixture
def rpc_ok(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _health(settings):
        return {"status": "healthy", "latestLedger": 42}

    async def _network(settings):
        return {"passphrase": settings.network_passphrase}

    monkeypatch.setattr(doctor, "get_health", _health)
    monkeypatch.setattr(doctor, "get_network", _network)


def _use(monkeypatch: pytest.MonkeyPatch, fake: FakeRunner) -> FakeRunner:
    monkeypatch.setattr(doctor, "build_stellar_cli", lambda settings: StellarCLI(fake))
    return fake


def test_doctor_reports_healthy_environment(monkeypatch: pytest.MonkeyPatch, rpc_ok) -> None:
    responses = happy_responses(networks="testnet\n")
    responses[("--version",)] = "stellar 22.0.1\n"
    _use(monkeypatch, FakeRunner(responses))
    monkeypatch.setenv("SOURCE_ACCOUNT", "alice")

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "stellar 22.0.1" in result.output
    assert DEPLOYER[:10] in result.output
    assert "FAIL" not in result.output


def test_doctor_flags_missing_cli(monkeypatch: pytest.MonkeyPatch, rpc_ok) -> None:
    fake = _use(monkeypatch, FakeRunner(installed=False))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "FAIL" in result.output
    assert "Install the Stellar CLI" in result.output
    assert fake.calls == []


def test_doctor_flags_unreachable_rpc(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _down(settings):
        raise OSError("connection refused")

    monkeypatch.setattr(doctor, "get_health", _down)
    _use(monkeypatch, FakeRunner(happy_responses(networks="testnet\n")))

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "connection refused" in result.output


def test_setup_writes_user_env() -> None:
    result = runner.invoke(app, ["doctor", "setup"], input="alice\nCTOKEN\n")

    assert result.exit_code == 0, result.output
    content = get_user_env_file().read_text(encoding="utf-8")
    assert "SOURCE_ACCOUNT=alice" in content
    assert "TOKEN_ADDRESS=CTOKEN" in content
