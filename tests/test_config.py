"""
Tests for AppSettings and the per-user .env helpers.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings, get_user_env_file, write_user_env_vars


def test_defaults_target_testnet() -> None:
    settings = AppSettings(_env_file=None)

    profile = settings.network_profile()
    assert profile.name == "testnet"
    assert profile.rpc_url == "https://soroban-testnet.stellar.org"
    assert settings.source_account is None
    assert settings.wasm_path() == Path.cwd() / ".stellar-artifacts" / "reward_vault.wasm"


def test_bare_operator_variables_are_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOURCE_ACCOUNT", "alice")
    monkeypatch.setenv("TOKEN_ADDRESS", "CTOKEN")

    settings = AppSettings(_env_file=None)

    assert settings.source_account == "alice"
    assert settings.token_address == "CTOKEN"


def test_prefixed_variables_are_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAULT_DEPLOY_SOURCE_ACCOUNT", "bob")
    monkeypatch.setenv("VAULT_DEPLOY_RPC_URL", "http://localhost:8000/soroban/rpc")
    monkeypatch.setenv("VAULT_DEPLOY_NETWORK_NAME", "local")

    settings = AppSettings(_env_file=None)

    assert settings.source_account == "bob"
    assert settings.network_profile().name == "local"
    assert settings.rpc_url.startswith("http://localhost")


def test_project_env_file_is_read(tmp_path: Path) -> None:
    env = tmp_path / "custom.env"
    env.write_text("SOURCE_ACCOUNT=carol\nVAULT_DEPLOY_BUILD_PROFILE=dev\n", encoding="utf-8")

    settings = AppSettings(_env_file=str(env))

    assert settings.source_account == "carol"
    assert settings.build_profile == "dev"


def test_absolute_artifacts_dir_is_kept(tmp_path: Path) -> None:
    settings = AppSettings(_env_file=None, artifacts_dir=tmp_path / "out", project_root=Path("/elsewhere"))
    assert settings.wasm_path() == tmp_path / "out" / "reward_vault.wasm"


def test_write_user_env_vars_merges(tmp_path: Path) -> None:
    env_path = get_user_env_file()
    assert str(env_path).startswith(str(tmp_path))

    write_user_env_vars({"SOURCE_ACCOUNT": "alice"})
    write_user_env_vars({"TOKEN_ADDRESS": "CTOKEN"})

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "SOURCE_ACCOUNT=alice" in lines
    assert "TOKEN_ADDRESS=CTOKEN" in lines
