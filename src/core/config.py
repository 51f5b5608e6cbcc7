"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (stellar CLI, RPC) read the same configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import (
    TESTNET_NAME,
    TESTNET_PASSPHRASE,
    TESTNET_RPC_URL,
    NetworkProfile,
)


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "vault-deploy"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "vault-deploy"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "vault-deploy"
    return Path.home() / ".config" / "vault-deploy"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the per-user .env file."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# vault-deploy user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    `SOURCE_ACCOUNT` and `TOKEN_ADDRESS` are also read without the prefix,
    since operators already export them under those names.
    """

    model_config = SettingsConfigDict(
        env_prefix="VAULT_DEPLOY_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Project .env first (dev), then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    source_account: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SOURCE_ACCOUNT", "VAULT_DEPLOY_SOURCE_ACCOUNT"),
        description="Stellar CLI identity (or secret/public key) that signs and pays.",
    )
    token_address: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TOKEN_ADDRESS", "VAULT_DEPLOY_TOKEN_ADDRESS"),
        description="Token contract address held by the vault.",
    )

    stellar_bin: str = Field(
        default="stellar",
        min_length=1,
        description="Executable name or path of the Stellar CLI.",
    )
    network_name: str = Field(default=TESTNET_NAME, min_length=1)
    rpc_url: str = Field(default=TESTNET_RPC_URL, min_length=8)
    network_passphrase: str = Field(default=TESTNET_PASSPHRASE, min_length=1)

    contract_package: str = Field(
        default="reward_vault",
        min_length=1,
        description="Cargo package built and deployed.",
    )
    build_profile: str = Field(default="release", min_length=1)
    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Workspace root where `stellar contract build` runs.",
    )
    artifacts_dir: Path = Field(
        default=Path(".stellar-artifacts"),
        description="Wasm output directory, relative to project_root unless absolute.",
    )

    command_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout per stellar invocation (seconds). None waits forever.",
    )
    http_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Timeout for RPC diagnostics (seconds).",
    )
    deployments_file: Path | None = Field(
        default=None,
        description="JSON ledger updated after each successful deployment.",
    )

    def network_profile(self) -> NetworkProfile:
        return NetworkProfile(
            name=self.network_name,
            rpc_url=self.rpc_url,
            passphrase=self.network_passphrase,
        )

    def resolved_artifacts_dir(self) -> Path:
        if self.artifacts_dir.is_absolute():
            return self.artifacts_dir
        return self.project_root / self.artifacts_dir

    def wasm_path(self) -> Path:
        return self.resolved_artifacts_dir() / f"{self.contract_package}.wasm"
