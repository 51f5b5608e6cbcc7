"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation of the vault terms before any transaction is sent.
- Stable serialization of deployment records for the JSON ledger.

Note:
- These models describe *what* gets deployed, not *how* the CLI does it.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

TESTNET_NAME = "testnet"
TESTNET_RPC_URL = "https://soroban-testnet.stellar.org"
TESTNET_PASSPHRASE = "Test SDF Network ; September 2015"

BASIS_POINTS = 10_000

DAY_SECONDS = 86_400

# 10% early withdrawal, 25% emergency withdrawal.
DEFAULT_EARLY_WITHDRAW_PENALTY_BPS = 1000
DEFAULT_EMERGENCY_PENALTY_BPS = 2500
# 7d, 30d, 90d.
DEFAULT_LOCK_PERIODS: tuple[int, ...] = (604_800, 2_592_000, 7_776_000)
DEFAULT_BONUS_BPS: tuple[int, ...] = (500, 1200, 2500)


def _array_literal(values: Sequence[int]) -> str:
    """Render `[1,2,3]`, the literal form the contract CLI parses for Vec args."""

    return json.dumps(list(values), separators=(",", ":"))


class NetworkProfile(BaseModel):
    """A named network entry as registered in the Stellar CLI."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Network alias (e.g. 'testnet').")
    rpc_url: str = Field(..., min_length=8, description="Soroban RPC endpoint.")
    passphrase: str = Field(..., min_length=1, description="Network passphrase.")

    @classmethod
    def testnet(cls) -> "NetworkProfile":
        return cls(name=TESTNET_NAME, rpc_url=TESTNET_RPC_URL, passphrase=TESTNET_PASSPHRASE)


class LockOption(BaseModel):
    """One lock tier: a period and the bonus paid when it is honoured."""

    model_config = ConfigDict(frozen=True)

    period_seconds: int = Field(..., gt=0)
    bonus_bps: int = Field(..., ge=0)

    @property
    def days(self) -> float:
        return self.period_seconds / DAY_SECONDS


class VaultTerms(BaseModel):
    """Arguments of the vault's `initialize` call.

    The defaults are the terms every deployment is initialized with. The
    validation rules match the contract's own preconditions, so an invalid
    set fails locally instead of after the contract has been deployed.
    """

    model_config = ConfigDict(frozen=True)

    early_withdraw_penalty_bps: int = Field(
        default=DEFAULT_EARLY_WITHDRAW_PENALTY_BPS,
        ge=0,
        le=BASIS_POINTS,
        description="Penalty for withdrawing before maturity.",
    )
    emergency_penalty_bps: int = Field(
        default=DEFAULT_EMERGENCY_PENALTY_BPS,
        ge=0,
        le=BASIS_POINTS,
        description="Penalty for withdrawing through the emergency unlock.",
    )
    lock_periods: list[int] = Field(
        default_factory=lambda: list(DEFAULT_LOCK_PERIODS),
        min_length=1,
        description="Lock durations in seconds.",
    )
    bonus_bps: list[int] = Field(
        default_factory=lambda: list(DEFAULT_BONUS_BPS),
        min_length=1,
        description="Bonus per lock period, index-aligned with lock_periods.",
    )

    @field_validator("lock_periods")
    @classmethod
    def _positive_periods(cls, value: list[int]) -> list[int]:
        if any(period <= 0 for period in value):
            raise ValueError("lock periods must be positive")
        return value

    @field_validator("bonus_bps")
    @classmethod
    def _non_negative_bonus(cls, value: list[int]) -> list[int]:
        if any(bonus < 0 for bonus in value):
            raise ValueError("bonus bps must not be negative")
        return value

    @model_validator(mode="after")
    def _aligned_options(self) -> "VaultTerms":
        if len(self.lock_periods) != len(self.bonus_bps):
            raise ValueError(
                f"lock_periods ({len(self.lock_periods)}) and bonus_bps "
                f"({len(self.bonus_bps)}) must have the same length"
            )
        return self

    def lock_options(self) -> list[LockOption]:
        return [
            LockOption(period_seconds=period, bonus_bps=bonus)
            for period, bonus in zip(self.lock_periods, self.bonus_bps)
        ]

    def invoke_arguments(self, *, admin: str, token: str) -> list[str]:
        """Build the argument list passed after `-- initialize`."""

        return [
            "--admin",
            admin,
            "--token",
            token,
            "--early-withdraw-penalty-bps",
            str(self.early_withdraw_penalty_bps),
            "--emergency-penalty-bps",
            str(self.emergency_penalty_bps),
            "--lock-periods",
            _array_literal(self.lock_periods),
            "--bonus-bps",
            _array_literal(self.bonus_bps),
        ]


class OperatorInputs(BaseModel):
    """Values the operator supplies: signing identity and vault token."""

    source_account: str = Field(..., min_length=1)
    token_address: str = Field(..., min_length=1)

    @field_validator("source_account", "token_address", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class DeploymentRecord(BaseModel):
    """Result of one build → deploy → initialize run."""

    contract_id: str = Field(..., min_length=1)
    deployer_address: str = Field(..., min_length=1)
    source_account: str = Field(..., min_length=1)
    token_address: str = Field(..., min_length=1)
    network: str = Field(..., min_length=1)
    rpc_url: str
    package: str
    wasm_path: str
    terms: VaultTerms
    network_added: bool = Field(
        default=False,
        description="True when this run registered the network profile.",
    )
    deployed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ledger_key(self) -> str:
        return f"{self.package}-{self.network}"
