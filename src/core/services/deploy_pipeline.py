"""Reward vault deployment orchestration.

The workflow is strictly sequential and fail-fast: the first failing step
raises and nothing after it runs. The CLI delegates everything except
printing to this module, which keeps the sequence reusable from tests and
other entry points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from adapters.stellar_cli import StellarCLI
from core.domain.errors import ArtifactNotFoundError, DeployError, MissingInputError, PartialDeploymentError
from core.domain.models import DeploymentRecord, NetworkProfile, OperatorInputs, VaultTerms

log = logging.getLogger(__name__)

INITIALIZE_FUNCTION = "initialize"


@dataclass
class DeployRequest:
    """Parameters of one deployment run."""

    inputs: OperatorInputs
    network: NetworkProfile = field(default_factory=NetworkProfile.testnet)
    package: str = "reward_vault"
    build_profile: str = "release"
    project_root: Path = field(default_factory=Path.cwd)
    artifacts_dir: Path = Path(".stellar-artifacts")
    terms: VaultTerms = field(default_factory=VaultTerms)
    skip_build: bool = False

    @property
    def out_dir(self) -> Path:
        if self.artifacts_dir.is_absolute():
            return self.artifacts_dir
        return self.project_root / self.artifacts_dir

    @property
    def wasm_path(self) -> Path:
        return self.out_dir / f"{self.package}.wasm"


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    status: Callable[[str], None] | None = None
    success: Callable[[str], None] | None = None
    before_initialize: Callable[[VaultTerms], None] | None = None

    def emit_status(self, message: str) -> None:
        log.info(message)
        if self.status:
            self.status(message)

    def emit_success(self, message: str) -> None:
        log.info(message)
        if self.success:
            self.success(message)


def resolve_inputs(
    source_account: str | None,
    token_address: str | None,
    *,
    prompt: Callable[[str], str] | None = None,
) -> OperatorInputs:
    """Fill missing inputs through `prompt`, then require both non-empty.

    Both values are asked for before validating, so the operator sees every
    prompt even when the first answer is empty. Whitespace-only values count
    as missing.
    """

    source = (source_account or "").strip()
    token = (token_address or "").strip()

    if not source and prompt is not None:
        source = (prompt("Enter SOURCE_ACCOUNT") or "").strip()
    if not token and prompt is not None:
        token = (prompt("Enter TOKEN_ADDRESS used by vault") or "").strip()

    if not source or not token:
        raise MissingInputError(["SOURCE_ACCOUNT", "TOKEN_ADDRESS"])
    return OperatorInputs(source_account=source, token_address=token)


def deploy_vault(
    *,
    cli: StellarCLI,
    request: DeployRequest,
    hooks: PipelineHooks | None = None,
) -> DeploymentRecord:
    """Register network, resolve deployer, build, deploy and initialize.

    Raises:
        DeployError: on the first failing step. A failure after the contract
            was deployed is wrapped in `PartialDeploymentError`.
    """

    hooks = hooks or PipelineHooks()
    source = request.inputs.source_account
    network = request.network

    hooks.emit_status(f"Checking {network.name} network configuration...")
    added = cli.ensure_network(network)
    hooks.emit_success("Network is ready")

    deployer = cli.key_address(source)
    hooks.emit_status(f"Deployer address: {deployer}")

    wasm = request.wasm_path
    if request.skip_build:
        hooks.emit_status(f"Skipping build, using {wasm}")
    else:
        hooks.emit_status(f"Building {request.package} wasm...")
        cli.build_contract(
            package=request.package,
            profile=request.build_profile,
            out_dir=request.out_dir,
            cwd=request.project_root,
        )
        hooks.emit_success("Build complete")
    if not wasm.is_file():
        raise ArtifactNotFoundError(f"wasm artifact not found at {wasm}")

    hooks.emit_status(f"Deploying {request.package}...")
    contract_id = cli.deploy_contract(wasm=wasm, source=source, network=network.name)
    hooks.emit_success(f"Deployed: {contract_id}")

    hooks.emit_status("Initializing contract...")
    if hooks.before_initialize:
        hooks.before_initialize(request.terms)
    try:
        cli.invoke(
            contract_id=contract_id,
            source=source,
            network=network.name,
            function=INITIALIZE_FUNCTION,
            arguments=request.terms.invoke_arguments(
                admin=deployer,
                token=request.inputs.token_address,
            ),
        )
    except DeployError as exc:
        raise PartialDeploymentError(contract_id, exc) from exc
    hooks.emit_success("Reward vault initialized")

    return DeploymentRecord(
        contract_id=contract_id,
        deployer_address=deployer,
        source_account=source,
        token_address=request.inputs.token_address,
        network=network.name,
        rpc_url=network.rpc_url,
        package=request.package,
        wasm_path=str(wasm),
        terms=request.terms,
        network_added=added,
    )
