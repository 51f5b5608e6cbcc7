"""vault-deploy command line.

Commands:
- `deploy`: build, deploy and initialize the reward vault.
- `doctor run` / `doctor setup`: diagnostics and stored operator inputs.

All domain errors are translated to messages and exit codes here and only
here.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_deployment_json, record_deployment
from adapters.stellar_cli import build_stellar_cli
from cli import doctor
from cli.ui_components import (
    build_deployment_panel,
    build_terms_table,
    print_error,
    print_status,
    print_success,
    print_warning,
)
from core.config import AppSettings
from core.domain.errors import (
    CommandFailedError,
    DeployError,
    MissingInputError,
    PartialDeploymentError,
    ToolNotFoundError,
)
from core.services.deploy_pipeline import DeployRequest, PipelineHooks, deploy_vault, resolve_inputs

app = typer.Typer(
    no_args_is_help=True,
    help="Build, deploy and initialize the reward vault contract on Stellar.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

TOOL_MISSING_MESSAGE = "Stellar CLI not found. Install it first."
MISSING_INPUT_MESSAGE = "Missing SOURCE_ACCOUNT or TOKEN_ADDRESS."


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _prompt(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


def _report_command_failure(console: Console, exc: CommandFailedError) -> None:
    print_error(console, str(exc))
    detail = (exc.stderr or exc.stdout).strip()
    if detail:
        console.print(detail, style="dim", markup=False, highlight=False, soft_wrap=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every stellar invocation."),
) -> None:
    _configure_logging(verbose)


@app.command()
def deploy(
    source_account: str | None = typer.Option(
        None,
        "--source-account",
        help="Identity that signs and pays. Defaults to $SOURCE_ACCOUNT.",
    ),
    token_address: str | None = typer.Option(
        None,
        "--token-address",
        help="Token held by the vault. Defaults to $TOKEN_ADDRESS.",
    ),
    no_input: bool = typer.Option(False, "--no-input", help="Never prompt for missing inputs."),
    skip_build: bool = typer.Option(
        False,
        "--skip-build",
        help="Deploy the existing wasm artifact without rebuilding.",
    ),
    record: Path | None = typer.Option(
        None,
        "--record",
        help="JSON ledger to update with the deployment.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the deployment record as JSON."),
    output: Path | None = typer.Option(
        None,
        "--output",
        help="Write this deployment record to a JSON file.",
    ),
) -> None:
    """Build, deploy and initialize the reward vault."""

    settings = AppSettings()
    # Keep stdout machine-readable in --json mode.
    console = Console(stderr=True) if as_json else _console
    stellar = build_stellar_cli(settings)

    try:
        stellar.ensure_installed()
    except ToolNotFoundError:
        print_warning(console, TOOL_MISSING_MESSAGE)
        raise typer.Exit(code=1)

    try:
        inputs = resolve_inputs(
            source_account or settings.source_account,
            token_address or settings.token_address,
            prompt=None if no_input else _prompt,
        )
    except MissingInputError:
        console.print(MISSING_INPUT_MESSAGE, soft_wrap=True)
        raise typer.Exit(code=1)

    request = DeployRequest(
        inputs=inputs,
        network=settings.network_profile(),
        package=settings.contract_package,
        build_profile=settings.build_profile,
        project_root=settings.project_root,
        artifacts_dir=settings.artifacts_dir,
        skip_build=skip_build,
    )
    hooks = PipelineHooks(
        status=lambda message: print_status(console, message),
        success=lambda message: print_success(console, message),
        before_initialize=lambda terms: console.print(build_terms_table(terms)),
    )

    try:
        result = deploy_vault(cli=stellar, request=request, hooks=hooks)
    except PartialDeploymentError as exc:
        if isinstance(exc.cause, CommandFailedError):
            _report_command_failure(console, exc.cause)
            code = exc.cause.exit_code
        else:
            print_error(console, str(exc.cause))
            code = 1
        print_warning(console, f"Contract {exc.contract_id} was deployed but NOT initialized.")
        raise typer.Exit(code=code)
    except ToolNotFoundError:
        print_warning(console, TOOL_MISSING_MESSAGE)
        raise typer.Exit(code=1)
    except CommandFailedError as exc:
        _report_command_failure(console, exc)
        raise typer.Exit(code=exc.exit_code)
    except DeployError as exc:
        print_error(console, str(exc))
        raise typer.Exit(code=1)

    write_failed = False
    ledger = record or settings.deployments_file
    if ledger is not None:
        try:
            path = record_deployment(record=result, ledger_path=ledger)
        except (OSError, ValueError) as exc:
            print_error(console, f"Could not update deployment ledger {ledger}: {exc}")
            write_failed = True
        else:
            print_success(console, f"Recorded in {path}")

    if output is not None:
        try:
            path = export_deployment_json(record=result, output_path=output)
        except OSError as exc:
            print_error(console, f"Could not write deployment record {output}: {exc}")
            write_failed = True
        else:
            print_success(console, f"Record written to {path}")

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        console.print(build_deployment_panel(result))
        typer.echo(f"Contract ID: {result.contract_id}")

    # The contract is live either way; signal the bookkeeping failure last.
    if write_failed:
        raise typer.Exit(code=1)


def run() -> None:
    app()
