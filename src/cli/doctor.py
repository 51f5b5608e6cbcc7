"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.soroban_rpc import get_health, get_network
from adapters.stellar_cli import build_stellar_cli
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import DeployError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_rpc(settings: AppSettings) -> tuple[tuple[bool, str], tuple[bool, str]]:
    try:
        health = await get_health(settings)
    except Exception as exc:
        return (False, str(exc)), (False, "skipped (RPC unreachable)")
    status = str(health.get("status", "unknown"))
    ledger = health.get("latestLedger")
    health_row = (status == "healthy", f"{status}, latest ledger {ledger}" if ledger else status)

    try:
        network = await get_network(settings)
    except Exception as exc:
        return health_row, (False, str(exc))
    passphrase = network.get("passphrase")
    if passphrase == settings.network_passphrase:
        return health_row, (True, str(passphrase))
    return health_row, (False, f"RPC reports {passphrase!r}, configured {settings.network_passphrase!r}")


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    stellar = build_stellar_cli(settings)

    table = Table(title="vault-deploy doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    installed = stellar.is_installed()
    if installed:
        try:
            table.add_row("Stellar CLI", "OK", stellar.version() or settings.stellar_bin)
        except DeployError as exc:
            table.add_row("Stellar CLI", "FAIL", str(exc))
            installed = False
    else:
        table.add_row("Stellar CLI", "FAIL", f"{settings.stellar_bin} not on PATH")

    if installed:
        try:
            registered = settings.network_name in stellar.list_networks()
            table.add_row(
                "Network profile",
                "OK" if registered else "MISSING",
                settings.network_name if registered else "Will be added by `deploy`",
            )
        except DeployError as exc:
            table.add_row("Network profile", "FAIL", str(exc))

    (ok_health, detail_health), (ok_pass, detail_pass) = asyncio.run(_check_rpc(settings))
    table.add_row("RPC health", "OK" if ok_health else "FAIL", f"{settings.rpc_url}: {detail_health}")
    table.add_row("RPC passphrase", "OK" if ok_pass else "FAIL", detail_pass)

    if not settings.source_account:
        table.add_row("SOURCE_ACCOUNT", "MISSING", "Will be prompted by `deploy`")
    elif installed:
        try:
            table.add_row("SOURCE_ACCOUNT", "OK", stellar.key_address(settings.source_account))
        except DeployError as exc:
            table.add_row("SOURCE_ACCOUNT", "FAIL", str(exc))
    else:
        table.add_row("SOURCE_ACCOUNT", "OK", settings.source_account)

    if settings.token_address:
        table.add_row("TOKEN_ADDRESS", "OK", settings.token_address)
    else:
        table.add_row("TOKEN_ADDRESS", "MISSING", "Will be prompted by `deploy`")

    wasm = settings.wasm_path()
    table.add_row(
        "Wasm artifact",
        "OK" if wasm.is_file() else "OPTIONAL",
        str(wasm) if wasm.is_file() else f"{wasm} (built by `deploy`)",
    )

    _console.print(table)

    if not installed:
        _console.print(
            "\n[yellow]Note:[/yellow] Install the Stellar CLI "
            "(`cargo install --locked stellar-cli`) before running `deploy`."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores SOURCE_ACCOUNT and TOKEN_ADDRESS in the user config .env)."""

    settings = AppSettings()

    source = typer.prompt(
        "SOURCE_ACCOUNT",
        default=settings.source_account or "",
        show_default=bool(settings.source_account),
    ).strip()
    token = typer.prompt(
        "TOKEN_ADDRESS",
        default=settings.token_address or "",
        show_default=bool(settings.token_address),
    ).strip()

    if not source or not token:
        raise typer.BadParameter("SOURCE_ACCOUNT and TOKEN_ADDRESS are required")

    env_path = write_user_env_vars({"SOURCE_ACCOUNT": source, "TOKEN_ADDRESS": token})

    _console.print(f"[green]Saved config to:[/green] {env_path}")
