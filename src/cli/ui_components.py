"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets `deploy` and `doctor` share the same status lines and tables.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BASIS_POINTS, DeploymentRecord, VaultTerms


def print_status(console: Console, message: str) -> None:
    console.print(Text.assemble(("➜", "blue"), " ", message), soft_wrap=True)


def print_success(console: Console, message: str) -> None:
    console.print(Text.assemble(("✓", "green"), " ", message), soft_wrap=True)


def print_warning(console: Console, message: str) -> None:
    console.print(Text(message, style="yellow"), soft_wrap=True)


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("✗", "bold red"), " ", message), soft_wrap=True)


def _percent(bps: int) -> str:
    return f"{bps * 100 / BASIS_POINTS:g}%"


def build_terms_table(terms: VaultTerms) -> Table:
    """Table of the terms passed to `initialize`."""

    table = Table(title="Vault terms")
    table.add_column("Lock period", style="cyan", no_wrap=True)
    table.add_column("Seconds", style="white", justify="right")
    table.add_column("Bonus", style="green", justify="right")
    for option in terms.lock_options():
        table.add_row(
            f"{option.days:g}d",
            str(option.period_seconds),
            f"{option.bonus_bps} bps ({_percent(option.bonus_bps)})",
        )
    table.caption = (
        f"Early withdrawal penalty {terms.early_withdraw_penalty_bps} bps "
        f"({_percent(terms.early_withdraw_penalty_bps)}) · "
        f"emergency penalty {terms.emergency_penalty_bps} bps "
        f"({_percent(terms.emergency_penalty_bps)})"
    )
    return table


def build_deployment_panel(record: DeploymentRecord) -> Panel:
    """Summary panel shown after a successful deployment."""

    body = Text()
    body.append("Contract  ", style="bold")
    body.append(record.contract_id + "\n")
    body.append("Admin     ", style="bold")
    body.append(record.deployer_address + "\n")
    body.append("Token     ", style="bold")
    body.append(record.token_address + "\n")
    body.append("Network   ", style="bold")
    body.append(f"{record.network} ({record.rpc_url})")
    if record.network_added:
        body.append("\nNetwork profile registered by this run", style="dim")

    return Panel(body, title=Text(record.package, style="bold green"), border_style="green")
