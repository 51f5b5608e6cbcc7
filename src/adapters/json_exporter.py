"""JSON export of deployment records.

Why JSON:
- Other tooling (frontends, scripts, CI) reads contract ids from the ledger.
- Keeps a history of which package was deployed where, without a database.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import DeploymentRecord


def _dump(payload: Any, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )


def export_deployment_json(*, record: DeploymentRecord, output_path: Path) -> Path:
    """Write a single `DeploymentRecord` as UTF-8 JSON with stable formatting."""

    _dump(record.model_dump(mode="json"), output_path)
    return output_path


def record_deployment(*, record: DeploymentRecord, ledger_path: Path) -> Path:
    """Merge `record` into the ledger under `<package>-<network>`.

    Other entries are preserved; a previous deployment of the same package
    to the same network is replaced.
    """

    ledger: dict[str, Any] = {}
    if ledger_path.exists():
        loaded = json.loads(ledger_path.read_text(encoding="utf-8") or "{}")
        if not isinstance(loaded, dict):
            raise ValueError(f"{ledger_path} does not contain a JSON object")
        ledger = loaded

    ledger[record.ledger_key] = record.model_dump(mode="json")
    _dump(ledger, ledger_path)
    return ledger_path
