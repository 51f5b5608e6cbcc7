"""Soroban JSON-RPC probes used by `doctor`.

Only read-only methods (`getHealth`, `getNetwork`) are called; deployment
itself always goes through the Stellar CLI.
"""

from __future__ import annotations

from itertools import count
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings

_ids = count(1)


class RpcError(Exception):
    """JSON-RPC error object or malformed response."""

    def __init__(self, method: str, message: str, code: int | None = None) -> None:
        super().__init__(f"{method}: {message}" + (f" (code {code})" if code is not None else ""))
        self.method = method
        self.code = code


async def rpc_call(
    client: httpx.AsyncClient,
    url: str,
    method: str,
    params: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"jsonrpc": "2.0", "id": next(_ids), "method": method}
    if params is not None:
        payload["params"] = params

    response = await client.post(url, json=payload)
    response.raise_for_status()
    body = response.json()

    if not isinstance(body, dict):
        raise RpcError(method, "response is not a JSON object")
    error = body.get("error")
    if error:
        if isinstance(error, dict):
            raise RpcError(method, str(error.get("message") or error), error.get("code"))
        raise RpcError(method, str(error))
    result = body.get("result")
    if not isinstance(result, dict):
        raise RpcError(method, "missing result")
    return result


async def get_health(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Return the `getHealth` result (`status`, `latestLedger`, ...)."""

    async with build_async_client(settings, transport=transport) as client:
        return await rpc_call(client, settings.rpc_url, "getHealth")


async def get_network(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Return the `getNetwork` result (`passphrase`, `protocolVersion`, ...)."""

    async with build_async_client(settings, transport=transport) as client:
        return await rpc_call(client, settings.rpc_url, "getNetwork")
