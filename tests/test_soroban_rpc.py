"""
Tests for the Soroban RPC probes using httpx.MockTransport.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from adapters.soroban_rpc import RpcError, get_health, get_network
from core.config import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


def _transport(result: dict | None = None, error: dict | None = None, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if seen is not None:
            seen.append(body)
        payload: dict = {"jsonrpc": "2.0", "id": body["id"]}
        if error is not None:
            payload["error"] = error
        else:
            payload["result"] = result
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


def test_get_health_posts_jsonrpc(settings: AppSettings) -> None:
    seen: list = []
    transport = _transport({"status": "healthy", "latestLedger": 123}, seen=seen)

    result = asyncio.run(get_health(settings, transport=transport))

    assert result["status"] == "healthy"
    assert seen[0]["method"] == "getHealth"
    assert seen[0]["jsonrpc"] == "2.0"


def test_get_network_returns_passphrase(settings: AppSettings) -> None:
    transport = _transport({"passphrase": "Test SDF Network ; September 2015", "protocolVersion": 22})

    result = asyncio.run(get_network(settings, transport=transport))

    assert result["passphrase"] == settings.network_passphrase


def test_jsonrpc_error_raises(settings: AppSettings) -> None:
    transport = _transport(error={"code": -32601, "message": "method not found"})

    with pytest.raises(RpcError) as info:
        asyncio.run(get_health(settings, transport=transport))
    assert info.value.code == -32601
    assert "method not found" in str(info.value)


def test_http_error_raises(settings: AppSettings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(get_health(settings, transport=transport))
