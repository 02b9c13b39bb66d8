from __future__ import annotations

import asyncio
from typing import Any, cast

import pytest
from conftest import SENDER, TEST_REGISTRY, make_context, make_web3

from strike_api.context import StrikeContext
from strike_api.eth import Connection
from strike_api.exceptions import ValidationError
from strike_api.types import CallOptions


def _unresolved_context(version: str) -> tuple[StrikeContext, Any]:
    web3 = make_web3(version=version)
    return StrikeContext(Connection(web3=cast(Any, web3)), TEST_REGISTRY), web3


def test_concurrent_callers_share_one_resolution() -> None:
    context, web3 = _unresolved_context("1")

    async def run() -> list[Any]:
        return await asyncio.gather(*(context.ensure_network() for _ in range(5)))

    networks = asyncio.run(run())

    assert web3.net.queries == 1
    assert all(network is networks[0] for network in networks)
    assert context._network_task is None
    assert context.network.name == "mainnet"


def test_network_is_required_before_lookups() -> None:
    context, _ = _unresolved_context("1")

    with pytest.raises(RuntimeError):
        context.address("sETH")


def test_ropsten_decimals_override() -> None:
    context, _ = _unresolved_context("3")

    asyncio.run(context.ensure_network())

    assert context.decimals["USDC"] == 18
    assert context.decimals["USDT"] == 18
    assert context.decimals["WBTC"] == 8
    assert TEST_REGISTRY.decimals["USDC"] == 6


def test_require_address_reports_network() -> None:
    context, _ = _unresolved_context("5")
    asyncio.run(context.ensure_network())

    with pytest.raises(ValidationError) as excinfo:
        context.require_address("sETH", "supply")

    assert str(excinfo.value) == "Strike [supply] | Contract `sETH` is not deployed on network `goerli`."


def test_sender_address_precedence() -> None:
    context = make_context()
    explicit = "0x" + "33" * 20

    assert asyncio.run(context.sender_address(CallOptions(from_=explicit), "op")) == explicit
    assert asyncio.run(context.sender_address(None, "op")) == SENDER


def test_sender_address_falls_back_to_node_accounts() -> None:
    node_account = "0x" + "44" * 20
    web3 = make_web3(default_account=None, accounts=[node_account])
    context = StrikeContext(Connection(web3=cast(Any, web3), chain_id=1), TEST_REGISTRY)

    assert asyncio.run(context.sender_address(None, "op")) == node_account
