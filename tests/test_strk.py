from __future__ import annotations

import asyncio
from typing import Any, cast

import pytest
from conftest import BORROWER, SENDER, TEST_REGISTRY, address_of, make_context, make_web3
from web3 import Web3

from strike_api import eip712, eth, strk
from strike_api.eth import Connection
from strike_api.exceptions import ValidationError
from strike_api.strk import NONCES_SIGNATURE, StrikeTokenOperations
from strike_api.types import Signature


def _strk() -> StrikeTokenOperations:
    return StrikeTokenOperations(make_context())


@pytest.fixture
def offline_provider(monkeypatch):
    connection = Connection(web3=cast(Any, make_web3()), chain_id=1)
    monkeypatch.setattr(eth, "create_provider", lambda options, config: connection)
    return connection


def test_get_strike_balance(chain, offline_provider) -> None:
    chain.responses["balanceOf"] = 5 * 10**18

    balance = asyncio.run(strk.get_strike_balance(BORROWER, registry=TEST_REGISTRY))

    assert balance == "5000000000000000000"
    _, address, _, parameters, _ = chain.calls[0]
    assert address == address_of("STRK")
    assert parameters == [Web3.to_checksum_address(BORROWER)]


def test_get_strike_accrued_returns_allocated(chain, offline_provider) -> None:
    chain.responses["getStrikeBalanceMetadataExt"] = (1, 2, BORROWER, 42)

    accrued = asyncio.run(strk.get_strike_accrued(BORROWER, registry=TEST_REGISTRY))

    assert accrued == "42"
    _, address, _, parameters, _ = chain.calls[0]
    assert address == address_of("StrikeLens")
    assert parameters[:2] == [address_of("STRK"), address_of("Comptroller")]


@pytest.mark.parametrize(
    ("value", "description"),
    [
        (123, "Argument `_address` must be a string."),
        ("0x1234", "Argument `_address` must be a valid Ethereum address."),
    ],
)
def test_balance_address_validation(chain, value, description) -> None:
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(strk.get_strike_balance(value))

    assert str(excinfo.value) == f"Strike [getStrikeBalance] | {description}"
    assert chain.calls == []


def test_claim_strike_for_signer(chain) -> None:
    asyncio.run(_strk().claim_strike())

    _, address, method, parameters, _ = chain.calls[0]
    assert (address, method, parameters) == (
        address_of("Comptroller"),
        "claimStrike(address)",
        [SENDER],
    )


def test_delegate(chain) -> None:
    asyncio.run(_strk().delegate(BORROWER))

    assert chain.calls[0][1:4] == (
        address_of("STRK"),
        "delegate",
        [Web3.to_checksum_address(BORROWER)],
    )


def test_delegate_rejects_bad_address(chain) -> None:
    with pytest.raises(ValidationError, match="must be a valid Ethereum address"):
        asyncio.run(_strk().delegate("0xnope"))


@pytest.mark.parametrize(
    ("nonce", "expiry", "description"),
    [
        ("1", 10, "Argument `nonce` must be an integer."),
        (1, 1.5, "Argument `expiry` must be an integer."),
    ],
)
def test_delegate_by_sig_validation(chain, nonce, expiry, description) -> None:
    signature = {"v": "0x1b", "r": "0x" + "11" * 32, "s": "0x" + "22" * 32}

    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(_strk().delegate_by_sig(BORROWER, nonce, expiry, signature))

    assert excinfo.value.description == description
    assert chain.calls == []


def test_delegate_by_sig(chain) -> None:
    signature = Signature(v="0x1c", r="0x" + "aa" * 32, s="0x" + "bb" * 32)

    asyncio.run(_strk().delegate_by_sig(BORROWER, 3, 10**10, signature))

    _, _, method, parameters, _ = chain.calls[0]
    assert method == "delegateBySig"
    assert parameters[:4] == [Web3.to_checksum_address(BORROWER), 3, 10**10, 28]


def test_create_delegate_signature_reads_nonce_first(chain, monkeypatch) -> None:
    chain.responses[NONCES_SIGNATURE] = 7
    order: list[str] = []
    captured: dict[str, Any] = {}

    async def fake_sign(domain, primary_type, message, types, connection, signer=None):
        order.append("sign")
        captured.update(domain=domain, primary_type=primary_type, message=message, signer=signer)
        return Signature(v="0x1b", r="0x01", s="0x02")

    monkeypatch.setattr(eip712, "sign", fake_sign)
    original_read = eth.read

    async def tracking_read(*args, **kwargs):
        order.append("read")
        return await original_read(*args, **kwargs)

    monkeypatch.setattr(eth, "read", tracking_read)

    asyncio.run(_strk().create_delegate_signature(BORROWER))

    assert order == ["read", "sign"]
    _, address, method, parameters, _ = chain.calls[0]
    assert (address, method, parameters) == (address_of("STRK"), NONCES_SIGNATURE, [SENDER])
    assert captured["primary_type"] == "Delegation"
    assert captured["signer"] == SENDER
    assert captured["message"] == {
        "delegatee": Web3.to_checksum_address(BORROWER),
        "nonce": 7,
        "expiry": 10**10,
    }
    assert captured["domain"] == {
        "name": "Compound",
        "chainId": 1,
        "verifyingContract": address_of("STRK"),
    }
