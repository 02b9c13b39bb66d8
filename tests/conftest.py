from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest

from strike_api import eth
from strike_api.constants import S_TOKENS, UNDERLYINGS
from strike_api.context import StrikeContext
from strike_api.eth import Connection
from strike_api.registry import DEFAULT_REGISTRY, Registry
from strike_api.types import CallOptions

SENDER = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
BORROWER = "0xab8483f64d9c6d1ecf9b849ae677dd3315835cb2"
ORACLE = "0x00000000000000000000000000000000000000aa"


def _address(index: int) -> str:
    return "0x" + f"{index:040x}"


TEST_ADDRESSES = {
    name: _address(index)
    for index, name in enumerate(
        ("Comptroller", "GovernorAlpha", "StrikeLens", *UNDERLYINGS, *S_TOKENS), start=1
    )
}

TEST_REGISTRY: Registry = DEFAULT_REGISTRY.with_addresses("mainnet", TEST_ADDRESSES).with_addresses(
    "ropsten", TEST_ADDRESSES
)


class AwaitableValue:
    """Stand-in for web3 async properties such as ``eth.accounts``."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def __await__(self):
        return self._get().__await__()

    async def _get(self) -> Any:
        return self.value


class FakeNet:
    def __init__(self, version: Any) -> None:
        self._version = version
        self.queries = 0

    @property
    def version(self) -> AwaitableValue:
        self.queries += 1
        return AwaitableValue(self._version)


def make_web3(*, version: Any = "1", default_account: str | None = SENDER, accounts=()) -> Any:
    return SimpleNamespace(
        eth=SimpleNamespace(default_account=default_account, accounts=AwaitableValue(list(accounts))),
        net=FakeNet(version),
    )


def make_context(
    chain_id: int | None = 1,
    *,
    default_account: str | None = SENDER,
    registry: Registry = TEST_REGISTRY,
) -> StrikeContext:
    web3 = make_web3(version=str(chain_id or 1), default_account=default_account)
    connection = Connection(web3=cast(Any, web3), chain_id=chain_id)
    return StrikeContext(connection, registry)


class FakeChain:
    """Records ``eth.read`` / ``eth.trx`` calls and answers reads from ``responses``.

    Responses are keyed by ``(address, method)`` or by ``method``; a callable
    response receives the call parameters.
    """

    def __init__(self, responses: dict[Any, Any] | None = None) -> None:
        self.responses: dict[Any, Any] = dict(responses or {})
        self.calls: list[tuple[str, str, str, list[Any], CallOptions]] = []

    async def read(self, address: str, method: str, parameters=(), options=None) -> Any:
        self.calls.append(("read", address, method, list(parameters), options))
        response = self.responses.get((address, method), self.responses.get(method))
        if callable(response):
            return response(list(parameters))
        return response

    async def trx(self, address: str, method: str, parameters=(), options=None) -> Any:
        self.calls.append(("trx", address, method, list(parameters), options))
        return SimpleNamespace(hash=f"0x{len(self.calls):064x}", method=method)

    def methods(self) -> list[str]:
        return [call[2] for call in self.calls]


@pytest.fixture
def chain(monkeypatch: pytest.MonkeyPatch) -> FakeChain:
    fake = FakeChain()
    monkeypatch.setattr(eth, "read", fake.read)
    monkeypatch.setattr(eth, "trx", fake.trx)
    return fake


@pytest.fixture
def context() -> StrikeContext:
    return make_context()


def address_of(symbol: str) -> str:
    return TEST_ADDRESSES[symbol]
