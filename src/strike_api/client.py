"""High level client for the Strike lending protocol."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from . import api, eth, strk, utils
from .comptroller import ComptrollerOperations
from .config import DEFAULT_CONFIG, StrikeConfig
from .constants import DEFAULT_SIGNATURE_EXPIRY, MAINNET, USDC
from .context import StrikeContext
from .eth import TransactionHandle
from .gov import GovernanceOperations
from .markets import MarketOperations
from .price_feed import PriceFeed
from .registry import DEFAULT_REGISTRY, Registry
from .strk import StrikeTokenOperations
from .types import Amount, CallOptions, NetworkIdentity, Signature

logger = logging.getLogger(__name__)


class Strike:
    """Interact with Strike markets, the price oracle and governance.

    ``provider`` is a network name (``"mainnet"``), an RPC URL, an
    ``AsyncWeb3`` instance or an async web3 provider. Pass ``private_key`` or
    ``mnemonic`` to sign transactions locally; otherwise the node's own
    accounts are used.

    Example::

        strike = Strike("https://rpc.example", private_key=key)
        handle = await strike.supply("ETH", 1)
        receipt = await handle.wait()
    """

    # Stateless helpers usable without an instance.
    eth = eth
    api = api
    util = utils
    get_strike_balance = staticmethod(strk.get_strike_balance)
    get_strike_accrued = staticmethod(strk.get_strike_accrued)

    def __init__(
        self,
        provider: Any = MAINNET,
        *,
        private_key: str | None = None,
        mnemonic: str | None = None,
        registry: Registry | None = None,
        config: StrikeConfig | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        connection = eth.create_provider(
            CallOptions(provider=provider, private_key=private_key, mnemonic=mnemonic),
            self._config,
        )
        self._context = StrikeContext(connection, registry or DEFAULT_REGISTRY, self._config)

        self._markets = MarketOperations(self._context)
        self._comptroller = ComptrollerOperations(self._context)
        self._price_feed = PriceFeed(self._context)
        self._governance = GovernanceOperations(self._context)
        self._strk = StrikeTokenOperations(self._context)

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------
    @property
    def connection(self) -> eth.Connection:
        return self._context.connection

    @property
    def decimals(self) -> dict[str, int]:
        return self._context.decimals

    async def network(self) -> NetworkIdentity:
        """Resolve (once) and return the network this client is bound to."""
        return await self._context.ensure_network()

    # ------------------------------------------------------------------
    # Markets
    # ------------------------------------------------------------------
    async def supply(
        self,
        asset: str,
        amount: Amount,
        no_approve: bool = False,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        return await self._markets.supply(asset, amount, no_approve, options)

    async def redeem(
        self, asset: str, amount: Amount, options: CallOptions | None = None
    ) -> TransactionHandle:
        return await self._markets.redeem(asset, amount, options)

    async def borrow(
        self, asset: str, amount: Amount, options: CallOptions | None = None
    ) -> TransactionHandle:
        return await self._markets.borrow(asset, amount, options)

    async def repay_borrow(
        self,
        asset: str,
        amount: Amount,
        borrower: str | None = None,
        no_approve: bool = False,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        return await self._markets.repay_borrow(asset, amount, borrower, no_approve, options)

    async def enter_markets(
        self, markets: str | Sequence[str] = (), options: CallOptions | None = None
    ) -> TransactionHandle:
        return await self._comptroller.enter_markets(markets, options)

    async def exit_market(self, market: str, options: CallOptions | None = None) -> TransactionHandle:
        return await self._comptroller.exit_market(market, options)

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------
    async def get_price(self, asset: str, in_asset: str = USDC) -> float:
        return await self._price_feed.get_price(asset, in_asset)

    # ------------------------------------------------------------------
    # Governance
    # ------------------------------------------------------------------
    async def cast_vote(
        self, proposal_id: int, support: int, options: CallOptions | None = None
    ) -> TransactionHandle:
        return await self._governance.cast_vote(proposal_id, support, options)

    async def cast_vote_with_reason(
        self,
        proposal_id: int,
        support: int,
        reason: str,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        return await self._governance.cast_vote_with_reason(proposal_id, support, reason, options)

    async def cast_vote_by_sig(
        self,
        proposal_id: int,
        support: int,
        signature: Signature | dict[str, str],
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        return await self._governance.cast_vote_by_sig(proposal_id, support, signature, options)

    async def create_vote_signature(self, proposal_id: int, support: int) -> Signature:
        return await self._governance.create_vote_signature(proposal_id, support)

    # ------------------------------------------------------------------
    # STRK
    # ------------------------------------------------------------------
    async def claim_strike(self, options: CallOptions | None = None) -> TransactionHandle:
        return await self._strk.claim_strike(options)

    async def delegate(self, address: str, options: CallOptions | None = None) -> TransactionHandle:
        return await self._strk.delegate(address, options)

    async def delegate_by_sig(
        self,
        address: str,
        nonce: int,
        expiry: int,
        signature: Signature | dict[str, str],
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        return await self._strk.delegate_by_sig(address, nonce, expiry, signature, options)

    async def create_delegate_signature(
        self, delegatee: str, expiry: int = DEFAULT_SIGNATURE_EXPIRY
    ) -> Signature:
        return await self._strk.create_delegate_signature(delegatee, expiry)
