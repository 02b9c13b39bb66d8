"""Comptroller market membership: enter and exit markets."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from . import eth
from .constants import S_TOKEN_PREFIX, ContractKind
from .context import StrikeContext
from .eth import TransactionHandle
from .exceptions import ValidationError
from .types import CallOptions

logger = logging.getLogger(__name__)


class ComptrollerOperations:
    def __init__(self, context: StrikeContext) -> None:
        self._context = context

    async def enter_markets(
        self,
        markets: str | Sequence[str] = (),
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Enter one or more markets so their supplied balance counts as collateral.

        Symbols may be given with or without the ``s`` prefix.
        """

        await self._context.ensure_network()
        operation = "enterMarkets"

        if isinstance(markets, str):
            markets = [markets]
        if not isinstance(markets, (list, tuple)) or not all(isinstance(m, str) for m in markets):
            raise ValidationError(
                operation, "Argument `markets` must be an array or string.", "markets", markets
            )

        addresses = [self._market_address(market, operation) for market in markets]
        comptroller = self._context.require_address(ContractKind.COMPTROLLER.value, operation)
        trx_options = self._context.call_options(
            options, abi=self._context.abi(ContractKind.COMPTROLLER)
        )

        logger.debug("Entering markets %s", list(markets))
        return await eth.trx(comptroller, "enterMarkets", [addresses], trx_options)

    async def exit_market(
        self,
        market: str,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Exit a single market; fails on-chain while it backs an open borrow."""

        await self._context.ensure_network()
        operation = "exitMarket"

        if not isinstance(market, str) or market == "":
            raise ValidationError(
                operation,
                "Argument `market` must be a string of a sToken market name.",
                "market",
                market,
            )

        s_token_address = self._market_address(market, operation)
        comptroller = self._context.require_address(ContractKind.COMPTROLLER.value, operation)
        trx_options = self._context.call_options(
            options, abi=self._context.abi(ContractKind.COMPTROLLER)
        )

        return await eth.trx(comptroller, "exitMarket", [s_token_address], trx_options)

    def _market_address(self, market: str, operation: str) -> str:
        name = market if market.startswith(S_TOKEN_PREFIX) else S_TOKEN_PREFIX + market
        if not self._context.registry.is_s_token(name):
            raise ValidationError(
                operation, f"Provided market `{name}` is not a recognized sToken.", "markets", market
            )
        return self._context.require_address(name, operation)
