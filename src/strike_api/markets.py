"""Supply, redeem, borrow and repay against Strike markets."""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3

from . import eth
from .constants import S_ETH, S_TOKEN_DECIMALS, S_TOKEN_PREFIX, ContractKind
from .context import StrikeContext
from .eth import TransactionHandle
from .exceptions import ValidationError
from .types import Amount, CallOptions
from .utils import is_amount, parse_amount

logger = logging.getLogger(__name__)

_AMOUNT_TYPE_ERROR = "Argument `amount` must be a string, number, or integer."


class MarketOperations:
    """Market (sToken) operations bound to a client context."""

    def __init__(self, context: StrikeContext) -> None:
        self._context = context

    async def supply(
        self,
        asset: str,
        amount: Amount,
        no_approve: bool = False,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Supply an underlying asset, minting its sToken.

        For ERC-20 markets the current allowance is checked first and an
        ``approve`` for exactly ``amount`` is sent when it falls short, unless
        ``no_approve`` is set.
        """

        await self._context.ensure_network()
        operation = "supply"

        s_token_name, s_token_address = self._underlying_market(
            asset, operation, "Argument `asset` cannot be supplied."
        )
        value = self._scaled_amount(amount, self._context.decimals[asset], options, operation)

        is_ether = s_token_name == S_ETH
        trx_options = self._context.call_options(options, abi=self._market_abi(s_token_name))

        if not is_ether and not no_approve:
            await self._ensure_allowance(asset, s_token_address, value, trx_options, operation)

        if is_ether:
            return await eth.trx(s_token_address, "mint", [], _with_value(trx_options, value))
        return await eth.trx(s_token_address, "mint", [value], trx_options)

    async def redeem(
        self,
        asset: str,
        amount: Amount,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Redeem sTokens (``asset`` = sToken) or an underlying amount."""

        await self._context.ensure_network()
        operation = "redeem"

        is_s_token, s_token_name, underlying = self._split_symbol(asset, operation)
        decimals = S_TOKEN_DECIMALS if is_s_token else self._context.decimals[underlying]
        value = self._scaled_amount(amount, decimals, options, operation)

        s_token_address = self._context.require_address(s_token_name, operation)
        trx_options = self._context.call_options(options, abi=self._market_abi(s_token_name))
        method = "redeem" if is_s_token else "redeemUnderlying"

        return await eth.trx(s_token_address, method, [value], trx_options)

    async def borrow(
        self,
        asset: str,
        amount: Amount,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Borrow an underlying asset; collateral must already be entered."""

        await self._context.ensure_network()
        operation = "borrow"

        s_token_name, s_token_address = self._underlying_market(
            asset, operation, "Argument `asset` cannot be borrowed."
        )
        value = self._scaled_amount(amount, self._context.decimals[asset], options, operation)
        trx_options = self._context.call_options(options, abi=self._market_abi(s_token_name))

        return await eth.trx(s_token_address, "borrow", [value], trx_options)

    async def repay_borrow(
        self,
        asset: str,
        amount: Amount,
        borrower: str | None = None,
        no_approve: bool = False,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Repay a borrow for the signer, or on behalf of ``borrower``."""

        await self._context.ensure_network()
        operation = "repayBorrow"

        _, s_token_name, underlying = self._split_symbol(asset, operation)
        s_token_address = self._context.address(s_token_name)
        if s_token_address is None:
            raise ValidationError(operation, "Argument `asset` is not supported.", "asset", asset)

        value = self._scaled_amount(amount, self._context.decimals[underlying], options, operation)

        is_behalf = isinstance(borrower, str) and Web3.is_address(borrower)
        if borrower is not None and not is_behalf:
            raise ValidationError(operation, "Invalid `borrower` address.", "borrower", borrower)
        method = "repayBorrowBehalf" if is_behalf else "repayBorrow"

        parameters: list[Any] = [Web3.to_checksum_address(borrower)] if is_behalf else []
        is_ether = s_token_name == S_ETH
        trx_options = self._context.call_options(options, abi=self._market_abi(s_token_name))
        if is_ether:
            trx_options = _with_value(trx_options, value)
        else:
            parameters.append(value)

        if not is_ether and not no_approve:
            await self._ensure_allowance(underlying, s_token_address, value, trx_options, operation)

        return await eth.trx(s_token_address, method, parameters, trx_options)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _underlying_market(self, asset: Any, operation: str, message: str) -> tuple[str, str]:
        """Validate an underlying-only argument and return its sToken name and address."""

        if not isinstance(asset, str) or not self._context.registry.is_underlying(asset):
            raise ValidationError(operation, message, "asset", asset)
        s_token_name = S_TOKEN_PREFIX + asset
        s_token_address = self._context.address(s_token_name)
        if s_token_address is None:
            raise ValidationError(operation, message, "asset", asset)
        return s_token_name, s_token_address

    def _split_symbol(self, asset: Any, operation: str) -> tuple[bool, str, str]:
        """Accept an underlying or sToken symbol; return (is_s_token, sToken, underlying)."""

        if not isinstance(asset, str) or not asset:
            raise ValidationError(
                operation, "Argument `asset` must be a non-empty string.", "asset", asset
            )

        registry = self._context.registry
        is_s_token = asset.startswith(S_TOKEN_PREFIX) and registry.is_s_token(asset)
        s_token_name = asset if is_s_token else S_TOKEN_PREFIX + asset
        underlying = asset[len(S_TOKEN_PREFIX) :] if is_s_token else asset

        if not registry.is_s_token(s_token_name) or not registry.is_underlying(underlying):
            raise ValidationError(operation, "Argument `asset` is not supported.", "asset", asset)
        return is_s_token, s_token_name, underlying

    def _scaled_amount(
        self,
        amount: Any,
        decimals: int,
        options: CallOptions | None,
        operation: str,
    ) -> int:
        if not is_amount(amount):
            raise ValidationError(operation, _AMOUNT_TYPE_ERROR, "amount", amount)
        mantissa = bool(options and options.mantissa)
        try:
            return parse_amount(amount, decimals, mantissa)
        except ValueError as exc:
            raise ValidationError(operation, _AMOUNT_TYPE_ERROR, "amount", amount) from exc

    def _market_abi(self, s_token_name: str) -> Any:
        kind = ContractKind.S_ETHER if s_token_name == S_ETH else ContractKind.S_ERC20
        return self._context.abi(kind)

    async def _ensure_allowance(
        self,
        underlying: str,
        spender: str,
        amount: int,
        options: CallOptions,
        operation: str,
    ) -> None:
        """Approve ``spender`` for ``amount`` when the current allowance is lower.

        The approval and the following market call are separate transactions;
        a retry after a failed market call finds the allowance in place and
        skips straight to it.
        """

        token_address = self._context.require_address(underlying, operation)
        owner = await self._context.sender_address(options, operation)
        erc20_options = eth.with_connection(
            options, self._context.connection, abi=self._context.abi(ContractKind.ERC20), value=None
        )

        allowance = await eth.read(token_address, "allowance", [owner, spender], erc20_options)
        if allowance >= amount:
            return

        logger.info("Approving %s for %s units of %s", spender, amount, underlying)
        await eth.trx(token_address, "approve", [spender, amount], erc20_options)


def _with_value(options: CallOptions, value: int) -> CallOptions:
    return eth.with_connection(options, options.connection, value=value)
