"""Asset prices from the Strike price oracle.

Prices are quoted in any other supported asset. sToken prices are composed
from the oracle price of their underlying and the market's current exchange
rate.
"""

from __future__ import annotations

import logging

from . import eth
from .constants import (
    ORACLE_SYMBOL_ALIASES,
    S_ETH,
    S_TOKEN_DECIMALS,
    S_TOKEN_PREFIX,
    USDC,
    ContractKind,
)
from .context import StrikeContext
from .exceptions import RpcError, ValidationError, format_error_message
from .types import AssetInfo

logger = logging.getLogger(__name__)

# Exchange rates are scaled by 1e18 and expressed per sToken unit.
_EXCHANGE_RATE_SCALE = 18


class PriceFeed:
    """Price composition over the Comptroller's oracle."""

    def __init__(self, context: StrikeContext) -> None:
        self._context = context

    async def get_price(self, asset: str, in_asset: str = USDC) -> float:
        """Return the price of ``asset`` expressed in units of ``in_asset``.

        Both arguments accept underlyings and sTokens, e.g.
        ``await feed.get_price("sETH", "USDC")``.
        """

        await self._context.ensure_network()
        operation = "getPrice"

        base = self._validate_asset(asset, "asset", operation)
        quote = self._validate_asset(in_asset, "inAsset", operation)

        comptroller = self._context.require_address(ContractKind.COMPTROLLER.value, operation)
        oracle = await eth.read(
            comptroller,
            "oracle",
            [],
            self._context.call_options(abi=self._context.abi(ContractKind.COMPTROLLER)),
        )

        oracle_options = self._context.call_options(abi=self._context.abi(ContractKind.PRICE_ORACLE))
        asset_price = await eth.read(oracle, "getUnderlyingPrice", [base.s_token_address], oracle_options)
        in_asset_price = await eth.read(
            oracle, "getUnderlyingPrice", [quote.s_token_address], oracle_options
        )
        if not in_asset_price:
            raise RpcError(
                format_error_message(operation, f"Oracle reports no price for `{in_asset}`."),
                method="getUnderlyingPrice",
                parameters=[quote.s_token_address],
            )

        # Oracle prices carry 36 - decimals digits of the underlying, so sTokens
        # align on their underlying's decimals rather than their own 8.
        shift = base.underlying_decimals - quote.underlying_decimals
        if shift > 0:
            asset_price = asset_price * 10**shift
        else:
            asset_price = asset_price // 10 ** (-shift)

        asset_rate = in_asset_rate = None
        if base.is_s_token:
            asset_rate = await self._s_token_exchange_rate(base)
        if quote.is_s_token:
            in_asset_rate = await self._s_token_exchange_rate(quote)

        asset_in_other = asset_price / in_asset_price
        if not base.is_s_token and not quote.is_s_token:
            result = asset_in_other
        elif base.is_s_token and not quote.is_s_token:
            result = asset_in_other * asset_rate
        elif not base.is_s_token and quote.is_s_token:
            result = asset_in_other / in_asset_rate
        else:
            # Kept as historically computed: rate(in_asset) * (price / rate(asset)).
            result = in_asset_rate * (asset_in_other / asset_rate)

        logger.debug("Price %s in %s = %s", asset, in_asset, result)
        return result

    def _validate_asset(self, asset: object, argument: str, operation: str) -> AssetInfo:
        if not isinstance(asset, str) or len(asset) < 1:
            raise ValidationError(
                operation, f"Argument `{argument}` must be a non-empty string.", argument, asset
            )

        registry = self._context.registry
        is_s_token = asset.startswith(S_TOKEN_PREFIX)
        s_token_name = asset if is_s_token else S_TOKEN_PREFIX + asset
        underlying_name = asset[len(S_TOKEN_PREFIX) :] if is_s_token else asset

        listed = registry.is_s_token(s_token_name) and registry.is_underlying(underlying_name)
        if not listed and underlying_name not in registry.opf_assets:
            raise ValidationError(operation, f"Argument `{argument}` is not supported.", argument, asset)

        s_token_address = self._context.address(s_token_name)
        if s_token_address is None:
            raise ValidationError(
                operation,
                f"Argument `{argument}` has no market on network `{self._context.network.name}`.",
                argument,
                asset,
            )

        return AssetInfo(
            symbol=asset,
            is_s_token=is_s_token,
            s_token_name=s_token_name,
            s_token_address=s_token_address,
            underlying_name=underlying_name,
            underlying_address=self._context.address(underlying_name),
            underlying_decimals=self._context.decimals[underlying_name],
            oracle_symbol=ORACLE_SYMBOL_ALIASES.get(underlying_name, underlying_name),
        )

    async def _s_token_exchange_rate(self, info: AssetInfo) -> float:
        """Return how many underlying units one sToken is worth."""

        kind = ContractKind.S_ETHER if info.s_token_name == S_ETH else ContractKind.S_ERC20
        rate = await eth.read(
            info.s_token_address,
            "exchangeRateCurrent",
            [],
            self._context.call_options(abi=self._context.abi(kind)),
        )
        if not rate:
            raise RpcError(
                format_error_message(
                    "getPrice", f"Market `{info.s_token_name}` reports a zero exchange rate."
                ),
                method="exchangeRateCurrent",
                parameters=[],
            )
        mantissa = _EXCHANGE_RATE_SCALE + info.underlying_decimals - S_TOKEN_DECIMALS
        return rate / 10**mantissa
