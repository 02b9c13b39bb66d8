"""Per-network contract addresses of the Strike protocol deployment.

Tables are keyed by canonical network name, then by contract or asset
symbol. Deployments that are not bundled here can be supplied through
``Registry.with_addresses``.
"""

from __future__ import annotations

from collections.abc import Mapping

from .constants import ETH, S_TOKEN_PREFIX, USDC

MAINNET_ADDRESSES: Mapping[str, str] = {
    # Protocol contracts
    "Comptroller": "0xe2e17b2CBbf48211FA7eB8A875360e5e39bA2602",
    "STRK": "0x74232704659ef37c08995e386A2E26cc27a8d7B1",
    # Markets
    "sETH": "0xbEe9Cf658702527b0AcB2719c1FAA29EdC006a92",
    "sUSDC": "0x3774E825d567125988Fb293e926064B6FAa71DAB",
    # Underlying tokens
    "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    "USDT": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
    "WBTC": "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599",
    "BUSD": "0x4Fabb145d64652a948d72533023f6E7A623C7C53",
    "UNI": "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984",
    "DAI": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
    "LINK": "0x514910771AF9Ca656af840dff83E8264EcF986CA",
    "COMP": "0xc00e94Cb662C3520282E6f5717214004A7f26888",
}

ADDRESSES: Mapping[str, Mapping[str, str]] = {
    "mainnet": MAINNET_ADDRESSES,
}

# Markets listed by the default registry: those with a bundled sToken address.
LISTED_UNDERLYINGS = (ETH, USDC)
LISTED_S_TOKENS = tuple(S_TOKEN_PREFIX + symbol for symbol in LISTED_UNDERLYINGS)
