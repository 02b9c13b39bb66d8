"""Immutable address, ABI and decimals registry for Strike deployments."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from .abi import ABIS
from .constants import (
    DECIMAL_OVERRIDES,
    DECIMALS,
    OPF_ASSETS,
    ROPSTEN,
    ROPSTEN_CHAIN_ID,
    S_TOKEN_PREFIX,
)
from .deployments import ADDRESSES, LISTED_S_TOKENS, LISTED_UNDERLYINGS
from .types import NetworkIdentity


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Registry:
    """Static lookup tables shared by every client bound to this registry."""

    addresses: Mapping[str, Mapping[str, str]] = field(default_factory=lambda: ADDRESSES)
    abis: Mapping[str, Sequence[Mapping[str, Any]]] = field(default_factory=lambda: ABIS)
    decimals: Mapping[str, int] = field(default_factory=lambda: DECIMALS)
    underlyings: tuple[str, ...] = LISTED_UNDERLYINGS
    s_tokens: tuple[str, ...] = LISTED_S_TOKENS
    opf_assets: tuple[str, ...] = OPF_ASSETS

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "addresses",
            _freeze({network: _freeze(table) for network, table in self.addresses.items()}),
        )
        object.__setattr__(self, "abis", _freeze(self.abis))
        object.__setattr__(self, "decimals", _freeze(self.decimals))

        for s_token in self.s_tokens:
            if not s_token.startswith(S_TOKEN_PREFIX):
                raise ValueError(f"Market token {s_token!r} lacks the {S_TOKEN_PREFIX!r} prefix")
            underlying = s_token[len(S_TOKEN_PREFIX) :]
            if underlying not in self.underlyings:
                raise ValueError(f"Market token {s_token!r} has no registered underlying")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def address(self, network: str, symbol: str) -> str | None:
        return self.addresses.get(network, {}).get(symbol)

    def abi(self, kind: str) -> Sequence[Mapping[str, Any]]:
        key = getattr(kind, "value", kind)
        if key not in self.abis:
            raise KeyError(f"Unknown contract ABI {kind!r}")
        return self.abis[key]

    def is_underlying(self, symbol: str) -> bool:
        return symbol in self.underlyings

    def is_s_token(self, symbol: str) -> bool:
        return symbol in self.s_tokens

    def decimals_for(self, network: NetworkIdentity) -> dict[str, int]:
        """Return the decimals table adjusted for ``network``."""

        decimals = dict(self.decimals)
        if network.id == ROPSTEN_CHAIN_ID or network.name == ROPSTEN:
            decimals.update(DECIMAL_OVERRIDES[ROPSTEN])
        return decimals

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def with_addresses(self, network: str, table: Mapping[str, str]) -> Registry:
        """Return a copy with ``table`` merged into the ``network`` address map.

        sTokens in ``table`` whose underlying is a known asset become listed
        markets, so ``{"sDAI": ...}`` makes DAI usable for supply, borrow and
        pricing.
        """

        addresses = {name: dict(entries) for name, entries in self.addresses.items()}
        addresses.setdefault(network, {}).update(table)

        underlyings = list(self.underlyings)
        s_tokens = list(self.s_tokens)
        for name in table:
            underlying = name[len(S_TOKEN_PREFIX) :]
            if not name.startswith(S_TOKEN_PREFIX) or underlying not in self.decimals:
                continue
            if underlying not in underlyings:
                underlyings.append(underlying)
            if name not in s_tokens:
                s_tokens.append(name)

        return replace(
            self, addresses=addresses, underlyings=tuple(underlyings), s_tokens=tuple(s_tokens)
        )


DEFAULT_REGISTRY = Registry()
