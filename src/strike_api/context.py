"""Client context shared by every Strike operation helper."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from . import eth
from .config import DEFAULT_CONFIG, StrikeConfig
from .eth import Connection
from .exceptions import ValidationError
from .registry import DEFAULT_REGISTRY, Registry
from .types import CallOptions, NetworkIdentity

logger = logging.getLogger(__name__)


class StrikeContext:
    """Own the connection, registry and resolved network of one client.

    Network resolution starts on the first asset-aware call. Concurrent
    callers await the same task; once it completes the task is dropped and
    later calls read the cached :class:`NetworkIdentity`.
    """

    def __init__(
        self,
        connection: Connection,
        registry: Registry = DEFAULT_REGISTRY,
        config: StrikeConfig = DEFAULT_CONFIG,
    ) -> None:
        self.connection = connection
        self.registry = registry
        self.config = config
        self._network: NetworkIdentity | None = None
        self._network_task: asyncio.Future[NetworkIdentity] | None = None
        self._decimals: dict[str, int] = dict(registry.decimals)

    # ------------------------------------------------------------------
    # Network resolution
    # ------------------------------------------------------------------
    async def ensure_network(self) -> NetworkIdentity:
        if self._network is not None:
            return self._network

        if self._network_task is None:
            self._network_task = asyncio.ensure_future(eth.get_provider_network(self.connection))

        task = self._network_task
        try:
            network = await task
        finally:
            if self._network_task is task:
                self._network_task = None

        if self._network is None:
            self._network = network
            self._decimals = self.registry.decimals_for(network)
            logger.debug("Client bound to network %s (id=%s)", network.name, network.id)
        return self._network

    @property
    def network(self) -> NetworkIdentity:
        if self._network is None:
            raise RuntimeError("Network not resolved; await ensure_network() first")
        return self._network

    @property
    def decimals(self) -> dict[str, int]:
        return self._decimals

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def address(self, symbol: str) -> str | None:
        return self.registry.address(self.network.name, symbol)

    def require_address(self, symbol: str, operation: str) -> str:
        address = self.address(symbol)
        if address is None:
            raise ValidationError(
                operation,
                f"Contract `{symbol}` is not deployed on network `{self.network.name}`.",
                field="contract",
                value=symbol,
            )
        return address

    def abi(self, kind: Any) -> Any:
        return self.registry.abi(kind)

    def call_options(self, options: CallOptions | None = None, **changes: Any) -> CallOptions:
        return eth.with_connection(options, self.connection, **changes)

    async def sender_address(self, options: CallOptions | None, operation: str) -> str:
        if options is not None and options.from_:
            return options.from_
        address = self.connection.address
        if address is not None:
            return address

        # Node-managed accounts (e.g. an unlocked development node).
        accounts = await self.connection.web3.eth.accounts
        if accounts:
            return accounts[0]
        raise ValidationError(
            operation,
            "A signer account is required; pass `private_key`, `mnemonic` or `from_`.",
            field="signer",
        )
