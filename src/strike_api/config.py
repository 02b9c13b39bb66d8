"""Configuration container for the Strike protocol client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from .constants import (
    API_HOST_MAINNET,
    API_HOST_TESTNET,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RPC_URLS,
)


@dataclass(frozen=True)
class StrikeConfig:
    """Transport settings shared by every call a client makes."""

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    rpc_urls: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_RPC_URLS))
    api_hosts: Mapping[str, str] = field(
        default_factory=lambda: {"mainnet": API_HOST_MAINNET, "testnet": API_HOST_TESTNET}
    )

    def rpc_url_for(self, network: str) -> str | None:
        return self.rpc_urls.get(network)

    def with_rpc_url(self, network: str, url: str) -> StrikeConfig:
        """Return a copy that maps ``network`` to ``url``."""

        rpc_urls = dict(self.rpc_urls)
        rpc_urls[network] = url.rstrip("/")
        return replace(self, rpc_urls=rpc_urls)


DEFAULT_CONFIG = StrikeConfig()
