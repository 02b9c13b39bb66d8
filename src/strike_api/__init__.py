"""Strike API - Python client for the Strike lending protocol.

This library wraps the Strike contracts (markets, Comptroller, price oracle,
STRK token and Governor Alpha) and the off-chain analytics API behind an
async interface built on web3.py.
"""

from . import api, eth
from .client import Strike
from .config import DEFAULT_CONFIG, StrikeConfig
from .constants import (
    BTC,
    BUSD,
    COMP,
    DAI,
    ETH,
    LINK,
    S_ETH,
    STRK,
    UNI,
    USDC,
    USDT,
    WBTC,
    ContractKind,
)
from .eth import Connection, TransactionHandle, create_provider, get_balance, get_provider_network
from .exceptions import (
    ApiError,
    ErrorKind,
    RpcError,
    StrikeError,
    ValidationError,
)
from .registry import DEFAULT_REGISTRY, Registry
from .strk import get_strike_accrued, get_strike_balance
from .types import Amount, AssetInfo, CallOptions, NetworkIdentity, Signature
from .utils import (
    from_mantissa,
    get_abi,
    get_address,
    get_network_name_with_chain_id,
    to_mantissa,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "Strike",
    "StrikeConfig",
    "DEFAULT_CONFIG",
    "Registry",
    "DEFAULT_REGISTRY",
    # Modules
    "api",
    "eth",
    # Connections
    "Connection",
    "TransactionHandle",
    "create_provider",
    "get_balance",
    "get_provider_network",
    # Types
    "Amount",
    "AssetInfo",
    "CallOptions",
    "NetworkIdentity",
    "Signature",
    "ContractKind",
    # Symbols
    "ETH",
    "USDC",
    "USDT",
    "WBTC",
    "BTC",
    "BUSD",
    "UNI",
    "DAI",
    "LINK",
    "COMP",
    "STRK",
    "S_ETH",
    # Exceptions
    "StrikeError",
    "ErrorKind",
    "ValidationError",
    "RpcError",
    "ApiError",
    # Utility functions
    "get_address",
    "get_abi",
    "get_network_name_with_chain_id",
    "to_mantissa",
    "from_mantissa",
    "get_strike_balance",
    "get_strike_accrued",
]
