"""Constants and mappings for the Strike protocol client."""

from enum import Enum

# Wrapper (market) tokens are named by prefixing the underlying symbol.
S_TOKEN_PREFIX = "s"

ETH = "ETH"
USDC = "USDC"
USDT = "USDT"
WBTC = "WBTC"
BTC = "BTC"
BUSD = "BUSD"
UNI = "UNI"
DAI = "DAI"
LINK = "LINK"
COMP = "COMP"
STRK = "STRK"

S_ETH = S_TOKEN_PREFIX + ETH

# Every asset the protocol has a market for; see deployments for those bundled.
UNDERLYINGS = (ETH, USDC, USDT, WBTC, BUSD, UNI, DAI, LINK, COMP, STRK)
S_TOKENS = tuple(S_TOKEN_PREFIX + symbol for symbol in UNDERLYINGS)

# Assets the open price feed reports on even without a matching market.
OPF_ASSETS = (BTC, ETH, LINK, STRK)

# The oracle reports the unwrapped asset for these symbols.
ORACLE_SYMBOL_ALIASES = {WBTC: BTC}

S_TOKEN_DECIMALS = 8

DECIMALS = {
    ETH: 18,
    USDC: 6,
    USDT: 6,
    WBTC: 8,
    BTC: 8,
    BUSD: 18,
    UNI: 18,
    DAI: 18,
    LINK: 18,
    COMP: 18,
    STRK: 18,
    **{name: S_TOKEN_DECIMALS for name in S_TOKENS},
}

# Test deployments that redeploy stablecoins with 18 decimals.
DECIMAL_OVERRIDES = {
    "ropsten": {USDC: 18, USDT: 18},
}


class ContractKind(str, Enum):
    """ABI identifiers understood by the registry."""

    COMPTROLLER = "Comptroller"
    S_ERC20 = "sErc20"
    S_ETHER = "sEther"
    PRICE_ORACLE = "PriceOracle"
    ERC20 = "ERC20"
    STRK = "STRK"
    GOVERNOR_ALPHA = "GovernorAlpha"
    STRIKE_LENS = "StrikeLens"


MAINNET = "mainnet"
ROPSTEN = "ropsten"
UNKNOWN_NETWORK = "unknown"
ROPSTEN_CHAIN_ID = 3

# Standard chain names by chain id; chain id 1 is reported as ``mainnet``.
CHAIN_NAMES = {
    1: "homestead",
    3: "ropsten",
    4: "rinkeby",
    5: "goerli",
    10: "optimism",
    42: "kovan",
    56: "bnb",
    97: "bnbt",
    137: "matic",
    42161: "arbitrum",
    80001: "maticmum",
    11155111: "sepolia",
}

CANONICAL_NETWORK_NAMES = {"homestead": MAINNET}

DEFAULT_RPC_URLS = {
    MAINNET: "https://ethereum-rpc.publicnode.com",
}

API_HOST_MAINNET = "https://mainnetapi.strike.org"
API_HOST_TESTNET = "https://testnetapi.strike.org"

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0

# Unix timestamp used when no signature expiry is given.
DEFAULT_SIGNATURE_EXPIRY = 10**10

DELEGATION_DOMAIN_NAME = "Compound"
GOVERNOR_DOMAIN_NAME = "Strike Governor Alpha"

VOTE_SUPPORT_VALUES = (0, 1, 2)
