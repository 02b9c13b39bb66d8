"""Generic contract invocation and network helpers built on web3.py.

``read`` performs a static call and returns the decoded value; ``trx``
submits a transaction and returns a :class:`TransactionHandle`. Both accept
either a human-readable method signature (``"function mint() payable"``) or
a member name together with ``CallOptions.abi``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.providers.async_base import AsyncBaseProvider

from .config import DEFAULT_CONFIG, StrikeConfig
from .constants import DEFAULT_RECEIPT_TIMEOUT, MAINNET
from .exceptions import RpcError, ValidationError
from .types import CallOptions, NetworkIdentity
from .utils import get_network_name_with_chain_id, serialise_receipt

logger = logging.getLogger(__name__)

ETH_CALL = "eth_call"
ETH_SEND_TRANSACTION = "eth_sendTransaction"

_SECRET_KEYS = ("private_key", "mnemonic")

_SIGNATURE_RE = re.compile(
    r"^\s*(?:function\s+)?(?P<name>[A-Za-z_]\w*)\s*\((?P<inputs>[^)]*)\)"
    r"(?P<modifiers>[^(]*?)(?:returns\s*\((?P<outputs>[^)]*)\))?\s*$"
)
_TYPE_ALIASES = {"uint": "uint256", "int": "int256"}


@dataclass
class Connection:
    """A web3 instance plus the optional local signer bound to it."""

    web3: AsyncWeb3
    account: LocalAccount | None = None
    chain_id: int | None = None

    @property
    def address(self) -> str | None:
        if self.account is not None:
            return self.account.address
        default = getattr(self.web3.eth, "default_account", None)
        return default if isinstance(default, str) else None


@dataclass
class TransactionHandle:
    """A submitted transaction whose receipt can be awaited later."""

    tx_hash: HexBytes
    address: str
    method: str
    web3: AsyncWeb3 = field(repr=False)

    @property
    def hash(self) -> str:
        return HexBytes(self.tx_hash).to_0x_hex()

    async def wait(self, timeout: float = DEFAULT_RECEIPT_TIMEOUT) -> Any:
        receipt = await self.web3.eth.wait_for_transaction_receipt(self.tx_hash, timeout=timeout)
        logger.info(
            "Transaction confirmed method=%s hash=%s block=%s",
            self.method,
            self.hash,
            receipt.get("blockNumber") if isinstance(receipt, Mapping) else None,
        )
        return serialise_receipt(receipt)


# ----------------------------------------------------------------------
# Public dispatch
# ----------------------------------------------------------------------
async def read(
    address: str,
    method: str,
    parameters: Sequence[Any] = (),
    options: CallOptions | None = None,
) -> Any:
    """Invoke a contract member with ``eth_call`` and return its decoded result."""

    return await _eth_json_rpc(False, address, method, parameters, options)


async def trx(
    address: str,
    method: str,
    parameters: Sequence[Any] = (),
    options: CallOptions | None = None,
) -> TransactionHandle:
    """Submit a transaction invoking a contract member."""

    return await _eth_json_rpc(True, address, method, parameters, options)


async def _eth_json_rpc(
    is_write: bool,
    address: str,
    method: str,
    parameters: Sequence[Any],
    options: CallOptions | None,
) -> Any:
    options = options or CallOptions()
    rpc_method = ETH_SEND_TRANSACTION if is_write else ETH_CALL
    connection = options.connection or create_provider(options)
    web3 = connection.web3

    overrides = options.overrides()
    arguments = list(parameters)
    # The trailing record mirrors the caller's options, credentials included,
    # until a failure redacts them.
    recorded = [
        *arguments,
        {**overrides, "private_key": options.private_key, "mnemonic": options.mnemonic},
    ]

    if options.abi is not None:
        abi = options.abi
        member = method
    else:
        fragment = parse_method_signature(method)
        abi = [fragment]
        member = fragment["name"]

    transaction = {
        key: value for key, value in overrides.items() if key != "blockTag" and value is not None
    }

    try:
        contract = web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        function = _contract_function(contract, member)(*arguments)
        if is_write:
            logger.debug("Submitting %s to %s", member, address)
            tx_hash = await function.transact(transaction)
        else:
            logger.debug("Calling %s on %s", member, address)
            return await function.call(
                transaction, block_identifier=overrides["blockTag"] or "latest"
            )
    except Exception as exc:
        _redact_secrets(recorded)
        raise RpcError(
            f"Error occurred during [{rpc_method}]. See {{error}}.",
            error=exc,
            method=member,
            parameters=recorded,
            details={"error": str(exc), "address": address},
        ) from exc

    handle = TransactionHandle(tx_hash=HexBytes(tx_hash), address=address, method=member, web3=web3)
    logger.info("Transaction sent method=%s hash=%s", member, handle.hash)
    return handle


def _contract_function(contract: Any, member: str) -> Any:
    if "(" in member:
        return contract.get_function_by_signature(member.replace(" ", ""))
    return contract.get_function_by_name(member)


def _redact_secrets(parameters: list[Any]) -> None:
    try:
        trailing = parameters[-1]
        for key in _SECRET_KEYS:
            trailing.pop(key, None)
    except (IndexError, AttributeError, TypeError):
        pass


def parse_method_signature(signature: str) -> dict[str, Any]:
    """Convert a human-readable member definition into a JSON ABI fragment."""

    match = _SIGNATURE_RE.match(signature or "")
    if match is None:
        raise ValidationError(
            "eth",
            f"Unable to parse method signature `{signature}`.",
            field="method",
            value=signature,
        )

    modifiers = match.group("modifiers").split()
    if "payable" in modifiers:
        mutability = "payable"
    elif "view" in modifiers or "pure" in modifiers:
        mutability = "view"
    else:
        mutability = "nonpayable"

    return {
        "type": "function",
        "name": match.group("name"),
        "inputs": _signature_params(match.group("inputs")),
        "outputs": _signature_params(match.group("outputs") or ""),
        "stateMutability": mutability,
    }


def _signature_params(declaration: str) -> list[dict[str, str]]:
    params = []
    for chunk in (part.strip() for part in declaration.split(",")):
        if not chunk:
            continue
        pieces = [piece for piece in chunk.split() if piece not in ("memory", "calldata")]
        abi_type = _TYPE_ALIASES.get(pieces[0], pieces[0])
        params.append({"name": pieces[1] if len(pieces) > 1 else "", "type": abi_type})
    return params


# ----------------------------------------------------------------------
# Connections
# ----------------------------------------------------------------------
def create_provider(
    options: CallOptions | None = None,
    config: StrikeConfig = DEFAULT_CONFIG,
) -> Connection:
    """Build a :class:`Connection` from a provider, network name or RPC URL."""

    options = options or CallOptions()
    provider = options.provider or options.network or MAINNET

    if isinstance(provider, Connection):
        return provider

    if isinstance(provider, AsyncWeb3):
        web3 = provider
    elif isinstance(provider, AsyncBaseProvider):
        web3 = AsyncWeb3(provider)
    elif isinstance(provider, str):
        url = config.rpc_url_for(provider) or provider
        web3 = AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={"timeout": config.request_timeout}))
    else:
        raise ValidationError(
            "createProvider",
            "Argument `provider` must be a network name, RPC URL, or async web3 provider.",
            field="provider",
            value=type(provider).__name__,
        )

    account = _load_signer(options)
    if account is not None:
        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address

    return Connection(web3=web3, account=account)


def _load_signer(options: CallOptions) -> LocalAccount | None:
    try:
        if options.private_key:
            return Account.from_key(options.private_key)
        if options.mnemonic:
            Account.enable_unaudited_hdwallet_features()
            return Account.from_mnemonic(options.mnemonic)
    except Exception as exc:
        raise ValidationError(
            "createProvider",
            "Failed to derive a signer account from the provided credentials.",
            field="private_key" if options.private_key else "mnemonic",
        ) from exc
    return None


async def get_provider_network(connection: Connection | AsyncWeb3) -> NetworkIdentity:
    """Determine the chain id and canonical name of a connection's network."""

    if isinstance(connection, Connection):
        web3 = connection.web3
        raw_id: Any = connection.chain_id
    else:
        web3 = connection
        raw_id = None

    if raw_id is None:
        raw_id = await web3.net.version

    network_id = _normalise_chain_id(raw_id)
    if isinstance(connection, Connection):
        connection.chain_id = network_id

    network = NetworkIdentity(id=network_id, name=get_network_name_with_chain_id(network_id))
    logger.debug("Resolved network id=%s name=%s", network.id, network.name)
    return network


def _normalise_chain_id(raw_id: Any) -> int:
    try:
        return int(raw_id)
    except (TypeError, ValueError):
        return 0


async def get_balance(
    address: str,
    provider: Any = MAINNET,
    config: StrikeConfig = DEFAULT_CONFIG,
) -> int:
    """Return the ether balance of ``address`` in wei."""

    connection = create_provider(CallOptions(provider=provider), config)
    try:
        return await connection.web3.eth.get_balance(Web3.to_checksum_address(address), "latest")
    except Exception as exc:
        raise RpcError(
            "Error occurred during [eth_getBalance]. See {error}.",
            error=exc,
            method="eth_getBalance",
            parameters=[address, "latest"],
        ) from exc


def with_connection(options: CallOptions | None, connection: Connection, **changes: Any) -> CallOptions:
    """Return a copy of ``options`` bound to ``connection`` with ``changes`` applied."""

    return replace(options or CallOptions(), connection=connection, **changes)
