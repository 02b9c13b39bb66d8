"""Utility functions for the Strike protocol client."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from hexbytes import HexBytes

from .constants import CANONICAL_NETWORK_NAMES, CHAIN_NAMES, MAINNET, UNKNOWN_NETWORK
from .registry import DEFAULT_REGISTRY, Registry


def is_amount(value: Any) -> bool:
    """Return True for the amount types operations accept."""
    if isinstance(value, bool):
        return False
    return isinstance(value, str | int | float | Decimal)


def to_mantissa(amount: str | int | float | Decimal, decimals: int) -> int:
    """Scale a human readable amount up to the asset's smallest unit."""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int(value * (Decimal(10) ** decimals))


def from_mantissa(mantissa: int, decimals: int) -> Decimal:
    """Scale an integer amount in smallest units back to its natural scale."""
    return Decimal(mantissa) / (Decimal(10) ** decimals)


def parse_amount(amount: str | int | float | Decimal, decimals: int, mantissa: bool) -> int:
    """Return ``amount`` as an integer in smallest units.

    Raises ``ValueError`` when the value is not numeric.
    """
    try:
        if mantissa:
            return int(Decimal(str(amount)))
        return to_mantissa(amount, decimals)
    except (InvalidOperation, ValueError, OverflowError) as exc:
        raise ValueError(f"Amount {amount!r} is not numeric") from exc


def get_address(contract: str, network: str = MAINNET, registry: Registry | None = None) -> str | None:
    """Look up a contract or asset address on a network."""
    return (registry or DEFAULT_REGISTRY).address(network, contract)


def get_abi(contract: str, registry: Registry | None = None) -> Sequence[Mapping[str, Any]]:
    """Return the ABI registered for a contract kind (e.g. ``"sEther"``)."""
    return (registry or DEFAULT_REGISTRY).abi(contract)


def get_network_name_with_chain_id(chain_id: int) -> str:
    """Map a chain id to its canonical network name."""
    name = CHAIN_NAMES.get(chain_id)
    if name is None:
        return UNKNOWN_NETWORK
    return CANONICAL_NETWORK_NAMES.get(name, name)


def serialise_receipt(receipt: Any) -> Any:
    """Serialise web3 receipt objects into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, Sequence) and not isinstance(
        receipt, str | bytes | bytearray | HexBytes
    ):
        return [serialise_receipt(item) for item in receipt]
    if isinstance(receipt, bytes | bytearray | HexBytes):
        return HexBytes(receipt).to_0x_hex()
    return receipt
