"""Type definitions and data models for the Strike protocol client."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from eth_typing import HexStr
from web3 import Web3

Amount = str | int | float | Decimal
Address = str  # Ethereum address


@dataclass(frozen=True)
class NetworkIdentity:
    """Chain id and canonical name of the network a connection targets."""

    id: int
    name: str


@dataclass(frozen=True)
class CallOptions:
    """Per-call options and web3 transaction overrides.

    ``connection`` is filled in by the client before dispatch; callers
    normally leave it unset and pass ``provider``/``network`` instead.
    """

    provider: Any = None
    network: str | None = None
    gas_price: int | None = None
    nonce: int | None = None
    value: int | None = None
    chain_id: int | None = None
    from_: str | None = None
    gas_limit: int | None = None
    block_tag: int | str | None = None
    mantissa: bool = False
    abi: str | Sequence[Mapping[str, Any]] | None = None
    private_key: str | None = None
    mnemonic: str | None = None
    connection: Any = None

    def overrides(self) -> dict[str, Any]:
        """Return the override record in its fixed field order."""

        return {
            "gasPrice": self.gas_price,
            "nonce": self.nonce,
            "value": self.value,
            "chainId": self.chain_id,
            "from": self.from_,
            "gas": self.gas_limit,
            "blockTag": self.block_tag,
        }


@dataclass(frozen=True)
class AssetInfo:
    """Resolved view of an asset symbol and its market wrapper."""

    symbol: str
    is_s_token: bool
    s_token_name: str
    s_token_address: str | None
    underlying_name: str
    underlying_address: str | None
    underlying_decimals: int
    oracle_symbol: str


@dataclass(frozen=True)
class Signature:
    """The v, r and s pieces of an EIP-712 signature as hex strings."""

    v: str
    r: str
    s: str

    @classmethod
    def from_value(cls, value: Any) -> Signature | None:
        """Build a signature from a mapping or ``Signature``; ``None`` if malformed."""

        if isinstance(value, Signature):
            candidate = value
        elif isinstance(value, Mapping):
            candidate = cls(v=value.get("v"), r=value.get("r"), s=value.get("s"))  # type: ignore[arg-type]
        else:
            return None

        if not (candidate.v and candidate.r and candidate.s):
            return None
        return candidate

    @classmethod
    def from_bytes(cls, raw: bytes) -> Signature:
        """Split a 65 byte ``r || s || v`` signature."""

        if len(raw) != 65:
            raise ValueError(f"Expected a 65 byte signature, got {len(raw)} bytes")
        v = raw[64]
        if v < 27:
            v += 27
        return cls(v=hex(v), r="0x" + raw[:32].hex(), s="0x" + raw[32:64].hex())

    def as_tuple(self) -> tuple[int, bytes, bytes]:
        """Return ``(v, r, s)`` in the form contract calls expect."""

        return (
            int(self.v, 16) if isinstance(self.v, str) else int(self.v),
            _to_bytes32(self.r),
            _to_bytes32(self.s),
        )

    def as_dict(self) -> dict[str, str]:
        return {"v": self.v, "r": self.r, "s": self.s}


def _to_bytes32(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return Web3.to_bytes(hexstr=HexStr(value))
