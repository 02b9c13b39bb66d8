"""EIP-712 typed data construction and signing."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from eth_account.messages import encode_typed_data
from hexbytes import HexBytes

from .eth import Connection
from .exceptions import RpcError
from .types import Signature

logger = logging.getLogger(__name__)

SIGN_TYPED_DATA_V4 = "eth_signTypedData_v4"

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

DELEGATION_TYPE = [
    {"name": "delegatee", "type": "address"},
    {"name": "nonce", "type": "uint256"},
    {"name": "expiry", "type": "uint256"},
]

BALLOT_TYPE = [
    {"name": "proposalId", "type": "uint256"},
    {"name": "support", "type": "uint8"},
]


def build_domain(name: str, chain_id: int, verifying_contract: str) -> dict[str, Any]:
    return {"name": name, "chainId": chain_id, "verifyingContract": verifying_contract}


def build_typed_data(
    domain: Mapping[str, Any],
    primary_type: str,
    message: Mapping[str, Any],
    types: Mapping[str, Sequence[Mapping[str, str]]],
) -> dict[str, Any]:
    """Assemble the full ``eth_signTypedData_v4`` payload."""

    return {
        "types": {"EIP712Domain": EIP712_DOMAIN_TYPE, **types},
        "domain": dict(domain),
        "primaryType": primary_type,
        "message": dict(message),
    }


async def sign(
    domain: Mapping[str, Any],
    primary_type: str,
    message: Mapping[str, Any],
    types: Mapping[str, Sequence[Mapping[str, str]]],
    connection: Connection,
    signer: str | None = None,
) -> Signature:
    """Sign typed data with the connection's signer.

    A local account signs in-process. Without one the request is sent to the
    node as ``eth_signTypedData_v4`` on behalf of ``signer``.
    """

    payload = build_typed_data(domain, primary_type, message, types)

    if connection.account is not None:
        signable = encode_typed_data(full_message=payload)
        signed = connection.account.sign_message(signable)
        logger.debug("Signed %s locally for %s", primary_type, connection.account.address)
        return Signature.from_bytes(bytes(signed.signature))

    address = signer or connection.address
    try:
        response = await connection.web3.provider.make_request(
            SIGN_TYPED_DATA_V4, [address, json.dumps(payload)]
        )
    except Exception as exc:
        raise RpcError(
            f"Error occurred during [{SIGN_TYPED_DATA_V4}]. See {{error}}.",
            error=exc,
            method=SIGN_TYPED_DATA_V4,
            parameters=[address, payload],
        ) from exc

    if "error" in response or not response.get("result"):
        raise RpcError(
            f"Error occurred during [{SIGN_TYPED_DATA_V4}]. See {{error}}.",
            method=SIGN_TYPED_DATA_V4,
            parameters=[address, payload],
            details={"error": response.get("error")},
        )

    return Signature.from_bytes(bytes(HexBytes(response["result"])))
