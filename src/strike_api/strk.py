"""STRK token balances, rewards and vote delegation."""

from __future__ import annotations

import logging
from typing import Any

from web3 import Web3

from . import eip712, eth
from .config import DEFAULT_CONFIG, StrikeConfig
from .constants import DEFAULT_SIGNATURE_EXPIRY, DELEGATION_DOMAIN_NAME, MAINNET, ContractKind
from .context import StrikeContext
from .eth import TransactionHandle
from .exceptions import ValidationError
from .registry import DEFAULT_REGISTRY, Registry
from .types import CallOptions, Signature

logger = logging.getLogger(__name__)

NONCES_SIGNATURE = "function nonces(address) view returns (uint)"


def _validate_address(operation: str, address: Any) -> str:
    if not isinstance(address, str):
        raise ValidationError(operation, "Argument `_address` must be a string.", "_address", address)
    if not Web3.is_address(address):
        raise ValidationError(
            operation, "Argument `_address` must be a valid Ethereum address.", "_address", address
        )
    return Web3.to_checksum_address(address)


async def _standalone_context(
    provider: Any, config: StrikeConfig, registry: Registry | None
) -> StrikeContext:
    connection = eth.create_provider(CallOptions(provider=provider), config)
    context = StrikeContext(connection, registry or DEFAULT_REGISTRY, config)
    await context.ensure_network()
    return context


async def get_strike_balance(
    address: str,
    provider: Any = MAINNET,
    config: StrikeConfig = DEFAULT_CONFIG,
    registry: Registry | None = None,
) -> str:
    """Return the STRK balance of ``address`` in wei, as a decimal string."""

    operation = "getStrikeBalance"
    account = _validate_address(operation, address)
    context = await _standalone_context(provider, config, registry)

    strk = context.require_address(ContractKind.STRK.value, operation)
    options = context.call_options(abi=context.abi(ContractKind.ERC20))
    balance = await eth.read(strk, "balanceOf", [account], options)
    return str(balance)


async def get_strike_accrued(
    address: str,
    provider: Any = MAINNET,
    config: StrikeConfig = DEFAULT_CONFIG,
    registry: Registry | None = None,
) -> str:
    """Return the STRK rewards ``address`` has accrued but not yet claimed, in wei."""

    operation = "getStrikeAccrued"
    account = _validate_address(operation, address)
    context = await _standalone_context(provider, config, registry)

    lens = context.require_address(ContractKind.STRIKE_LENS.value, operation)
    strk = context.require_address(ContractKind.STRK.value, operation)
    comptroller = context.require_address(ContractKind.COMPTROLLER.value, operation)
    options = context.call_options(abi=context.abi(ContractKind.STRIKE_LENS))

    # (balance, votes, delegate, allocated)
    metadata = await eth.read(lens, "getStrikeBalanceMetadataExt", [strk, comptroller, account], options)
    return str(metadata[3])


class StrikeTokenOperations:
    """STRK actions performed by the client's signer."""

    def __init__(self, context: StrikeContext) -> None:
        self._context = context

    async def claim_strike(self, options: CallOptions | None = None) -> TransactionHandle:
        """Claim the signer's accrued STRK across every market."""

        await self._context.ensure_network()
        operation = "claimStrike"

        holder = await self._context.sender_address(options, operation)
        comptroller = self._context.require_address(ContractKind.COMPTROLLER.value, operation)
        trx_options = self._context.call_options(
            options, abi=self._context.abi(ContractKind.COMPTROLLER)
        )
        return await eth.trx(comptroller, "claimStrike(address)", [holder], trx_options)

    async def delegate(self, address: str, options: CallOptions | None = None) -> TransactionHandle:
        await self._context.ensure_network()
        operation = "delegate"

        delegatee = _validate_address(operation, address)
        strk = self._context.require_address(ContractKind.STRK.value, operation)
        trx_options = self._context.call_options(options, abi=self._context.abi(ContractKind.STRK))
        return await eth.trx(strk, "delegate", [delegatee], trx_options)

    async def delegate_by_sig(
        self,
        address: str,
        nonce: int,
        expiry: int,
        signature: Signature | dict[str, str],
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Relay a delegation signed with :meth:`create_delegate_signature`."""

        await self._context.ensure_network()
        operation = "delegateBySig"

        delegatee = _validate_address(operation, address)
        if not isinstance(nonce, int) or isinstance(nonce, bool):
            raise ValidationError(operation, "Argument `nonce` must be an integer.", "nonce", nonce)
        if not isinstance(expiry, int) or isinstance(expiry, bool):
            raise ValidationError(operation, "Argument `expiry` must be an integer.", "expiry", expiry)
        parsed = Signature.from_value(signature)
        if parsed is None:
            raise ValidationError(
                operation,
                "Argument `signature` must be an object that contains the v, r, and s pieces "
                "of an EIP-712 signature.",
                "signature",
                signature,
            )

        strk = self._context.require_address(ContractKind.STRK.value, operation)
        trx_options = self._context.call_options(options, abi=self._context.abi(ContractKind.STRK))
        v, r, s = parsed.as_tuple()
        return await eth.trx(
            strk, "delegateBySig", [delegatee, nonce, expiry, v, r, s], trx_options
        )

    async def create_delegate_signature(
        self,
        delegatee: str,
        expiry: int = DEFAULT_SIGNATURE_EXPIRY,
    ) -> Signature:
        """Sign a delegation off-chain using the signer's current STRK nonce."""

        network = await self._context.ensure_network()
        operation = "createDelegateSignature"

        delegatee = _validate_address(operation, delegatee)
        strk = self._context.require_address(ContractKind.STRK.value, operation)
        signer = await self._context.sender_address(None, operation)

        nonce = int(
            await eth.read(strk, NONCES_SIGNATURE, [signer], self._context.call_options())
        )
        logger.debug("Delegation nonce for %s is %s", signer, nonce)

        domain = eip712.build_domain(DELEGATION_DOMAIN_NAME, network.id, strk)
        message = {"delegatee": delegatee, "nonce": nonce, "expiry": expiry}
        return await eip712.sign(
            domain,
            "Delegation",
            message,
            {"Delegation": eip712.DELEGATION_TYPE},
            self._context.connection,
            signer=signer,
        )
