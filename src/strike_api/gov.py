"""Governor Alpha voting."""

from __future__ import annotations

import logging
from typing import Any

from . import eip712, eth
from .constants import GOVERNOR_DOMAIN_NAME, VOTE_SUPPORT_VALUES, ContractKind
from .context import StrikeContext
from .eth import TransactionHandle
from .exceptions import ValidationError
from .types import CallOptions, Signature

logger = logging.getLogger(__name__)

_SIGNATURE_ERROR = (
    "Argument `signature` must be an object that contains the v, r, and s pieces "
    "of an EIP-712 signature."
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_vote(operation: str, proposal_id: Any, support: Any) -> None:
    if not _is_int(proposal_id):
        raise ValidationError(
            operation, "Argument `proposalId` must be an integer.", "proposalId", proposal_id
        )
    if not _is_int(support) or support not in VOTE_SUPPORT_VALUES:
        raise ValidationError(
            operation, "Argument `support` must be an integer (0, 1, or 2).", "support", support
        )


class GovernanceOperations:
    """Votes on Governor Alpha proposals, directly or by signature."""

    def __init__(self, context: StrikeContext) -> None:
        self._context = context

    async def cast_vote(
        self,
        proposal_id: int,
        support: int,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Vote against (0), for (1) or abstain (2) on a proposal."""

        await self._context.ensure_network()
        operation = "castVote"
        validate_vote(operation, proposal_id, support)

        governor, trx_options = self._governor(operation, options)
        return await eth.trx(governor, "castVote", [proposal_id, support], trx_options)

    async def cast_vote_with_reason(
        self,
        proposal_id: int,
        support: int,
        reason: str,
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        await self._context.ensure_network()
        operation = "castVoteWithReason"
        validate_vote(operation, proposal_id, support)
        if not isinstance(reason, str):
            raise ValidationError(operation, "Argument `reason` must be a string.", "reason", reason)

        governor, trx_options = self._governor(operation, options)
        return await eth.trx(
            governor, "castVoteWithReason", [proposal_id, support, reason], trx_options
        )

    async def cast_vote_by_sig(
        self,
        proposal_id: int,
        support: int,
        signature: Signature | dict[str, str],
        options: CallOptions | None = None,
    ) -> TransactionHandle:
        """Submit a vote signed earlier with :meth:`create_vote_signature`.

        Any account can relay the transaction; the vote counts for the signer.
        """

        await self._context.ensure_network()
        operation = "castVoteBySig"
        validate_vote(operation, proposal_id, support)
        parsed = Signature.from_value(signature)
        if parsed is None:
            raise ValidationError(operation, _SIGNATURE_ERROR, "signature", signature)

        governor, trx_options = self._governor(operation, options)
        v, r, s = parsed.as_tuple()
        return await eth.trx(
            governor, "castVoteBySig", [proposal_id, support, v, r, s], trx_options
        )

    async def create_vote_signature(self, proposal_id: int, support: int) -> Signature:
        """Sign a ballot off-chain; the result can be relayed with ``cast_vote_by_sig``."""

        network = await self._context.ensure_network()
        operation = "createVoteSignature"
        validate_vote(operation, proposal_id, support)

        governor = self._context.require_address(ContractKind.GOVERNOR_ALPHA.value, operation)
        domain = eip712.build_domain(GOVERNOR_DOMAIN_NAME, network.id, governor)
        message = {"proposalId": proposal_id, "support": support}
        return await eip712.sign(
            domain, "Ballot", message, {"Ballot": eip712.BALLOT_TYPE}, self._context.connection
        )

    def _governor(self, operation: str, options: CallOptions | None) -> tuple[str, CallOptions]:
        governor = self._context.require_address(ContractKind.GOVERNOR_ALPHA.value, operation)
        abi = self._context.abi(ContractKind.GOVERNOR_ALPHA)
        return governor, self._context.call_options(options, abi=abi)
