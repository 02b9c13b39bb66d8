from __future__ import annotations

import asyncio

import pytest
from conftest import address_of, make_context

from strike_api import eip712
from strike_api.exceptions import ValidationError
from strike_api.gov import GovernanceOperations
from strike_api.types import Signature

SIGNATURE = {"v": "0x1b", "r": "0x" + "11" * 32, "s": "0x" + "22" * 32}


def _gov() -> GovernanceOperations:
    return GovernanceOperations(make_context())


def test_cast_vote_targets_governor(chain) -> None:
    asyncio.run(_gov().cast_vote(12, 1))

    _, address, method, parameters, _ = chain.calls[0]
    assert (address, method, parameters) == (address_of("GovernorAlpha"), "castVote", [12, 1])


def test_cast_vote_with_reason(chain) -> None:
    asyncio.run(_gov().cast_vote_with_reason(3, 2, "abstaining"))

    assert chain.calls[0][2:4] == ("castVoteWithReason", [3, 2, "abstaining"])


@pytest.mark.parametrize(
    ("proposal_id", "support", "description"),
    [
        ("1", 1, "Argument `proposalId` must be an integer."),
        (True, 1, "Argument `proposalId` must be an integer."),
        (1.0, 1, "Argument `proposalId` must be an integer."),
        (1, 3, "Argument `support` must be an integer (0, 1, or 2)."),
        (1, -1, "Argument `support` must be an integer (0, 1, or 2)."),
        (1, "1", "Argument `support` must be an integer (0, 1, or 2)."),
    ],
)
def test_vote_validation(chain, proposal_id, support, description) -> None:
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(_gov().cast_vote(proposal_id, support))

    assert excinfo.value.description == description
    assert str(excinfo.value).startswith("Strike [castVote] | ")
    assert chain.calls == []


def test_reason_must_be_string(chain) -> None:
    with pytest.raises(ValidationError, match="Argument `reason` must be a string."):
        asyncio.run(_gov().cast_vote_with_reason(1, 1, 5))  # type: ignore[arg-type]


def test_cast_vote_by_sig_passes_signature_pieces(chain) -> None:
    asyncio.run(_gov().cast_vote_by_sig(4, 0, SIGNATURE))

    _, _, method, parameters, _ = chain.calls[0]
    assert method == "castVoteBySig"
    assert parameters == [4, 0, 27, bytes.fromhex("11" * 32), bytes.fromhex("22" * 32)]


@pytest.mark.parametrize(
    "signature",
    [
        {"v": "", "r": SIGNATURE["r"], "s": SIGNATURE["s"]},
        {"r": SIGNATURE["r"], "s": SIGNATURE["s"]},
        "0x1234",
        None,
    ],
)
def test_cast_vote_by_sig_rejects_malformed_signature(chain, signature) -> None:
    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(_gov().cast_vote_by_sig(4, 0, signature))

    assert "v, r, and s pieces of an EIP-712 signature" in excinfo.value.description
    assert chain.calls == []


def test_create_vote_signature_builds_ballot(monkeypatch) -> None:
    captured = {}

    async def fake_sign(domain, primary_type, message, types, connection, signer=None):
        captured.update(domain=domain, primary_type=primary_type, message=message, types=types)
        return Signature(v="0x1c", r="0x01", s="0x02")

    monkeypatch.setattr(eip712, "sign", fake_sign)

    signature = asyncio.run(_gov().create_vote_signature(9, 1))

    assert signature.v == "0x1c"
    assert captured["primary_type"] == "Ballot"
    assert captured["message"] == {"proposalId": 9, "support": 1}
    assert captured["domain"] == {
        "name": "Strike Governor Alpha",
        "chainId": 1,
        "verifyingContract": address_of("GovernorAlpha"),
    }
    assert captured["types"] == {"Ballot": eip712.BALLOT_TYPE}
