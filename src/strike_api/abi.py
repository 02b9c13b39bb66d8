"""ABI fragments for the Strike protocol contracts.

Only the members the client invokes are listed. Each entry follows the
Solidity JSON ABI schema so it can be handed to ``web3.eth.contract``.
"""

from __future__ import annotations

from typing import Any

from .constants import ContractKind

AbiItem = dict[str, Any]


def _params(declaration: str) -> list[dict[str, str]]:
    params = []
    for chunk in (part.strip() for part in declaration.split(",")):
        if not chunk:
            continue
        pieces = chunk.split()
        name = pieces[1] if len(pieces) > 1 else ""
        params.append({"name": name, "type": pieces[0], "internalType": pieces[0]})
    return params


def _fn(name: str, inputs: str = "", outputs: str = "", mutability: str = "nonpayable") -> AbiItem:
    return {
        "type": "function",
        "name": name,
        "inputs": _params(inputs),
        "outputs": _params(outputs),
        "stateMutability": mutability,
        "constant": mutability in ("view", "pure"),
        "payable": mutability == "payable",
    }


ERC20_ABI: list[AbiItem] = [
    _fn("name", outputs="string", mutability="view"),
    _fn("symbol", outputs="string", mutability="view"),
    _fn("decimals", outputs="uint8", mutability="view"),
    _fn("totalSupply", outputs="uint256", mutability="view"),
    _fn("balanceOf", "address owner", "uint256", "view"),
    _fn("allowance", "address owner, address spender", "uint256", "view"),
    _fn("approve", "address spender, uint256 amount", "bool"),
    _fn("transfer", "address dst, uint256 amount", "bool"),
    _fn("transferFrom", "address src, address dst, uint256 amount", "bool"),
]

_S_TOKEN_COMMON: list[AbiItem] = [
    _fn("decimals", outputs="uint8", mutability="view"),
    _fn("balanceOf", "address owner", "uint256", "view"),
    _fn("balanceOfUnderlying", "address owner", "uint256"),
    _fn("borrowBalanceCurrent", "address account", "uint256"),
    _fn("exchangeRateCurrent", outputs="uint256"),
    _fn("exchangeRateStored", outputs="uint256", mutability="view"),
    _fn("supplyRatePerBlock", outputs="uint256", mutability="view"),
    _fn("borrowRatePerBlock", outputs="uint256", mutability="view"),
    _fn("getCash", outputs="uint256", mutability="view"),
    _fn("redeem", "uint256 redeemTokens", "uint256"),
    _fn("redeemUnderlying", "uint256 redeemAmount", "uint256"),
    _fn("borrow", "uint256 borrowAmount", "uint256"),
]

S_ERC20_ABI: list[AbiItem] = [
    *_S_TOKEN_COMMON,
    _fn("underlying", outputs="address", mutability="view"),
    _fn("mint", "uint256 mintAmount", "uint256"),
    _fn("repayBorrow", "uint256 repayAmount", "uint256"),
    _fn("repayBorrowBehalf", "address borrower, uint256 repayAmount", "uint256"),
]

S_ETHER_ABI: list[AbiItem] = [
    *_S_TOKEN_COMMON,
    _fn("mint", mutability="payable"),
    _fn("repayBorrow", mutability="payable"),
    _fn("repayBorrowBehalf", "address borrower", mutability="payable"),
]

COMPTROLLER_ABI: list[AbiItem] = [
    _fn("oracle", outputs="address", mutability="view"),
    _fn("getAllMarkets", outputs="address[]", mutability="view"),
    _fn("getAssetsIn", "address account", "address[]", "view"),
    _fn("getAccountLiquidity", "address account", "uint256, uint256, uint256", "view"),
    _fn("enterMarkets", "address[] sTokens", "uint256[]"),
    _fn("exitMarket", "address sTokenAddress", "uint256"),
    _fn("claimStrike", "address holder"),
    _fn("claimStrike", "address holder, address[] sTokens"),
    _fn("strikeAccrued", "address holder", "uint256", "view"),
]

PRICE_ORACLE_ABI: list[AbiItem] = [
    _fn("getUnderlyingPrice", "address sToken", "uint256", "view"),
]

STRK_ABI: list[AbiItem] = [
    *ERC20_ABI,
    _fn("nonces", "address account", "uint256", "view"),
    _fn("delegates", "address account", "address", "view"),
    _fn("getCurrentVotes", "address account", "uint96", "view"),
    _fn("delegate", "address delegatee"),
    _fn(
        "delegateBySig",
        "address delegatee, uint256 nonce, uint256 expiry, uint8 v, bytes32 r, bytes32 s",
    ),
]

GOVERNOR_ALPHA_ABI: list[AbiItem] = [
    _fn("proposalCount", outputs="uint256", mutability="view"),
    _fn("state", "uint256 proposalId", "uint8", "view"),
    _fn("castVote", "uint256 proposalId, uint8 support"),
    _fn("castVoteWithReason", "uint256 proposalId, uint8 support, string reason"),
    _fn(
        "castVoteBySig",
        "uint256 proposalId, uint8 support, uint8 v, bytes32 r, bytes32 s",
    ),
]

STRIKE_LENS_ABI: list[AbiItem] = [
    {
        "type": "function",
        "name": "getStrikeBalanceMetadataExt",
        "inputs": _params("address strike, address comptroller, address account"),
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "internalType": "struct StrikeLens.StrikeBalanceMetadataExt",
                "components": _params(
                    "uint256 balance, uint256 votes, address delegate, uint256 allocated"
                ),
            }
        ],
        "stateMutability": "nonpayable",
        "constant": False,
        "payable": False,
    },
]

ABIS: dict[str, list[AbiItem]] = {
    ContractKind.COMPTROLLER.value: COMPTROLLER_ABI,
    ContractKind.S_ERC20.value: S_ERC20_ABI,
    ContractKind.S_ETHER.value: S_ETHER_ABI,
    ContractKind.PRICE_ORACLE.value: PRICE_ORACLE_ABI,
    ContractKind.ERC20.value: ERC20_ABI,
    ContractKind.STRK.value: STRK_ABI,
    ContractKind.GOVERNOR_ALPHA.value: GOVERNOR_ALPHA_ABI,
    ContractKind.STRIKE_LENS.value: STRIKE_LENS_ABI,
}
