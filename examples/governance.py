"""STRK balances, delegation and governance voting."""

import asyncio
import logging
import os

from dotenv import load_dotenv

from strike_api import DEFAULT_REGISTRY, Strike, api, get_strike_accrued, get_strike_balance

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(level=os.getenv("LOGLEVEL", "INFO"))
logger = logging.getLogger(__name__)


async def main():
    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")

    # GovernorAlpha and StrikeLens are not bundled; take them from the environment.
    registry = DEFAULT_REGISTRY.with_addresses(
        "mainnet",
        {
            "GovernorAlpha": os.environ["GOVERNOR_ALPHA_ADDRESS"],
            "StrikeLens": os.environ["STRIKE_LENS_ADDRESS"],
        },
    )

    rpc_url = os.getenv("RPC_URL", "mainnet")
    strike = Strike(rpc_url, private_key=private_key, registry=registry)
    me = strike.connection.address

    print(f"STRK balance: {await get_strike_balance(me, rpc_url)}")
    print(f"STRK accrued: {await get_strike_accrued(me, rpc_url, registry=registry)}")

    # Delegate to ourselves through a signature anyone could relay.
    signature = await strike.create_delegate_signature(me)
    print(f"Delegation signature: {signature.as_dict()}")

    proposals = await api.governance({"page_size": 5}, "proposals")
    print(f"Recent proposals: {proposals}")

    proposal_id = os.getenv("PROPOSAL_ID")
    if proposal_id:
        handle = await strike.cast_vote_with_reason(int(proposal_id), 1, "Supporting the proposal")
        print(f"Vote sent: {handle.hash}")


if __name__ == "__main__":
    asyncio.run(main())
