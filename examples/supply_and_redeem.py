"""Supply ETH to Strike, use it as collateral and redeem it again."""

import asyncio
import logging
import os

from dotenv import load_dotenv

from strike_api import ETH, Strike, StrikeError

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(level=os.getenv("LOGLEVEL", "INFO"))
logger = logging.getLogger(__name__)


async def main():
    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")

    strike = Strike(os.getenv("RPC_URL", "mainnet"), private_key=private_key)

    try:
        handle = await strike.supply(ETH, "0.05")
        print(f"Supply sent: {handle.hash}")
        receipt = await handle.wait()
        print(f"Supply mined in block {receipt['blockNumber']}")

        handle = await strike.enter_markets(ETH)
        await handle.wait()
        print("sETH entered as collateral")

        handle = await strike.redeem(ETH, "0.05")
        receipt = await handle.wait()
        print(f"Redeemed in block {receipt['blockNumber']}")
    except StrikeError as exc:
        logger.error("Strike call failed: %s", exc)


if __name__ == "__main__":
    asyncio.run(main())
