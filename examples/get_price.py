"""Price lookups through the Strike price oracle."""

import asyncio
import logging
import os

from dotenv import load_dotenv

from strike_api import ETH, USDC, Strike

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(level=os.getenv("LOGLEVEL", "INFO"))
logger = logging.getLogger(__name__)


async def main():
    """Print a few prices quoted against USDC and ETH."""

    strike = Strike(os.getenv("RPC_URL", "mainnet"))
    network = await strike.network()
    logger.info("Connected to %s (chain id %s)", network.name, network.id)

    print(f"ETH in USDC:  {await strike.get_price(ETH):.2f}")
    print(f"USDC in ETH:  {await strike.get_price(USDC, ETH):.8f}")

    # sTokens are priced through their market's exchange rate.
    print(f"sETH in USDC: {await strike.get_price('sETH', USDC):.6f}")


if __name__ == "__main__":
    asyncio.run(main())
