"""Client for the off-chain Strike analytics API.

Every service is a JSON ``POST`` against ``mainnetapi.strike.org`` (or the
testnet host when ``options["network"] == "ropsten"``). Requests run in a
worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import requests

from .config import DEFAULT_CONFIG, StrikeConfig
from .constants import ROPSTEN
from .exceptions import ERROR_PREFIX, ApiError

logger = logging.getLogger(__name__)

ACCOUNT_PATH = "/api/v2/account"
S_TOKEN_PATH = "/api/stoken"
MARKET_HISTORY_PATH = "/api/market_history/graph"
GOVERNANCE_PATHS = {
    "proposals": "/api/governance/proposals",
    "voteReceipts": "/api/governance/proposal_vote_receipts",
}
GOVERNANCE_ACCOUNTS_PATH = "/api/governance/accounts"


async def account(
    options: Mapping[str, Any] | None = None,
    *,
    session: requests.Session | None = None,
    config: StrikeConfig = DEFAULT_CONFIG,
) -> Any:
    """Query the account service (balances, health and sToken positions)."""
    return await _query_api(options, "account", ACCOUNT_PATH, session, config)


async def s_token(
    options: Mapping[str, Any] | None = None,
    *,
    session: requests.Session | None = None,
    config: StrikeConfig = DEFAULT_CONFIG,
) -> Any:
    """Query the sToken service (rates, totals and prices per market)."""
    return await _query_api(options, "sToken", S_TOKEN_PATH, session, config)


async def market_history(
    options: Mapping[str, Any] | None = None,
    *,
    session: requests.Session | None = None,
    config: StrikeConfig = DEFAULT_CONFIG,
) -> Any:
    return await _query_api(options, "Market History", MARKET_HISTORY_PATH, session, config)


async def governance(
    options: Mapping[str, Any] | None,
    endpoint: str,
    *,
    session: requests.Session | None = None,
    config: StrikeConfig = DEFAULT_CONFIG,
) -> Any:
    """Query governance data.

    ``endpoint`` is ``"proposals"`` or ``"voteReceipts"``; anything else
    selects the governance accounts listing.
    """

    path = GOVERNANCE_PATHS.get(endpoint, GOVERNANCE_ACCOUNTS_PATH)
    return await _query_api(options, "GovernanceService", path, session, config)


def api_host(options: Mapping[str, Any] | None, config: StrikeConfig = DEFAULT_CONFIG) -> str:
    if options and options.get("network") == ROPSTEN:
        return config.api_hosts["testnet"]
    return config.api_hosts["mainnet"]


async def _query_api(
    options: Mapping[str, Any] | None,
    name: str,
    path: str,
    session: requests.Session | None,
    config: StrikeConfig,
) -> Any:
    return await asyncio.to_thread(_post_json, options, name, path, session, config)


def _post_json(
    options: Mapping[str, Any] | None,
    name: str,
    path: str,
    session: requests.Session | None,
    config: StrikeConfig,
) -> Any:
    url = api_host(options, config) + path
    http = session or requests

    logger.debug("POST %s", url)
    try:
        response = http.request(
            "POST",
            url,
            json=dict(options or {}),
            headers={"Content-Type": "application/json"},
            timeout=config.request_timeout,
        )
    except requests.RequestException as exc:
        raise ApiError(_message(name, str(exc))) from exc

    code = response.status_code
    reason = response.reason
    try:
        body = response.json()
    except ValueError as exc:
        raise ApiError(
            _message(name, "Unable to parse response body."), code, reason
        ) from exc

    if not 200 <= code <= 299:
        raise ApiError(
            _message(name, "Invalid request made to the Strike API."),
            code,
            reason,
            details={"body": body},
        )
    return body


def _message(name: str, description: str) -> str:
    return f"{ERROR_PREFIX} [api] [{name}] | {description}"
