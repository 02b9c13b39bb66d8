from __future__ import annotations

import asyncio
from typing import Any, cast

import pytest
import requests

from strike_api import api
from strike_api.exceptions import ApiError


class DummyResponse:
    def __init__(self, status_code: int, body: Any = None, reason: str = "OK", valid_json: bool = True):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self._valid_json = valid_json

    def json(self) -> Any:
        if not self._valid_json:
            raise ValueError("Expecting value")
        return self._body


class DummySession:
    def __init__(self, response: DummyResponse | Exception) -> None:
        self._response = response
        self.requests: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _session(response: DummyResponse | Exception) -> DummySession:
    return DummySession(response)


def test_account_posts_json_to_mainnet_host() -> None:
    session = _session(DummyResponse(200, {"accounts": []}))

    body = asyncio.run(api.account({"addresses": ["0x01"]}, session=cast(requests.Session, session)))

    assert body == {"accounts": []}
    sent = session.requests[0]
    assert sent["method"] == "POST"
    assert sent["url"] == "https://mainnetapi.strike.org/api/v2/account"
    assert sent["json"] == {"addresses": ["0x01"]}


def test_ropsten_selects_testnet_host() -> None:
    session = _session(DummyResponse(200, {}))

    asyncio.run(api.s_token({"network": "ropsten"}, session=cast(requests.Session, session)))

    assert session.requests[0]["url"] == "https://testnetapi.strike.org/api/stoken"


@pytest.mark.parametrize(
    ("endpoint", "path"),
    [
        ("proposals", "/api/governance/proposals"),
        ("voteReceipts", "/api/governance/proposal_vote_receipts"),
        ("accounts", "/api/governance/accounts"),
        ("anything", "/api/governance/accounts"),
    ],
)
def test_governance_endpoint_paths(endpoint, path) -> None:
    session = _session(DummyResponse(200, {}))

    asyncio.run(api.governance({}, endpoint, session=cast(requests.Session, session)))

    assert session.requests[0]["url"].endswith(path)


def test_market_history_path() -> None:
    session = _session(DummyResponse(200, []))

    asyncio.run(api.market_history({"asset": "0x01"}, session=cast(requests.Session, session)))

    assert session.requests[0]["url"].endswith("/api/market_history/graph")


def test_non_success_status_raises_error_envelope() -> None:
    session = _session(DummyResponse(400, {"error": "bad"}, reason="Bad Request"))

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(api.account({}, session=cast(requests.Session, session)))

    assert excinfo.value.as_dict() == {
        "error": "Strike [api] [account] | Invalid request made to the Strike API.",
        "responseCode": 400,
        "responseMessage": "Bad Request",
    }


def test_unparsable_body() -> None:
    session = _session(DummyResponse(200, reason="OK", valid_json=False))

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(api.s_token({}, session=cast(requests.Session, session)))

    assert excinfo.value.error == "Strike [api] [sToken] | Unable to parse response body."
    assert excinfo.value.response_code == 200


def test_transport_failure_is_wrapped() -> None:
    session = _session(requests.ConnectionError("connection refused"))

    with pytest.raises(ApiError) as excinfo:
        asyncio.run(api.governance({}, "proposals", session=cast(requests.Session, session)))

    assert excinfo.value.error.startswith("Strike [api] [GovernanceService] | ")
    assert excinfo.value.response_code is None
