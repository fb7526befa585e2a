from __future__ import annotations

import httpx
import pytest

from knot_cloud.domain.entities.errors import BrokerError
from knot_cloud.infrastructure.gateways.history_gateway import HttpHistoryGateway


class _StubResponse:
    def __init__(self, status_code: int, json_data=None, text: str = ""):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("Expecting value")
        return self._json


class _StubAsyncClient:
    def __init__(self, response: _StubResponse | None = None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, params: dict, headers: dict):
        self.calls.append({"url": url, "params": params, "headers": headers})
        if self._error is not None:
            raise self._error
        return self._response


@pytest.mark.asyncio
async def test_fetch_data_sends_auth_headers(monkeypatch, credentials) -> None:
    stub = _StubAsyncClient(_StubResponse(200, {"data": [{"data": {"value": 1}}]}))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: stub)

    gateway = HttpHistoryGateway()
    records = await gateway.fetch_data(credentials, "abcd1234ef56", limit=5)

    assert records == [{"data": {"value": 1}}]
    assert stub.calls == [
        {
            "url": "http://knot.local:3000/data/abcd1234ef56",
            "params": {"limit": "5", "start": "", "finish": ""},
            "headers": {
                "meshblu_auth_uuid": "user-uuid",
                "meshblu_auth_token": "user-token",
            },
        }
    ]


@pytest.mark.asyncio
async def test_fetch_data_uses_configured_base_url(monkeypatch, credentials) -> None:
    stub = _StubAsyncClient(_StubResponse(200, []))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: stub)

    gateway = HttpHistoryGateway("https://api.knot.local/", timeout=5.0)
    await gateway.fetch_data(credentials, "abcd1234ef56")

    assert stub.calls[0]["url"] == "https://api.knot.local/data/abcd1234ef56"


@pytest.mark.asyncio
async def test_fetch_data_raises_on_http_error(monkeypatch, credentials) -> None:
    stub = _StubAsyncClient(_StubResponse(401, {}, text="unauthorized"))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: stub)

    with pytest.raises(BrokerError) as exc:
        await HttpHistoryGateway().fetch_data(credentials, "abcd1234ef56")

    assert "401" in str(exc.value)
    assert exc.value.details == {"status_code": 401}


@pytest.mark.asyncio
async def test_fetch_data_raises_on_request_error(monkeypatch, credentials) -> None:
    request = httpx.Request("GET", "http://knot.local:3000/data/abcd1234ef56")
    stub = _StubAsyncClient(error=httpx.ConnectError("refused", request=request))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: stub)

    with pytest.raises(BrokerError) as exc:
        await HttpHistoryGateway().fetch_data(credentials, "abcd1234ef56")

    assert isinstance(exc.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_data_rejects_unexpected_body(monkeypatch, credentials) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda timeout: _StubAsyncClient(_StubResponse(200))
    )

    with pytest.raises(BrokerError):
        await HttpHistoryGateway().fetch_data(credentials, "abcd1234ef56")

    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(_StubResponse(200, {"data": "none"})),
    )

    with pytest.raises(BrokerError):
        await HttpHistoryGateway().fetch_data(credentials, "abcd1234ef56")
