import json
from decimal import Decimal

import httpx
import pytest

from storefront.payments import HttpPaymentIntentProvider


def _provider(handler, token=None) -> HttpPaymentIntentProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test")
    return HttpPaymentIntentProvider(client, token=token)


@pytest.mark.asyncio
async def test_request_intent_returns_client_secret_and_sends_decimal_string():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"clientSecret": "pi_9_secret_z"})

    secret = await _provider(handler, token="tok").request_intent(Decimal("24.98"))

    assert secret == "pi_9_secret_z"
    assert seen["path"] == "/api/payment/create-payment-intent"
    assert seen["body"] == {"amount": "24.98"}
    assert seen["auth"] == "Bearer tok"


@pytest.mark.asyncio
async def test_http_error_returns_none():
    def handler(request):
        return httpx.Response(502, json={"success": False, "message": "Stripe down"})

    assert await _provider(handler).request_intent(Decimal("5")) is None


@pytest.mark.asyncio
async def test_response_without_secret_returns_none():
    def handler(request):
        return httpx.Response(200, json={"id": "pi_1"})

    assert await _provider(handler).request_intent(Decimal("5")) is None


@pytest.mark.asyncio
async def test_non_json_response_returns_none():
    def handler(request):
        return httpx.Response(200, text="not json")

    assert await _provider(handler).request_intent(Decimal("5")) is None


@pytest.mark.asyncio
async def test_transport_error_returns_none():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    assert await _provider(handler).request_intent(Decimal("5")) is None


@pytest.mark.asyncio
async def test_undecodable_body_returns_none():
    def handler(request):
        return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip at all")

    assert await _provider(handler).request_intent(Decimal("5")) is None
