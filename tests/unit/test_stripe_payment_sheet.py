from unittest.mock import MagicMock

import pytest
import stripe

from storefront.payments import ERROR_CANCELED, StripePaymentSheet, intent_id_from_secret


@pytest.fixture
def stripe_calls(monkeypatch, make_intent):
    """Remplace les appels réseau du SDK Stripe (retrieve/confirm)."""
    retrieve = MagicMock(return_value=make_intent(id="pi_123", status="requires_payment_method"))
    confirm = MagicMock(return_value=make_intent(id="pi_123", status="succeeded"))
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", retrieve, raising=True)
    monkeypatch.setattr(stripe.PaymentIntent, "confirm", confirm, raising=True)
    return retrieve, confirm


def test_intent_id_from_secret():
    assert intent_id_from_secret("pi_123_secret_abc") == "pi_123"
    assert intent_id_from_secret("garbage") == ""
    assert intent_id_from_secret("") == ""


@pytest.mark.asyncio
async def test_init_then_present_confirms_with_configured_method(stripe_calls):
    retrieve, confirm = stripe_calls
    sheet = StripePaymentSheet("pk_test_1", payment_method="pm_card_visa")

    init = await sheet.init("pi_123_secret_abc", "Study Materials Store")
    present = await sheet.present()

    assert init.ok and present.ok
    retrieve.assert_called_once_with("pi_123", client_secret="pi_123_secret_abc", api_key="pk_test_1")
    confirm.assert_called_once_with(
        "pi_123",
        payment_method="pm_card_visa",
        client_secret="pi_123_secret_abc",
        api_key="pk_test_1",
    )


@pytest.mark.asyncio
async def test_init_without_publishable_key_fails(stripe_calls):
    retrieve, _ = stripe_calls

    result = await StripePaymentSheet("").init("pi_123_secret_abc", "Store")

    assert not result.ok
    retrieve.assert_not_called()


@pytest.mark.asyncio
async def test_init_with_malformed_secret_fails(stripe_calls):
    result = await StripePaymentSheet("pk_test_1").init("not-a-secret", "Store")

    assert not result.ok
    assert "client secret" in result.error.message


@pytest.mark.asyncio
async def test_init_rejects_intent_already_processed(stripe_calls, make_intent):
    retrieve, _ = stripe_calls
    retrieve.return_value = make_intent(id="pi_123", status="succeeded")

    result = await StripePaymentSheet("pk_test_1").init("pi_123_secret_abc", "Store")

    assert not result.ok


@pytest.mark.asyncio
async def test_present_before_init_fails(stripe_calls):
    _, confirm = stripe_calls

    result = await StripePaymentSheet("pk_test_1").present()

    assert not result.ok
    confirm.assert_not_called()


@pytest.mark.asyncio
async def test_card_declined_is_returned_as_value(stripe_calls):
    _, confirm = stripe_calls
    confirm.side_effect = stripe.CardError("Your card was declined.", None, "card_declined")
    sheet = StripePaymentSheet("pk_test_1")
    await sheet.init("pi_123_secret_abc", "Store")

    result = await sheet.present()

    assert not result.ok
    assert result.error.message == "Your card was declined."


@pytest.mark.asyncio
async def test_canceled_intent_uses_canceled_code(stripe_calls, make_intent):
    _, confirm = stripe_calls
    confirm.return_value = make_intent(id="pi_123", status="canceled")
    sheet = StripePaymentSheet("pk_test_1")
    await sheet.init("pi_123_secret_abc", "Store")

    result = await sheet.present()

    assert result.error.code == ERROR_CANCELED


@pytest.mark.asyncio
async def test_present_is_single_use_per_init(stripe_calls):
    sheet = StripePaymentSheet("pk_test_1")
    await sheet.init("pi_123_secret_abc", "Store")

    first = await sheet.present()
    second = await sheet.present()

    assert first.ok
    assert not second.ok
