"""
Parcours complet: panier -> intent (API) -> feuille de paiement (double) -> commande (API).
Le client storefront parle à l'app FastAPI en mémoire via httpx.ASGITransport.
"""
from decimal import Decimal
from unittest.mock import MagicMock

import httpx
import pytest
import stripe

from storefront.checkout import FailureKind
from storefront.notifications import NotificationKind
from storefront.payments.models import ProcessorError
from storefront.session import StorefrontSession
from storefront_api.orders import repository
from storefront_api.utils.security import owner_key


@pytest.fixture
def stripe_create(monkeypatch, make_intent):
    create = MagicMock(return_value=make_intent(id="pi_55", client_secret="pi_55_secret_k"))
    monkeypatch.setattr(stripe.PaymentIntent, "create", create, raising=True)
    return create


def _session(app, sheet, surface, navigations, token="e2e-token"):
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    return StorefrontSession(
        client=client,
        payment_sheet=sheet,
        surface=surface,
        token=token,
        navigate=navigations.append,
    )


@pytest.mark.asyncio
async def test_checkout_places_order_and_shows_it_in_history(app, stripe_create, make_item, payment_sheet, surface, navigations):
    async with _session(app, payment_sheet, surface, navigations) as session:
        assert session.add_to_cart(make_item("exam-1", "9.99")) is True
        assert session.add_to_cart(make_item("exam-1", "9.99")) is False
        session.add_to_cart(make_item("exam-2", "14.99"))

        outcome = await session.checkout()
        history = await session.purchase_history()

    assert outcome.ok
    assert stripe_create.call_args.kwargs["amount"] == 2498
    assert payment_sheet.init_calls[0][0] == "pi_55_secret_k"
    assert len(session.cart) == 0
    assert navigations == ["PurchaseHistory"]
    assert [o.id for o in history] == [outcome.order.id]
    assert history[0].total_price == Decimal("24.98")
    assert repository.fetch_orders(owner_key("e2e-token"))[0].id == outcome.order.id
    # ajout, doublon, ajout, puis issue du checkout
    assert [n.kind for n in surface.notifications] == [
        NotificationKind.SUCCESS,
        NotificationKind.INFO,
        NotificationKind.SUCCESS,
        NotificationKind.SUCCESS,
    ]


@pytest.mark.asyncio
async def test_declined_payment_leaves_cart_and_server_untouched(app, stripe_create, make_item, payment_sheet, surface, navigations):
    payment_sheet.present_error = ProcessorError(code="Failed", message="Your card was declined.")

    async with _session(app, payment_sheet, surface, navigations) as session:
        session.add_to_cart(make_item("exam-1", "9.99"))
        outcome = await session.checkout()

    assert outcome.kind is FailureKind.PROCESSOR_PRESENT_ERROR
    assert len(session.cart) == 1
    assert navigations == []
    assert repository.fetch_orders(owner_key("e2e-token")) == []


@pytest.mark.asyncio
async def test_missing_token_fails_order_after_payment_and_keeps_cart(app, stripe_create, make_item, payment_sheet, surface, navigations):
    async with _session(app, payment_sheet, surface, navigations, token=None) as session:
        session.add_to_cart(make_item("exam-1", "9.99"))
        outcome = await session.checkout()

    assert outcome.kind is FailureKind.ORDER_PERSIST_ERROR
    assert outcome.message == "Not authorized, no token"
    assert payment_sheet.present_calls == 1
    assert len(session.cart) == 1
    assert surface.notifications[-1].title == "Checkout Failed"


@pytest.mark.asyncio
async def test_stripe_outage_reports_intent_unavailable(app, monkeypatch, make_item, payment_sheet, surface, navigations):
    monkeypatch.setattr(
        stripe.PaymentIntent,
        "create",
        MagicMock(side_effect=stripe.APIConnectionError("Network down")),
        raising=True,
    )

    async with _session(app, payment_sheet, surface, navigations) as session:
        session.add_to_cart(make_item("exam-1", "9.99"))
        outcome = await session.checkout()

    assert outcome.kind is FailureKind.INTENT_UNAVAILABLE
    assert payment_sheet.init_calls == []
