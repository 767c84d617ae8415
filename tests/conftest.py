import os
import asyncio
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest
import stripe
from fastapi.testclient import TestClient

# Désactive l'init fastapi-limiter (évite toute connexion Redis pendant les tests)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

from storefront.cart import CartItem, CartStore
from storefront.checkout import PaymentOrchestrator
from storefront.notifications import OutcomePresenter
from storefront.orders import Order, OrderDraft
from storefront.payments.models import ProcessorError, ProcessorResult
from storefront_api.app_setup.factory import create_app
from storefront_api.orders import repository as orders_repository

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


# ----- Doubles des collaborateurs -----

class FakeIntentProvider:
    """Retourne un client secret (ou None); gate optionnel pour suspendre la requête."""

    def __init__(self, client_secret: Optional[str] = "pi_123_secret_abc"):
        self.client_secret = client_secret
        self.calls: List[Decimal] = []
        self.gate: Optional[asyncio.Event] = None
        self.started = asyncio.Event()

    async def request_intent(self, amount: Decimal) -> Optional[str]:
        self.calls.append(amount)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        return self.client_secret


class FakePaymentSheet:
    def __init__(self, init_error: Optional[ProcessorError] = None, present_error: Optional[ProcessorError] = None):
        self.init_error = init_error
        self.present_error = present_error
        self.init_calls: List[tuple] = []
        self.present_calls = 0

    async def init(self, client_secret: str, merchant_display_name: str) -> ProcessorResult:
        self.init_calls.append((client_secret, merchant_display_name))
        return ProcessorResult(error=self.init_error)

    async def present(self) -> ProcessorResult:
        self.present_calls += 1
        return ProcessorResult(error=self.present_error)


class FakeOrderGateway:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.drafts: List[OrderDraft] = []

    async def create_order(self, draft: OrderDraft) -> Order:
        self.drafts.append(draft)
        if self.error is not None:
            raise self.error
        return Order(**draft.model_dump(), id=f"order-{len(self.drafts)}")


class RecordingSurface:
    def __init__(self):
        self.notifications: List[Any] = []

    def show(self, notification) -> None:
        self.notifications.append(notification)


# ----- Données -----

@pytest.fixture
def make_item():
    def _make(item_id: str = "exam-1", price: Any = "9.99", name: Optional[str] = None) -> CartItem:
        return CartItem(
            _id=item_id,
            examName=name or f"Exam {item_id}",
            subjectName="Mathematics",
            subjectCode="0580",
            price=price,
            image=f"https://cdn.example.test/{item_id}.png",
        )
    return _make


@pytest.fixture
def make_intent():
    """PaymentIntent du SDK (StripeObject), tel que renvoyé par create/retrieve/confirm."""
    def _make(**fields: Any) -> stripe.PaymentIntent:
        return stripe.PaymentIntent.construct_from(fields, "sk_test_123")
    return _make


@pytest.fixture
def cart(make_item) -> CartStore:
    return CartStore([make_item("exam-1", "9.99"), make_item("exam-2", "14.99")])


@pytest.fixture
def intent_provider() -> FakeIntentProvider:
    return FakeIntentProvider()


@pytest.fixture
def payment_sheet() -> FakePaymentSheet:
    return FakePaymentSheet()


@pytest.fixture
def order_gateway() -> FakeOrderGateway:
    return FakeOrderGateway()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def navigations() -> List[str]:
    return []


@pytest.fixture
def orchestrator(cart, intent_provider, payment_sheet, order_gateway, surface, navigations) -> PaymentOrchestrator:
    return PaymentOrchestrator(
        snapshot=cart.snapshot,
        clear_cart=cart.clear,
        intent_provider=intent_provider,
        payment_sheet=payment_sheet,
        order_gateway=order_gateway,
        presenter=OutcomePresenter(surface),
        merchant_display_name="Study Materials Store",
        navigate=navigations.append,
    )


# ----- API -----

@pytest.fixture(autouse=True)
def _reset_orders_repository():
    orders_repository.reset()
    try:
        yield
    finally:
        orders_repository.reset()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer test-token"}
