"""
Racine de composition du client: relie panier, presenter, collaborateurs et orchestrateur.

Usage:
    async with StorefrontSession.from_settings() as session:
        session.add_to_cart(item)
        outcome = await session.checkout()
"""
from typing import Callable, Iterable, List, Optional
import logging

import httpx

from storefront import config
from storefront.cart import CartItem, CartStore
from storefront.checkout import CheckoutOutcome, PaymentOrchestrator
from storefront.notifications import LoggingSurface, NotificationSurface, OutcomePresenter
from storefront.orders import Order, OrderGateway
from storefront.payments import (
    HttpPaymentIntentProvider,
    PaymentIntentProvider,
    PaymentSheet,
    StripePaymentSheet,
)

logger = logging.getLogger(__name__)


def _log_navigation(route: str) -> None:
    logger.info("navigation hint -> %s", route)


# module storefront.session
class StorefrontSession:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        payment_sheet: PaymentSheet,
        surface: Optional[NotificationSurface] = None,
        intent_provider: Optional[PaymentIntentProvider] = None,
        token: Optional[str] = None,
        navigate: Optional[Callable[[str], None]] = None,
        items: Iterable[CartItem] = (),
        merchant_display_name: str = config.MERCHANT_DISPLAY_NAME,
        order_history_route: str = config.ORDER_HISTORY_ROUTE,
    ):
        self._client = client
        self.cart = CartStore(items)
        self.presenter = OutcomePresenter(surface or LoggingSurface())
        self.orders = OrderGateway(client, token=token)
        self.orchestrator = PaymentOrchestrator(
            snapshot=self.cart.snapshot,
            clear_cart=self.cart.clear,
            intent_provider=intent_provider or HttpPaymentIntentProvider(client, token=token),
            payment_sheet=payment_sheet,
            order_gateway=self.orders,
            presenter=self.presenter,
            merchant_display_name=merchant_display_name,
            navigate=navigate or _log_navigation,
            order_history_route=order_history_route,
        )

    @classmethod
    def from_settings(
        cls,
        surface: Optional[NotificationSurface] = None,
        navigate: Optional[Callable[[str], None]] = None,
    ) -> "StorefrontSession":
        """Construit une session à partir de storefront.config (.env)."""
        client = httpx.AsyncClient(base_url=config.API_BASE_URL, timeout=config.HTTP_TIMEOUT_SECONDS)
        sheet = StripePaymentSheet(config.STRIPE_PUBLISHABLE_KEY, payment_method=config.STRIPE_PAYMENT_METHOD)
        return cls(
            client=client,
            payment_sheet=sheet,
            surface=surface,
            token=config.API_TOKEN or None,
            navigate=navigate,
        )

    def add_to_cart(self, item: CartItem) -> bool:
        added = self.cart.add(item)
        self.presenter.present_cart_addition(item, added)
        return added

    def remove_from_cart(self, item_id: str) -> None:
        self.cart.remove(item_id)

    async def checkout(self) -> Optional[CheckoutOutcome]:
        return await self.orchestrator.checkout()

    async def purchase_history(self) -> List[Order]:
        return await self.orders.list_my_orders()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "StorefrontSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
