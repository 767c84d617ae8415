"""
PaymentOrchestrator: machine à états du checkout (panier -> paiement -> commande).

Séquence stricte, une étape à la fois:
  VALIDATING_CART -> REQUESTING_INTENT -> INITIALIZING_PROCESSOR
  -> PRESENTING_PROCESSOR -> PERSISTING_ORDER -> SUCCEEDED
Chaque étape non terminale peut sortir en FAILED(kind, message).

Garanties:
- Une seule tentative en vol: le drapeau est posé avant le premier await et levé dans finally.
- Aucune relance automatique; une nouvelle tentative redemande un intent frais.
- Aucun timeout propre: les collaborateurs HTTP appliquent le leur.
- Le panier n'est vidé qu'après confirmation de la commande par le serveur.
- Échec de PERSISTING_ORDER: le paiement est déjà capturé, aucune compensation (remboursement)
  n'est tentée; l'incident est journalisé en CRITICAL pour diagnostic.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, List, Optional
import logging

from storefront.cart.models import CartSnapshot
from storefront.orders.gateway import OrderGatewayError
from storefront.orders.models import OrderDraft
from storefront.payments.models import PaymentIntentProvider, PaymentSheet
from .states import CheckoutOutcome, CheckoutState, CheckoutStatus, FailureKind

if TYPE_CHECKING:
    from storefront.orders.gateway import OrderGateway
    from storefront.notifications.presenter import OutcomePresenter

logger = logging.getLogger(__name__)

EMPTY_CART_MESSAGE = "Your cart is empty. Add items before checkout."
INTENT_UNAVAILABLE_MESSAGE = "Unable to start the payment. Please try again."
PAYMENT_FAILED_MESSAGE = "Payment failed."
CHECKOUT_FAILED_MESSAGE = "An error occurred during checkout."
SUCCESS_MESSAGE = (
    "You have successfully purchased the products in your cart. "
    "Check your purchase history for details."
)
# Repère de log pour retrouver les paiements capturés sans commande
CAPTURED_WITHOUT_ORDER = "CAPTURED_WITHOUT_ORDER"

StatusListener = Callable[[CheckoutStatus], None]


def _mask_secret(client_secret: str) -> str:
    # Ne jamais journaliser le secret complet: on garde l'id de l'intent
    return client_secret.split("_secret_", 1)[0] if "_secret_" in client_secret else "***"


# module storefront.checkout.orchestrator
class PaymentOrchestrator:
    def __init__(
        self,
        *,
        snapshot: Callable[[], CartSnapshot],
        clear_cart: Callable[[], None],
        intent_provider: PaymentIntentProvider,
        payment_sheet: PaymentSheet,
        order_gateway: "OrderGateway",
        presenter: "OutcomePresenter",
        merchant_display_name: str,
        navigate: Optional[Callable[[str], None]] = None,
        order_history_route: str = "PurchaseHistory",
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._snapshot = snapshot
        self._clear_cart = clear_cart
        self._intent_provider = intent_provider
        self._payment_sheet = payment_sheet
        self._order_gateway = order_gateway
        self._presenter = presenter
        self._merchant_display_name = merchant_display_name
        self._navigate = navigate
        self._order_history_route = order_history_route
        self._clock = clock

        self._in_flight = False
        self._status = CheckoutStatus(CheckoutState.IDLE)
        self._listeners: List[StatusListener] = []

    # ----- observation -----
    @property
    def state(self) -> CheckoutState:
        return self._status.state

    @property
    def status(self) -> CheckoutStatus:
        return self._status

    @property
    def is_busy(self) -> bool:
        return self._in_flight

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Abonne un lecteur aux transitions; retourne la fonction de désabonnement."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _transition(self, state: CheckoutState, outcome: Optional[CheckoutOutcome] = None) -> None:
        self._status = CheckoutStatus(state, outcome)
        logger.debug("checkout.state -> %s", state.value)
        for listener in list(self._listeners):
            try:
                listener(self._status)
            except Exception:
                logger.exception("checkout.orchestrator listener failed state=%s", state.value)

    # ----- pipeline -----
    async def checkout(self) -> Optional[CheckoutOutcome]:
        """
        Lance une tentative de checkout et retourne son issue terminale.
        Retourne None (tentative ignorée) si un checkout est déjà en cours.
        """
        # Vérification + pose du drapeau sans point de suspension entre les deux
        if self._in_flight:
            logger.warning("checkout ignored: another checkout attempt is in progress")
            return None
        self._in_flight = True
        try:
            outcome = await self._run()
            self._transition(outcome.state, outcome)
            if outcome.ok:
                self._on_success()
            self._presenter.present_outcome(outcome)
            return outcome
        finally:
            self._in_flight = False
            self._transition(CheckoutState.IDLE)

    async def _run(self) -> CheckoutOutcome:
        # 1) Panier
        self._transition(CheckoutState.VALIDATING_CART)
        snapshot = self._snapshot()
        if not snapshot:
            return CheckoutOutcome.failed(FailureKind.EMPTY_CART, EMPTY_CART_MESSAGE)
        total = snapshot.total_price

        # 2) Intent de paiement (frais à chaque tentative)
        self._transition(CheckoutState.REQUESTING_INTENT)
        client_secret = await self._intent_provider.request_intent(total)
        if not client_secret:
            logger.info("checkout failed: payment intent unavailable amount=%s", total)
            return CheckoutOutcome.failed(FailureKind.INTENT_UNAVAILABLE, INTENT_UNAVAILABLE_MESSAGE)

        # 3) Initialisation du processeur
        self._transition(CheckoutState.INITIALIZING_PROCESSOR)
        result = await self._payment_sheet.init(client_secret, self._merchant_display_name)
        if not result.ok:
            logger.warning("checkout failed: processor init error=%s", result.error)
            message = result.error.message or PAYMENT_FAILED_MESSAGE
            return CheckoutOutcome.failed(FailureKind.PROCESSOR_INIT_ERROR, message)

        # 4) Présentation (annulation incluse: même type d'échec)
        self._transition(CheckoutState.PRESENTING_PROCESSOR)
        result = await self._payment_sheet.present()
        if not result.ok:
            logger.warning("checkout failed: processor present error=%s", result.error)
            message = result.error.message or PAYMENT_FAILED_MESSAGE
            return CheckoutOutcome.failed(FailureKind.PROCESSOR_PRESENT_ERROR, message)

        # 5) Commande (le paiement est capturé à partir d'ici)
        self._transition(CheckoutState.PERSISTING_ORDER)
        draft = OrderDraft.from_snapshot(snapshot, client_secret, paid_at=self._clock())
        try:
            order = await self._order_gateway.create_order(draft)
        except OrderGatewayError as e:
            logger.critical(
                "%s checkout order persistence failed after capture intent=%s total=%s items=%s: %s",
                CAPTURED_WITHOUT_ORDER,
                _mask_secret(client_secret),
                draft.total_price,
                list(snapshot.ids()),
                e.message,
            )
            return CheckoutOutcome.failed(FailureKind.ORDER_PERSIST_ERROR, e.message or CHECKOUT_FAILED_MESSAGE)

        logger.info("checkout succeeded order=%s total=%s", order.id, order.total_price)
        return CheckoutOutcome.succeeded(order, SUCCESS_MESSAGE)

    def _on_success(self) -> None:
        # Ordre imposé: vider le panier, indiquer la navigation, puis notifier (appelant)
        self._clear_cart()
        if self._navigate is not None:
            self._navigate(self._order_history_route)
