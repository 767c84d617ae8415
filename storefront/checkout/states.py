"""
États, types d'échec et issue d'une tentative de checkout.
Une tentative quitte IDLE puis se termine toujours par SUCCEEDED ou FAILED.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from storefront.orders.models import Order


class CheckoutState(str, Enum):
    IDLE = "idle"
    VALIDATING_CART = "validating_cart"
    REQUESTING_INTENT = "requesting_intent"
    INITIALIZING_PROCESSOR = "initializing_processor"
    PRESENTING_PROCESSOR = "presenting_processor"
    PERSISTING_ORDER = "persisting_order"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (CheckoutState.SUCCEEDED, CheckoutState.FAILED)


class FailureKind(str, Enum):
    EMPTY_CART = "empty_cart"
    INTENT_UNAVAILABLE = "intent_unavailable"
    PROCESSOR_INIT_ERROR = "processor_init_error"
    PROCESSOR_PRESENT_ERROR = "processor_present_error"
    # Paiement capturé sans commande enregistrée: pas de compensation automatique
    ORDER_PERSIST_ERROR = "order_persist_error"


@dataclass(frozen=True)
class CheckoutOutcome:
    state: CheckoutState
    message: str
    kind: Optional[FailureKind] = None
    order: Optional[Order] = None

    @classmethod
    def succeeded(cls, order: Order, message: str) -> "CheckoutOutcome":
        return cls(state=CheckoutState.SUCCEEDED, message=message, order=order)

    @classmethod
    def failed(cls, kind: FailureKind, message: str) -> "CheckoutOutcome":
        return cls(state=CheckoutState.FAILED, message=message, kind=kind)

    @property
    def ok(self) -> bool:
        return self.state is CheckoutState.SUCCEEDED


@dataclass(frozen=True)
class CheckoutStatus:
    """Valeur publiée aux abonnés à chaque transition."""
    state: CheckoutState
    outcome: Optional[CheckoutOutcome] = None

    @property
    def is_busy(self) -> bool:
        return self.state is not CheckoutState.IDLE and not self.state.is_terminal
