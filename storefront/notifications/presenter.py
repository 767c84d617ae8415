"""
OutcomePresenter: transforme des issues en notifications utilisateur.
- present(): puits générique (kind, titre, message, actions) vers la surface de notification.
- Helpers avec les textes de l'application: checkout, ajout au panier, connexion requise.
- Aucun état interne: le presenter ne connaît pas la machine à états.
"""
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union
import logging

from storefront.cart.models import CartItem
from storefront.checkout.states import CheckoutOutcome, FailureKind
from .models import Action, Button, Notification, NotificationKind, NotificationSurface

logger = logging.getLogger(__name__)

SUCCESS_TITLE = "Order Placed"

# (kind, titre, icône) par type d'échec
_FAILURE_COPY: Dict[FailureKind, Tuple[NotificationKind, str, str]] = {
    FailureKind.EMPTY_CART: (NotificationKind.INFO, "Cart Empty", "cart-outline"),
    FailureKind.INTENT_UNAVAILABLE: (NotificationKind.ERROR, "Payment Failed", "cart-outline"),
    FailureKind.PROCESSOR_INIT_ERROR: (NotificationKind.ERROR, "Payment Failed", "cart-outline"),
    FailureKind.PROCESSOR_PRESENT_ERROR: (NotificationKind.ERROR, "Payment Failed", "cart-outline"),
    FailureKind.ORDER_PERSIST_ERROR: (NotificationKind.ERROR, "Checkout Failed", "close-circle"),
}

_ICONS: Dict[NotificationKind, str] = {
    NotificationKind.SUCCESS: "checkmark-circle",
    NotificationKind.INFO: "information-circle",
    NotificationKind.WARNING: "warning",
    NotificationKind.ERROR: "alert-circle",
}

_DEFAULT_LABELS: Dict[Action, str] = {
    Action.ACKNOWLEDGE: "OK",
    Action.NAVIGATE_LOGIN: "Login",
    Action.NAVIGATE_ORDER_HISTORY: "OK",
}

ActionLike = Union[Action, Button]


def _to_buttons(actions: Iterable[ActionLike]) -> Tuple[Button, ...]:
    buttons = tuple(a if isinstance(a, Button) else Button(_DEFAULT_LABELS[a], a) for a in actions)
    return buttons or (Button("OK", Action.ACKNOWLEDGE),)


# module storefront.notifications.presenter
class OutcomePresenter:
    def __init__(self, surface: NotificationSurface):
        self._surface = surface

    def present(
        self,
        kind: NotificationKind,
        title: str,
        message: str,
        actions: Sequence[ActionLike] = (),
        icon: Optional[str] = None,
    ) -> Notification:
        """
        Construit et affiche une notification.
        - actions: Action (libellé par défaut) ou Button (libellé explicite); OK/acknowledge si vide.
        """
        notification = Notification(
            kind=kind,
            title=title,
            message=message,
            icon=icon if icon is not None else _ICONS[kind],
            buttons=_to_buttons(actions),
        )
        self._surface.show(notification)
        return notification

    def present_outcome(self, outcome: CheckoutOutcome) -> Notification:
        """Issue terminale d'un checkout -> notification (message transmis tel quel)."""
        if outcome.ok:
            return self.present(
                NotificationKind.SUCCESS,
                SUCCESS_TITLE,
                outcome.message,
                [Button("OK", Action.NAVIGATE_ORDER_HISTORY)],
                icon="checkmark-circle",
            )
        kind, title, icon = _FAILURE_COPY[outcome.kind]
        return self.present(kind, title, outcome.message, [Action.ACKNOWLEDGE], icon=icon)

    def present_cart_addition(self, item: CartItem, added: bool) -> Notification:
        """Retour de CartStore.add: déjà présent = information, pas une erreur."""
        if added:
            return self.present(
                NotificationKind.SUCCESS,
                "Success",
                f"{item.display_name} has been added to your cart.",
                [Action.ACKNOWLEDGE],
                icon="cart",
            )
        return self.present(
            NotificationKind.INFO,
            "Info",
            f"{item.display_name} is already in your cart.",
            [Action.ACKNOWLEDGE],
            icon="information-circle",
        )

    def present_login_required(self, message: str = "You need to be logged in to continue.") -> Notification:
        """Utilisé par le collaborateur avis/authentification (pas par le checkout)."""
        return self.present(
            NotificationKind.WARNING,
            "Authentication Required",
            message,
            [Button("Cancel", Action.ACKNOWLEDGE), Button("Login", Action.NAVIGATE_LOGIN)],
            icon="warning",
        )


class LoggingSurface:
    """Surface par défaut (sans UI): journalise chaque notification."""

    def show(self, notification: Notification) -> None:
        level = logging.WARNING if notification.kind is NotificationKind.ERROR else logging.INFO
        logger.log(
            level,
            "notification kind=%s title=%r message=%r buttons=%s",
            notification.kind.value,
            notification.title,
            notification.message,
            [b.label for b in notification.buttons],
        )
