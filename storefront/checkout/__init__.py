"""
Module 'checkout': machine à états panier -> paiement -> commande.
"""

from .states import CheckoutOutcome, CheckoutState, CheckoutStatus, FailureKind
from .orchestrator import PaymentOrchestrator, CAPTURED_WITHOUT_ORDER

__all__ = [
    "CheckoutOutcome",
    "CheckoutState",
    "CheckoutStatus",
    "FailureKind",
    "PaymentOrchestrator",
    "CAPTURED_WITHOUT_ORDER",
]
