"""
Module 'payments': contrats processeur/intent, fournisseur HTTP d'intent et adaptateur Stripe.
"""

from .models import (
    ERROR_CANCELED,
    ERROR_FAILED,
    ProcessorError,
    ProcessorResult,
    PaymentIntentProvider,
    PaymentSheet,
)
from .intent import HttpPaymentIntentProvider
from .stripe_client import StripePaymentSheet, intent_id_from_secret

__all__ = [
    # contrats
    "ERROR_CANCELED",
    "ERROR_FAILED",
    "ProcessorError",
    "ProcessorResult",
    "PaymentIntentProvider",
    "PaymentSheet",
    # adaptateurs
    "HttpPaymentIntentProvider",
    "StripePaymentSheet",
    "intent_id_from_secret",
]
