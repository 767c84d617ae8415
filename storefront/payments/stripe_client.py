"""
Adaptateur Stripe côté client: rôle de la feuille de paiement (init / present).
- init: vérifie le PaymentIntent via la clé publique + client secret.
- present: confirme l'intent avec le moyen de paiement configuré et exige status='succeeded'.
- Les erreurs Stripe sont renvoyées en valeur (ProcessorResult.error), jamais levées.
- Les appels SDK (bloquants) s'exécutent dans un thread pour ne pas geler la boucle.
"""
import asyncio
import logging
from typing import Optional

import stripe

from .models import (
    ERROR_CANCELED,
    ERROR_FAILED,
    ProcessorError,
    ProcessorResult,
)

logger = logging.getLogger(__name__)

SECRET_SEPARATOR = "_secret_"
PRESENTABLE_STATUSES = {"requires_payment_method", "requires_confirmation"}


def intent_id_from_secret(client_secret: str) -> str:
    """pi_123_secret_abc -> pi_123 ; chaîne vide si le format est inattendu."""
    if not client_secret or SECRET_SEPARATOR not in client_secret:
        return ""
    return client_secret.split(SECRET_SEPARATOR, 1)[0]


def _failure(message: str, code: str = ERROR_FAILED) -> ProcessorResult:
    return ProcessorResult(error=ProcessorError(code=code, message=message))


def _stripe_message(e: Exception) -> str:
    # CardError expose un message destiné au porteur de carte
    return getattr(e, "user_message", None) or str(e) or "Payment failed."


# module storefront.payments.stripe_client
class StripePaymentSheet:
    def __init__(self, publishable_key: str, payment_method: str = "pm_card_visa"):
        self._publishable_key = publishable_key
        self._payment_method = payment_method
        self._client_secret: Optional[str] = None
        self._intent_id: Optional[str] = None
        self._merchant_display_name = ""

    async def init(self, client_secret: str, merchant_display_name: str) -> ProcessorResult:
        if not self._publishable_key:
            return _failure("Stripe publishable key is not configured.")
        intent_id = intent_id_from_secret(client_secret)
        if not intent_id:
            return _failure("Invalid payment intent client secret.")

        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.retrieve,
                intent_id,
                client_secret=client_secret,
                api_key=self._publishable_key,
            )
        except stripe.StripeError as e:
            logger.warning("payments.stripe_client init failed intent=%s: %s", intent_id, e)
            return _failure(_stripe_message(e))

        status = getattr(intent, "status", None)
        if status not in PRESENTABLE_STATUSES:
            return _failure(f"This payment cannot be completed (status={status}).")

        self._client_secret = client_secret
        self._intent_id = intent_id
        self._merchant_display_name = merchant_display_name
        return ProcessorResult()

    async def present(self) -> ProcessorResult:
        if not self._client_secret or not self._intent_id:
            return _failure("The payment sheet has not been initialized.")

        intent_id, client_secret = self._intent_id, self._client_secret
        # Une présentation par init
        self._client_secret = None
        self._intent_id = None

        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.confirm,
                intent_id,
                payment_method=self._payment_method,
                client_secret=client_secret,
                api_key=self._publishable_key,
            )
        except stripe.StripeError as e:
            logger.warning("payments.stripe_client confirm failed intent=%s: %s", intent_id, e)
            return _failure(_stripe_message(e))

        status = getattr(intent, "status", None)
        if status == "succeeded":
            logger.info("payments.stripe_client confirmed intent=%s merchant=%s", intent_id, self._merchant_display_name)
            return ProcessorResult()
        if status == "canceled":
            return _failure("The payment has been canceled.", code=ERROR_CANCELED)
        return _failure(f"Payment not completed (status={status}).")
