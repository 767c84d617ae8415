"""
Cas d'usage 'payments': validation du montant puis création de l'intent Stripe.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict
import logging

import stripe
from fastapi import HTTPException

from storefront_api import config
from . import stripe_client

logger = logging.getLogger(__name__)

def amount_to_cents(amount: Any) -> int:
    """
    Convertit un montant décimal ("12.50", 12.5, 12) en centimes (1250).
    - Soulève HTTPException(400) si le montant est absent, invalide ou <= 0.
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid amount")
    if not value.is_finite() or value <= 0:
        raise HTTPException(status_code=400, detail="Invalid amount")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def create_intent_for_amount(amount: Any, user_id: str = "") -> Dict[str, Any]:
    """
    Crée un PaymentIntent et retourne {"clientSecret": ...}.
    Erreurs Stripe -> HTTPException(502) avec le message Stripe.
    """
    cents = amount_to_cents(amount)
    try:
        intent = stripe_client.create_payment_intent(
            amount_cents=cents,
            currency=config.PAYMENT_CURRENCY,
            metadata={"user_id": user_id} if user_id else {},
        )
    except stripe.StripeError as e:
        logger.exception("payments.service.create_intent_for_amount failed cents=%s", cents)
        raise HTTPException(status_code=502, detail=getattr(e, "user_message", None) or str(e))
    client_secret = intent.get("client_secret")
    if not client_secret:
        raise HTTPException(status_code=502, detail="Payment intent without client secret")
    return {"clientSecret": client_secret}
