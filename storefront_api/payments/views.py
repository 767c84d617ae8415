import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from storefront_api.utils.rate_limit import optional_rate_limit
from storefront_api.utils.security import bearer_token, owner_key
from storefront_api.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/payment", tags=["Payments API"])

class PaymentIntentRequest(BaseModel):
    amount: Decimal

# module storefront_api.payments.views
@router.post("/create-payment-intent", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_payment_intent(body: PaymentIntentRequest, request: Request) -> Dict[str, Any]:
    """
    Crée un PaymentIntent Stripe pour le total du panier.
    - Entrée JSON: { "amount": "<décimal>" } (ex: "24.98")
    - Sortie: { "clientSecret": "pi_..._secret_..." }
    - Sécurité: rate limit (10 req / 60s); l'utilisateur (si token) est tracé en metadata.
    - Erreurs: 400 montant invalide, 502 erreur Stripe, 500 erreur interne
    """
    token: Optional[str] = bearer_token(request)
    try:
        return payments_service.create_intent_for_amount(body.amount, user_id=owner_key(token) if token else "")
    except HTTPException:
        raise
    except Exception:
        logger.exception("Erreur create_payment_intent")
        raise HTTPException(status_code=500, detail="Internal server error")
