"""
Fournisseur d'intent de paiement via l'API backend.
"""
from decimal import Decimal
from typing import Optional
import logging

import httpx

logger = logging.getLogger(__name__)

PAYMENT_INTENT_PATH = "/api/payment/create-payment-intent"


# module storefront.payments.intent
class HttpPaymentIntentProvider:
    """
    Demande un PaymentIntent frais pour un montant.
    - POST {"amount": "<decimal>"} -> {"clientSecret": "..."}
    - Retourne None en cas d'échec (transport, statut, body invalide); l'échec est journalisé ici.
    """

    def __init__(self, client: httpx.AsyncClient, token: Optional[str] = None):
        self._client = client
        self._token = token

    async def request_intent(self, amount: Decimal) -> Optional[str]:
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        try:
            response = await self._client.post(
                PAYMENT_INTENT_PATH,
                json={"amount": str(amount)},
                headers=headers,
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("payments.intent create failed status=%s amount=%s", e.response.status_code, amount)
            return None
        except (httpx.RequestError, ValueError):
            logger.exception("payments.intent create failed amount=%s", amount)
            return None

        client_secret = (body or {}).get("clientSecret") if isinstance(body, dict) else None
        if not client_secret:
            logger.warning("payments.intent response without clientSecret amount=%s", amount)
            return None
        return str(client_secret)
