"""
Façade réseau vers l'API commandes.
- create_order: une seule tentative, aucun cache, aucune relance.
- Distingue l'échec transport (aucune réponse) de l'échec applicatif (réponse reçue, success=false).
"""
from typing import Any, Dict, List, Optional
import logging

import httpx
from pydantic import ValidationError

from .models import Order, OrderDraft

logger = logging.getLogger(__name__)

ORDERS_PATH = "/api/orders"
MY_ORDERS_PATH = "/api/orders/myorders"
DEFAULT_ORDER_ERROR = "Failed to place order."


class OrderGatewayError(Exception):
    """Erreur de la façade commandes; message lisible par l'utilisateur."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OrderTransportError(OrderGatewayError):
    """Aucune réponse exploitable (connexion, timeout, corps non décodable, ...)."""


class OrderRejectedError(OrderGatewayError):
    """Réponse reçue mais la commande n'a pas été enregistrée."""


# module storefront.orders.gateway
class OrderGateway:
    def __init__(self, client: httpx.AsyncClient, token: Optional[str] = None):
        self._client = client
        self._token = token

    def _headers(self) -> Dict[str, str]:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    async def create_order(self, draft: OrderDraft) -> Order:
        """
        POST /api/orders avec le brouillon sérialisé (camelCase).
        Retour: Order normalisé extrait de body.data.
        Erreurs: OrderTransportError / OrderRejectedError.
        """
        body = await self._send("POST", ORDERS_PATH, json=draft.to_payload())
        try:
            return Order.model_validate(body.get("data"))
        except ValidationError:
            logger.exception("orders.gateway.create_order invalid order payload")
            raise OrderRejectedError("Invalid order returned by the server.")

    async def list_my_orders(self) -> List[Order]:
        """GET /api/orders/myorders: historique d'achats de l'utilisateur courant."""
        body = await self._send("GET", MY_ORDERS_PATH)
        rows = body.get("data") or []
        try:
            return [Order.model_validate(row) for row in rows]
        except ValidationError:
            logger.exception("orders.gateway.list_my_orders invalid order payload")
            raise OrderRejectedError("Invalid order history returned by the server.")

    async def _send(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.RequestError as e:
            # Transport ou corps illisible: aucune réponse exploitable
            logger.warning("orders.gateway %s %s request error: %r", method, path, e)
            raise OrderTransportError("Unable to reach the server. Check your connection and try again.") from e

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise OrderRejectedError(DEFAULT_ORDER_ERROR, status_code=response.status_code)

        if response.is_success and body.get("success"):
            return body

        message = body.get("message") or body.get("detail") or DEFAULT_ORDER_ERROR
        raise OrderRejectedError(str(message), status_code=response.status_code)
