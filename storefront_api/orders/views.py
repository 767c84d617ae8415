# module storefront_api.orders.views

"""Endpoints commandes consommés par le client storefront.
- POST /api/orders: enregistre une commande payée (201, {success, data}).
- GET /api/orders/myorders: historique d'achats de l'utilisateur.
Sécurité:
- require_user: token Bearer obligatoire.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from typing import Any, Dict
import logging

from storefront.orders.models import OrderDraft
from storefront_api.utils.security import require_user
from storefront_api.orders import service as orders_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["Orders API"])


@router.post("")
def api_create_order(draft: OrderDraft, user: Dict[str, Any] = Depends(require_user)):
    """Crée une commande à partir du brouillon du client.
    - Le corps suit le format camelCase (orderItems, totalPrice, isPaid, paidAt, paymentResult).
    - Erreurs métier: {success: false, message} avec 400.
    """
    try:
        order = orders_service.create_order(user["id"], draft)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Erreur api_create_order")
        raise HTTPException(status_code=500, detail=str(e))
    return JSONResponse(
        status_code=201,
        content={"success": True, "data": order.model_dump(mode="json", by_alias=True)},
    )


@router.get("/myorders")
def api_my_orders(user: Dict[str, Any] = Depends(require_user)):
    """Historique d'achats de l'utilisateur courant (plus récent en premier)."""
    orders = orders_service.list_orders(user["id"])
    return {"success": True, "data": [o.model_dump(mode="json", by_alias=True) for o in orders]}
