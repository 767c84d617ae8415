"""Couche service des commandes.
Rôles:
- Valider un brouillon payé (articles, paiement confirmé, total cohérent).
- Créer la commande normalisée (_id, createdAt) et la persister.
- Lister l'historique d'achats d'un utilisateur.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import List
from uuid import uuid4
import logging

from fastapi import HTTPException

from storefront.orders.models import Order, OrderDraft, round_total
from . import repository

logger = logging.getLogger(__name__)

def _expected_total(draft: OrderDraft) -> Decimal:
    return round_total(sum((item.price * item.quantity for item in draft.order_items), Decimal("0")))

def create_order(owner_id: str, draft: OrderDraft) -> Order:
    """Valide le brouillon puis enregistre la commande.
    - 400 si aucun article, paiement non confirmé (isPaid/paidAt) ou total incohérent.
    """
    if not draft.order_items:
        raise HTTPException(status_code=400, detail="No order items")
    if not draft.is_paid or draft.paid_at is None:
        raise HTTPException(status_code=400, detail="Order is not paid")
    if not draft.payment_result.get("clientSecret"):
        raise HTTPException(status_code=400, detail="Missing payment result")
    expected = _expected_total(draft)
    if round_total(draft.total_price) != expected:
        logger.warning("orders.service.create_order total mismatch owner=%s got=%s expected=%s", owner_id, draft.total_price, expected)
        raise HTTPException(status_code=400, detail="Total price mismatch")

    order = Order(
        **draft.model_dump(),
        id=uuid4().hex,
        created_at=datetime.now(timezone.utc),
    )
    return repository.insert_order(owner_id, order)

def list_orders(owner_id: str) -> List[Order]:
    return repository.fetch_orders(owner_id)
