"""
Accès aux données pour la feature 'orders' (stockage mémoire du processus).
"""
from typing import Dict, List
import logging
import threading

from storefront.orders.models import Order

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_orders_by_owner: Dict[str, List[Order]] = {}

# module storefront_api.orders.repository
def insert_order(owner_id: str, order: Order) -> Order:
    """Enregistre la commande pour son propriétaire et la retourne."""
    with _lock:
        _orders_by_owner.setdefault(owner_id, []).append(order)
    logger.info("orders.repository.insert_order owner=%s order=%s", owner_id, order.id)
    return order

def fetch_orders(owner_id: str) -> List[Order]:
    """Commandes du propriétaire, la plus récente en premier."""
    with _lock:
        rows = list(_orders_by_owner.get(owner_id, []))
    return list(reversed(rows))

def reset() -> None:
    """Vide le stockage (tests, redémarrage à chaud)."""
    with _lock:
        _orders_by_owner.clear()
