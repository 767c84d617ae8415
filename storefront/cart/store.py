"""
CartStore: propriétaire unique des lignes du panier.
- Unicité par id produit (add retourne False si déjà présent).
- Mutations explicites (add/remove/clear) + abonnement des lecteurs.
- Aucun verrou: muté uniquement depuis la boucle d'événements de l'UI.
"""
from typing import Callable, Dict, Iterable, List
import logging

from .models import CartItem, CartSnapshot

logger = logging.getLogger(__name__)

CartListener = Callable[[CartSnapshot], None]

# module storefront.cart.store
class CartStore:
    def __init__(self, items: Iterable[CartItem] = ()):
        # dict: ordre d'insertion conservé, clé = id produit
        self._items: Dict[str, CartItem] = {}
        self._listeners: List[CartListener] = []
        for item in items:
            self._items.setdefault(item.id, item)

    def add(self, item: CartItem) -> bool:
        """
        Ajoute la ligne si son id est absent.
        Retourne False si le produit est déjà dans le panier (cas normal, pas une erreur).
        """
        if item.id in self._items:
            return False
        self._items[item.id] = item
        self._notify()
        return True

    def remove(self, item_id: str) -> None:
        """Retire la ligne; sans effet si l'id est absent."""
        if self._items.pop(item_id, None) is not None:
            self._notify()

    def clear(self) -> None:
        """Vide le panier (après confirmation serveur de la commande uniquement)."""
        if not self._items:
            return
        self._items.clear()
        self._notify()

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(self._items.values())

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Enregistre un lecteur notifié avec le nouveau snapshot après chaque mutation effective.
        Retourne la fonction de désabonnement.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("cart.store listener failed")

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items
