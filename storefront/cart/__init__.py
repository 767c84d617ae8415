"""
Module 'cart': lignes du panier, snapshot en lecture seule et store mutable.
"""

from .models import CartItem, CartSnapshot
from .store import CartStore

__all__ = [
    "CartItem",
    "CartSnapshot",
    "CartStore",
]
