"""
Module 'orders': brouillon/commande et façade réseau vers l'API commandes.
"""

from .models import OrderItem, OrderDraft, Order, round_total, PAYMENT_METHOD_CARD
from .gateway import (
    OrderGateway,
    OrderGatewayError,
    OrderTransportError,
    OrderRejectedError,
)

__all__ = [
    # models
    "OrderItem",
    "OrderDraft",
    "Order",
    "round_total",
    "PAYMENT_METHOD_CARD",
    # gateway
    "OrderGateway",
    "OrderGatewayError",
    "OrderTransportError",
    "OrderRejectedError",
]
