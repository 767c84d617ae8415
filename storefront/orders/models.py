"""
Modèles de commande partagés par le client (brouillon) et l'API (enregistrement).
- Champs Python en snake_case, JSON en camelCase (orderItems, totalPrice, ...).
- Montants en Decimal; le total est arrondi à 2 décimales.
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storefront.cart.models import CartSnapshot

TWO_PLACES = Decimal("0.01")
PAYMENT_METHOD_CARD = "Card"


def round_total(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class OrderItem(_WireModel):
    product: str
    exam_name: str
    subject_name: str = ""
    subject_code: str = ""
    price: Decimal
    image: str = ""
    quantity: int = 1

    @field_validator("product", mode="before")
    @classmethod
    def product_id(cls, v: Any) -> Any:
        # Le backend peut renvoyer le produit peuplé ({_id, pdfLink, ...}): on garde l'id
        if isinstance(v, dict):
            return str(v.get("_id") or v.get("id") or "")
        return v


class OrderDraft(_WireModel):
    """Brouillon local, pas encore persisté."""
    order_items: List[OrderItem]
    total_price: Decimal
    payment_method: Literal["Card"] = PAYMENT_METHOD_CARD
    is_paid: bool = False
    paid_at: Optional[datetime] = None
    payment_result: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_snapshot(cls, snapshot: CartSnapshot, client_secret: str, paid_at: datetime) -> "OrderDraft":
        """
        Construit le brouillon d'une commande payée.
        À appeler uniquement après confirmation du processeur de paiement.
        """
        items = [
            OrderItem(
                product=item.id,
                exam_name=item.display_name,
                subject_name=item.subject_label,
                subject_code=item.subject_code,
                price=item.price,
                image=item.image_ref,
                quantity=item.quantity,
            )
            for item in snapshot
        ]
        return cls(
            order_items=items,
            total_price=round_total(snapshot.total_price),
            payment_method=PAYMENT_METHOD_CARD,
            is_paid=True,
            paid_at=paid_at,
            payment_result={"clientSecret": client_secret},
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Order(OrderDraft):
    """Commande normalisée telle que renvoyée par l'API."""
    id: str = Field(alias="_id")
    created_at: Optional[datetime] = None
