"""
Modèles du panier: une ligne d'achat (CartItem) et une vue figée (CartSnapshot).
Les prix sont des Decimal exacts, jamais des float.
"""
from decimal import Decimal
from typing import Any, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# module storefront.cart.models
class CartItem(BaseModel):
    """
    Une ligne achetable (quantité implicite = 1).
    Les alias reprennent le JSON du catalogue (_id, examName, subjectName, ...).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="_id", min_length=1)
    display_name: str = Field(alias="examName")
    subject_label: str = Field(default="", alias="subjectName")
    subject_code: str = Field(default="", alias="subjectCode")
    price: Decimal
    image_ref: str = Field(default="", alias="image")

    @field_validator("price", mode="before")
    @classmethod
    def price_as_decimal(cls, v: Any) -> Any:
        # Un float passe par str() pour garder la valeur affichée (9.99 et non 9.9900000000000002131...)
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must not be negative")
        return v

    @property
    def quantity(self) -> int:
        return 1


class CartSnapshot:
    """Vue en lecture seule du panier, dans l'ordre d'insertion."""

    __slots__ = ("_items",)

    def __init__(self, items=()):
        self._items: Tuple[CartItem, ...] = tuple(items)

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return self._items

    @property
    def total_price(self) -> Decimal:
        # Recalculé à chaque lecture: pas de total cumulé qui pourrait dériver
        return sum((item.price for item in self._items), Decimal("0"))

    def ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"CartSnapshot(items={len(self._items)}, total={self.total_price})"
