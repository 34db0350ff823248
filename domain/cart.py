"""
Корзина официанта.

Позиция корзины хранит копию {id, name, price} блюда на момент добавления,
поэтому обновление меню не меняет цены уже добавленных позиций.
Итоги пересчитываются при каждом чтении.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.entities import MenuItem

DEFAULT_TAX_RATE = 0.10


@dataclass(slots=True)
class CartItem:
    menu_item_id: str
    name: str
    unit_price: float
    quantity: int = 1
    special_instructions: Optional[str] = None

    @classmethod
    def from_menu_item(cls, item: MenuItem) -> CartItem:
        return cls(menu_item_id=item.id, name=item.name, unit_price=item.price)

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity

    def to_payload(self) -> dict:
        return {
            "menuItem": self.menu_item_id,
            "quantity": self.quantity,
            "specialInstructions": self.special_instructions or "",
            "price": self.unit_price,
        }


class Cart:
    """Изменяемый набор позиций с расчётом subtotal/tax/total."""

    def __init__(self, tax_rate: float = DEFAULT_TAX_RATE):
        if not 0 <= tax_rate < 1:
            raise ValueError(f"Tax rate must be in [0, 1): {tax_rate}")
        self.tax_rate = tax_rate
        self._items: dict[str, CartItem] = {}

    def add(self, item: MenuItem) -> CartItem:
        """Добавить блюдо: повторное добавление увеличивает количество."""
        existing = self._items.get(item.id)
        if existing is not None:
            existing.quantity += 1
            return existing
        cart_item = CartItem.from_menu_item(item)
        self._items[item.id] = cart_item
        return cart_item

    def update_quantity(self, menu_item_id: str, quantity: int) -> None:
        if menu_item_id not in self._items:
            return
        if quantity <= 0:
            del self._items[menu_item_id]
            return
        self._items[menu_item_id].quantity = quantity

    def set_instructions(self, menu_item_id: str, text: Optional[str]) -> None:
        cart_item = self._items.get(menu_item_id)
        if cart_item is None:
            return
        text = (text or "").strip()
        cart_item.special_instructions = text or None

    def remove(self, menu_item_id: str) -> None:
        self._items.pop(menu_item_id, None)

    def clear(self) -> None:
        self._items.clear()

    def get(self, menu_item_id: str) -> Optional[CartItem]:
        return self._items.get(menu_item_id)

    def __contains__(self, menu_item_id: object) -> bool:
        return menu_item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[CartItem]:
        """Позиции в порядке добавления."""
        return list(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(ci.quantity for ci in self._items.values())

    @property
    def subtotal(self) -> float:
        return sum((ci.total for ci in self._items.values()), 0.0)

    @property
    def tax(self) -> float:
        return self.subtotal * self.tax_rate

    @property
    def total(self) -> float:
        return self.subtotal + self.tax

    def to_order_items(self) -> list[dict]:
        return [ci.to_payload() for ci in self._items.values()]
