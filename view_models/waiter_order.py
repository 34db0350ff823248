"""
Экран официанта: меню с фильтрами, корзина и оформление заказа.
"""
from typing import Iterable, Optional

from domain.cart import DEFAULT_TAX_RATE, Cart, CartItem
from domain.entities import MenuItem, Order, OrderStatus, OrderType
from domain.menu_filter import (
    AvailabilityFilter,
    ChefSpecialFilter,
    MenuFilter,
    PriceSort,
    QuickFilter,
    apply_menu_filters,
    extract_categories,
)
from domain.result import Failure, Result, Success
from managers.menu_manager import MenuManager
from managers.order_manager import OrderManager
from view_models.base import BaseViewModel


class WaiterOrderViewModel(BaseViewModel):
    def __init__(self, menu_manager: MenuManager, order_manager: OrderManager, tax_rate: float = DEFAULT_TAX_RATE):
        super().__init__()
        self.menu_manager = menu_manager
        self.order_manager = order_manager
        self.cart = Cart(tax_rate=tax_rate)
        self.menu_items: list[MenuItem] = []
        self.filter = MenuFilter()
        self.table_number: Optional[int] = None
        self.customer_name: Optional[str] = None
        self.order_type = OrderType.DINE_IN
        self.is_submitting = False

    # --- Menu ---

    async def load_menu(self, token: Optional[str] = None) -> Result[list[MenuItem]]:
        self.error = None
        self._set_loading(True)
        result = await self.menu_manager.get_all_menu_items(token)
        if self.disposed:
            return result
        if isinstance(result, Success):
            self.menu_items = result.value
        else:
            self._apply_failure(result)
        self._set_loading(False)
        return result

    @property
    def filtered_menu_items(self) -> list[MenuItem]:
        return apply_menu_filters(self.menu_items, self.filter)

    @property
    def categories(self) -> list[str]:
        return extract_categories(self.menu_items)

    def set_quick_filter(self, value: QuickFilter) -> None:
        self.filter = self.filter.with_quick_filter(value)
        self.notify_listeners()

    def set_search_term(self, term: str) -> None:
        self.filter = self.filter.with_search(term)
        self.notify_listeners()

    def set_categories(self, categories: Iterable[str]) -> None:
        self.filter = self.filter.with_categories(categories)
        self.notify_listeners()

    def set_availability(self, value: AvailabilityFilter) -> None:
        self.filter = self.filter.with_availability(value)
        self.notify_listeners()

    def set_price_sort(self, value: PriceSort) -> None:
        self.filter = self.filter.with_price_sort(value)
        self.notify_listeners()

    def set_chef_special(self, value: ChefSpecialFilter) -> None:
        self.filter = self.filter.with_chef_special(value)
        self.notify_listeners()

    def reset_filters(self) -> None:
        self.filter = MenuFilter()
        self.notify_listeners()

    # --- Cart ---

    @property
    def cart_items(self) -> list[CartItem]:
        return self.cart.items

    def add_to_cart(self, item: MenuItem) -> None:
        if not item.availability:
            self.error = f"{item.name} is not available"
            self.notify_listeners()
            return
        self.cart.add(item)
        self.notify_listeners()

    def update_quantity(self, menu_item_id: str, quantity: int) -> None:
        self.cart.update_quantity(menu_item_id, quantity)
        self.notify_listeners()

    def set_instructions(self, menu_item_id: str, text: Optional[str]) -> None:
        self.cart.set_instructions(menu_item_id, text)
        self.notify_listeners()

    def remove_from_cart(self, menu_item_id: str) -> None:
        self.cart.remove(menu_item_id)
        self.notify_listeners()

    def clear_cart(self) -> None:
        self.cart.clear()
        self.notify_listeners()

    def set_table_number(self, table_number: Optional[int]) -> None:
        self.table_number = table_number
        self.notify_listeners()

    def set_order_type(self, order_type: OrderType) -> None:
        self.order_type = order_type
        self.notify_listeners()

    def set_customer_name(self, name: Optional[str]) -> None:
        self.customer_name = name
        self.notify_listeners()

    # --- Submit ---

    async def submit_order(self, token: str) -> Result[Order]:
        """Отправить заказ; при успехе корзина и стол очищаются."""
        if self.is_submitting:
            return Failure.validation("Order is already being submitted")
        self.is_submitting = True
        self.error = None
        self.notify_listeners()

        result = await self.order_manager.create_order(
            self.cart,
            token,
            table_number=self.table_number,
            order_type=self.order_type,
            customer_name=self.customer_name,
            initial_status=OrderStatus.CONFIRMED,
        )
        self.is_submitting = False
        if self.disposed:
            return result
        if isinstance(result, Success):
            self.cart.clear()
            self.table_number = None
            self.customer_name = None
        else:
            self._apply_failure(result)
        self.notify_listeners()
        return result
