"""
Экран кухни: подтверждённые и готовящиеся заказы.
"""
from typing import Optional

from domain.entities import Order, OrderStatus, UserRole
from domain.order_status import next_status
from domain.result import Result, Success
from managers.order_manager import OrderManager
from view_models.base import BaseViewModel


class KitchenViewModel(BaseViewModel):
    def __init__(self, order_manager: OrderManager, actor_role: Optional[UserRole] = UserRole.CHEF):
        super().__init__()
        self.order_manager = order_manager
        self.actor_role = actor_role
        self.orders: list[Order] = []

    @property
    def confirmed_orders(self) -> list[Order]:
        return [o for o in self.orders if o.status is OrderStatus.CONFIRMED]

    @property
    def preparing_orders(self) -> list[Order]:
        return [o for o in self.orders if o.status is OrderStatus.PREPARING]

    async def load_orders(self, token: str) -> Result[list[Order]]:
        self.error = None
        self._set_loading(True)
        result = await self.order_manager.get_kitchen_orders(token)
        if self.disposed:
            return result
        if isinstance(result, Success):
            self.orders = result.value
        else:
            self._apply_failure(result)
        self._set_loading(False)
        return result

    async def update_status(self, order: Order, requested: OrderStatus, token: str) -> Result[Order]:
        result = await self.order_manager.update_order_status(
            order.id, order.status, requested, token, actor_role=self.actor_role
        )
        if self.disposed:
            return result
        if isinstance(result, Success):
            await self.load_orders(token)
        else:
            self._apply_failure(result)
            self.notify_listeners()
        return result

    async def advance(self, order: Order, token: str) -> Result[Order]:
        """Перевести заказ на следующий шаг (confirmed -> preparing -> ready)."""
        requested = next_status(order.status)
        if requested is None:
            requested = order.status
        return await self.update_status(order, requested, token)
