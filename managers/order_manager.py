"""
Фасад заказов для экранов официанта, кухни и менеджера.
"""
from datetime import datetime
from typing import Optional

from domain.cart import Cart
from domain.entities import Order, OrderStats, OrderStatus, OrderType, UserRole
from domain.result import Failure, Result, Success
from repositories.order_repository import OrderRepository
from services.inflight import InFlightGuard
from use_cases.order_use_cases import (
    CreateOrderUseCase,
    DeleteOrderUseCase,
    GetOrderStatsUseCase,
    GetOrdersUseCase,
    GetOrderUseCase,
    UpdateOrderStatusUseCase,
)

KITCHEN_STATUSES = (OrderStatus.CONFIRMED, OrderStatus.PREPARING)


class OrderManager:
    def __init__(
        self,
        get_orders: GetOrdersUseCase,
        get_order: GetOrderUseCase,
        create_order: CreateOrderUseCase,
        update_order_status: UpdateOrderStatusUseCase,
        delete_order: DeleteOrderUseCase,
        get_order_stats: GetOrderStatsUseCase,
    ):
        self._get_orders = get_orders
        self._get_order = get_order
        self._create_order = create_order
        self._update_order_status = update_order_status
        self._delete_order = delete_order
        self._get_order_stats = get_order_stats

    @classmethod
    def from_repository(cls, repository: OrderRepository, guard: Optional[InFlightGuard] = None) -> "OrderManager":
        return cls(
            GetOrdersUseCase(repository),
            GetOrderUseCase(repository),
            CreateOrderUseCase(repository),
            UpdateOrderStatusUseCase(repository, guard),
            DeleteOrderUseCase(repository),
            GetOrderStatsUseCase(repository),
        )

    async def get_orders(
        self,
        token: str,
        status: Optional[str | OrderStatus] = None,
        customer_id: Optional[str] = None,
        order_type: Optional[str | OrderType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        min_amount: Optional[float] = None,
        max_amount: Optional[float] = None,
    ) -> Result[list[Order]]:
        return await self._get_orders.execute(
            token,
            status=status,
            customer_id=customer_id,
            order_type=order_type,
            start_date=start_date,
            end_date=end_date,
            min_amount=min_amount,
            max_amount=max_amount,
        )

    async def get_order(self, order_id: str, token: str) -> Result[Order]:
        return await self._get_order.execute(order_id, token)

    async def get_kitchen_orders(self, token: str) -> Result[list[Order]]:
        """Заказы для кухни (confirmed + preparing), новые сверху."""
        orders: list[Order] = []
        for status in KITCHEN_STATUSES:
            result = await self._get_orders.execute(token, status=status)
            if isinstance(result, Failure):
                return result
            orders.extend(result.value)
        orders.sort(key=lambda o: o.order_date, reverse=True)
        return Success(orders)

    async def create_order(
        self,
        cart: Cart,
        token: str,
        table_number: Optional[int] = None,
        order_type: str | OrderType = OrderType.DINE_IN,
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
        initial_status: Optional[OrderStatus] = None,
    ) -> Result[Order]:
        return await self._create_order.execute(
            cart,
            token,
            table_number=table_number,
            order_type=order_type,
            customer_name=customer_name,
            notes=notes,
            initial_status=initial_status,
        )

    async def update_order_status(
        self,
        order_id: str,
        current_status: str | OrderStatus,
        requested_status: str | OrderStatus,
        token: str,
        actor_role: Optional[UserRole] = None,
    ) -> Result[Order]:
        return await self._update_order_status.execute(
            order_id, current_status, requested_status, token, actor_role=actor_role
        )

    async def delete_order(self, order_id: str, token: str) -> Result[None]:
        return await self._delete_order.execute(order_id, token)

    async def get_order_stats(self, token: str) -> Result[OrderStats]:
        return await self._get_order_stats.execute(token)
