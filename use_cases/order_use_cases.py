"""
Операции с заказами.

Каждый use case оборачивает ровно один вызов репозитория и проверяет входные
данные до запроса: при ошибке проверки репозиторий не вызывается.
"""
import logging
from datetime import datetime
from typing import Optional

from domain.cart import Cart
from domain.entities import Order, OrderStats, OrderStatus, OrderType, UserRole
from domain.order_status import check_transition
from domain.result import Failure, Result, Success
from domain.validation import parse_choice, require_text, require_token
from repositories.order_repository import OrderRepository
from services.inflight import InFlightGuard

logger = logging.getLogger(__name__)


class GetOrdersUseCase:
    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def execute(
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
        if failure := require_token(token):
            return failure

        parsed_status = None
        if status is not None:
            status_result = parse_choice(OrderStatus, status, "order status")
            if isinstance(status_result, Failure):
                return status_result
            parsed_status = status_result.value

        parsed_type = None
        if order_type is not None:
            type_result = parse_choice(OrderType, order_type, "order type")
            if isinstance(type_result, Failure):
                return type_result
            parsed_type = type_result.value

        if start_date and end_date and start_date > end_date:
            return Failure.validation("Start date must be before end date")
        if min_amount is not None and max_amount is not None and min_amount > max_amount:
            return Failure.validation("Minimum amount cannot exceed maximum amount")

        result = await self.repository.get_orders(
            token,
            status=parsed_status,
            customer=customer_id,
            order_type=parsed_type,
            start_date=start_date,
            end_date=end_date,
            min_amount=min_amount,
            max_amount=max_amount,
        )
        return result.with_context("Failed to load orders")


class GetOrderUseCase:
    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def execute(self, order_id: str, token: str) -> Result[Order]:
        if failure := require_token(token) or require_text(order_id, "Order ID"):
            return failure
        result = await self.repository.get_order(order_id, token)
        return result.with_context("Failed to load order")


class CreateOrderUseCase:
    """
    Оформление заказа из корзины.

    Предусловия: корзина не пуста; для dine-in указан номер стола >= 1,
    для takeaway/delivery указано имя гостя.
    """

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def execute(
        self,
        cart: Cart,
        token: str,
        table_number: Optional[int] = None,
        order_type: str | OrderType = OrderType.DINE_IN,
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
        initial_status: Optional[OrderStatus] = None,
    ) -> Result[Order]:
        if failure := require_token(token):
            return failure
        if cart.is_empty:
            return Failure.validation("Cart is empty")

        type_result = parse_choice(OrderType, order_type, "order type")
        if isinstance(type_result, Failure):
            return type_result
        parsed_type = type_result.value

        if parsed_type is OrderType.DINE_IN:
            if table_number is None or table_number < 1:
                return Failure.validation("Please enter a valid table number")
        elif failure := require_text(customer_name, "Customer name"):
            return failure

        payload: dict = {
            "items": cart.to_order_items(),
            "totalAmount": cart.total,
            "orderType": parsed_type.value,
        }
        if table_number is not None:
            payload["tableNumber"] = table_number
        if customer_name:
            payload["customerName"] = customer_name.strip()
        if notes and notes.strip():
            payload["notes"] = notes.strip()
        if initial_status is not None:
            payload["status"] = initial_status.value

        result = await self.repository.create_order(payload, token)
        if result.is_success:
            logger.info(
                "Order created: id=%s, items=%s, total=%.2f, table=%s",
                result.value.id, cart.item_count, cart.total, table_number,
            )
        return result.with_context("Failed to create order")


class UpdateOrderStatusUseCase:
    """
    Смена статуса заказа.

    Переход и роль проверяются до запроса. Запросы по одному заказу
    выполняются последовательно через InFlightGuard; запрос из очереди
    перепроверяется по статусу, который подтвердил сервер на предыдущем шаге.
    """

    def __init__(self, repository: OrderRepository, guard: Optional[InFlightGuard] = None):
        self.repository = repository
        self.guard = guard or InFlightGuard()
        # order_id -> последний подтверждённый статус, пока по заказу есть очередь
        self._confirmed: dict[str, OrderStatus] = {}

    async def execute(
        self,
        order_id: str,
        current_status: str | OrderStatus,
        requested_status: str | OrderStatus,
        token: str,
        actor_role: Optional[UserRole] = None,
    ) -> Result[Order]:
        if failure := require_token(token) or require_text(order_id, "Order ID"):
            return failure

        current = parse_choice(OrderStatus, current_status, "order status")
        if isinstance(current, Failure):
            return current
        requested = parse_choice(OrderStatus, requested_status, "order status")
        if isinstance(requested, Failure):
            return requested

        checked = check_transition(current.value, requested.value, actor_role)
        if isinstance(checked, Failure):
            return checked

        async def send() -> Result[Order]:
            latest = self._confirmed.get(order_id)
            if latest is not None and latest is not current.value:
                rechecked = check_transition(latest, requested.value, actor_role)
                if isinstance(rechecked, Failure):
                    logger.warning(
                        "Queued status update rejected: id=%s, now %s, requested %s",
                        order_id, latest.value, requested.value.value,
                    )
                    return rechecked
            result = await self.repository.update_order_status(order_id, requested.value, token)
            if isinstance(result, Success):
                self._confirmed[order_id] = result.value.status
            return result

        key = f"order-status:{order_id}"
        result = await self.guard.run(key, send)
        if not self.guard.is_busy(key):
            self._confirmed.pop(order_id, None)
        if result.is_success:
            logger.info(
                "Order status updated: id=%s, %s -> %s",
                order_id, current.value.value, requested.value.value,
            )
        return result.with_context("Failed to update order status")


class DeleteOrderUseCase:
    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def execute(self, order_id: str, token: str) -> Result[None]:
        if failure := require_token(token) or require_text(order_id, "Order ID"):
            return failure
        result = await self.repository.delete_order(order_id, token)
        return result.with_context("Failed to delete order")


class GetOrderStatsUseCase:
    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def execute(self, token: str) -> Result[OrderStats]:
        if failure := require_token(token):
            return failure
        result = await self.repository.get_order_stats(token)
        return result.with_context("Failed to load order statistics")
