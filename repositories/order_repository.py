"""
Заказы и статистика продаж.
"""
from datetime import datetime
from typing import Optional

from domain.entities import Order, OrderStats, OrderStatus, OrderType, parse_entities, parse_entity
from domain.result import Result
from services import endpoints
from services.api_client import ApiClient, unwrap


class OrderRepository:
    """Доступ к /orders."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def get_orders(
        self,
        token: str,
        status: Optional[OrderStatus] = None,
        customer: Optional[str] = None,
        order_type: Optional[OrderType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        min_amount: Optional[float] = None,
        max_amount: Optional[float] = None,
    ) -> Result[list[Order]]:
        params = {
            "status": status,
            "customer": customer,
            "orderType": order_type,
            "startDate": start_date,
            "endDate": end_date,
            "minAmount": min_amount,
            "maxAmount": max_amount,
        }
        result = await self.api.get_list(endpoints.ORDERS, field="orders", params=params, token=token)
        return result.flat_map(lambda rows: parse_entities(Order, rows, "order"))

    async def get_order(self, order_id: str, token: str) -> Result[Order]:
        result = await self.api.get(endpoints.item(endpoints.ORDERS, order_id), token=token)
        return result.flat_map(lambda body: parse_entity(Order, unwrap(body, "order"), "order"))

    async def create_order(self, payload: dict, token: str) -> Result[Order]:
        result = await self.api.post(endpoints.ORDERS, payload, token=token)
        return result.flat_map(lambda body: parse_entity(Order, unwrap(body, "order"), "order"))

    async def update_order_status(self, order_id: str, status: OrderStatus, token: str) -> Result[Order]:
        result = await self.api.patch(endpoints.order_status(order_id), {"status": status.value}, token=token)
        return result.flat_map(lambda body: parse_entity(Order, unwrap(body, "order"), "order"))

    async def delete_order(self, order_id: str, token: str) -> Result[None]:
        result = await self.api.delete(endpoints.item(endpoints.ORDERS, order_id), token=token)
        return result.map(lambda _: None)

    async def get_order_stats(self, token: str) -> Result[OrderStats]:
        result = await self.api.get(endpoints.ORDER_STATS, token=token)
        return result.flat_map(lambda body: parse_entity(OrderStats, unwrap(body, "stats"), "order stats"))
