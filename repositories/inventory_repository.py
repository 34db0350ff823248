"""
Склад. Списание и расчёт остатков выполняет сервер, здесь только запросы;
ответы возвращаются как есть (схема принадлежит серверу).
"""
from typing import Optional

from domain.result import Result
from services import endpoints
from services.api_client import ApiClient


class InventoryRepository:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_inventory(self, token: str) -> Result[list]:
        return await self.api.get_list(endpoints.INVENTORY, field="inventory", token=token)

    async def check_availability(self, items: list[dict], token: str) -> Result[dict]:
        return await self.api.post(endpoints.INVENTORY_CHECK, {"items": items}, token=token)

    async def consume(self, token: str, order_id: Optional[str] = None, items: Optional[list[dict]] = None) -> Result[dict]:
        payload: dict = {}
        if order_id:
            payload["orderId"] = order_id
        if items:
            payload["items"] = items
        return await self.api.post(endpoints.INVENTORY_CONSUME, payload, token=token)

    async def get_low_stock(self, token: str) -> Result[list]:
        return await self.api.get_list(endpoints.INVENTORY_LOW_STOCK, field="items", token=token)

    async def get_dashboard(self, token: str) -> Result[dict]:
        return await self.api.get(endpoints.INVENTORY_DASHBOARD, token=token)
