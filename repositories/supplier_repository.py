"""
Поставщики.
"""
from typing import Optional

from domain.entities import Supplier, parse_entities, parse_entity
from domain.result import Result
from services import endpoints
from services.api_client import ApiClient, unwrap


class SupplierRepository:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_suppliers(self, token: str, active: Optional[bool] = None) -> Result[list[Supplier]]:
        result = await self.api.get_list(
            endpoints.SUPPLIERS, field="suppliers", params={"active": active}, token=token
        )
        return result.flat_map(lambda rows: parse_entities(Supplier, rows, "supplier"))

    async def get_supplier(self, supplier_id: str, token: str) -> Result[Supplier]:
        result = await self.api.get(endpoints.item(endpoints.SUPPLIERS, supplier_id), token=token)
        return result.flat_map(lambda body: parse_entity(Supplier, unwrap(body, "supplier"), "supplier"))

    async def create_supplier(self, payload: dict, token: str) -> Result[Supplier]:
        result = await self.api.post(endpoints.SUPPLIERS, payload, token=token)
        return result.flat_map(lambda body: parse_entity(Supplier, unwrap(body, "supplier"), "supplier"))

    async def update_supplier(self, supplier_id: str, updates: dict, token: str) -> Result[Supplier]:
        result = await self.api.put(endpoints.item(endpoints.SUPPLIERS, supplier_id), updates, token=token)
        return result.flat_map(lambda body: parse_entity(Supplier, unwrap(body, "supplier"), "supplier"))

    async def delete_supplier(self, supplier_id: str, token: str) -> Result[None]:
        result = await self.api.delete(endpoints.item(endpoints.SUPPLIERS, supplier_id), token=token)
        return result.map(lambda _: None)
