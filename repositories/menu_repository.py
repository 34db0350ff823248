"""
Меню и категории.
"""
from typing import Optional

from domain.entities import Category, MenuItem, parse_entities, parse_entity
from domain.result import Result
from services import endpoints
from services.api_client import ApiClient, unwrap


class MenuRepository:
    """Доступ к /menu и /category."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def get_menu_items(
        self,
        token: Optional[str] = None,
        category: Optional[str] = None,
        dietary: Optional[str] = None,
        search: Optional[str] = None,
        available: Optional[bool] = None,
        chef_special: Optional[bool] = None,
    ) -> Result[list[MenuItem]]:
        params = {
            "category": category,
            "dietary": dietary,
            "search": search,
            "available": available,
            "chefSpecial": chef_special,
        }
        result = await self.api.get_list(endpoints.MENU, field="data", params=params, token=token)
        return result.flat_map(lambda rows: parse_entities(MenuItem, rows, "menu item"))

    async def get_menu_item(self, item_id: str, token: Optional[str] = None) -> Result[MenuItem]:
        result = await self.api.get(endpoints.item(endpoints.MENU, item_id), token=token)
        return result.flat_map(lambda body: parse_entity(MenuItem, unwrap(body, "menuItem"), "menu item"))

    async def create_menu_item(self, payload: dict, token: str) -> Result[MenuItem]:
        result = await self.api.post(endpoints.MENU, payload, token=token)
        return result.flat_map(lambda body: parse_entity(MenuItem, unwrap(body, "menuItem"), "menu item"))

    async def update_menu_item(self, item_id: str, updates: dict, token: str) -> Result[MenuItem]:
        result = await self.api.put(endpoints.item(endpoints.MENU, item_id), updates, token=token)
        return result.flat_map(lambda body: parse_entity(MenuItem, unwrap(body, "menuItem"), "menu item"))

    async def delete_menu_item(self, item_id: str, token: str) -> Result[None]:
        result = await self.api.delete(endpoints.item(endpoints.MENU, item_id), token=token)
        return result.map(lambda _: None)

    async def get_categories(
        self,
        token: Optional[str] = None,
        name: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Result[list[Category]]:
        params = {"name": name, "isActive": is_active}
        result = await self.api.get_list(endpoints.CATEGORIES, field="categories", params=params, token=token)
        return result.flat_map(lambda rows: parse_entities(Category, rows, "category"))
