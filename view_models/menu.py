"""
Экран управления меню (менеджер/админ).
"""
from typing import Any

from domain.entities import MenuItem
from domain.menu_filter import MenuSummary, summarize_menu
from domain.result import Result, Success
from managers.menu_manager import MenuManager
from view_models.base import BaseViewModel


class MenuViewModel(BaseViewModel):
    def __init__(self, menu_manager: MenuManager):
        super().__init__()
        self.menu_manager = menu_manager
        self.menu_items: list[MenuItem] = []

    @property
    def summary(self) -> MenuSummary:
        return summarize_menu(self.menu_items)

    def _replace(self, item: MenuItem) -> None:
        self.menu_items = [item if i.id == item.id else i for i in self.menu_items]

    async def load_menu_items(self, token: str) -> Result[list[MenuItem]]:
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

    async def create_menu_item(self, data: dict[str, Any], token: str) -> Result[MenuItem]:
        result = await self.menu_manager.create_menu_item(data, token)
        if self.disposed:
            return result
        if isinstance(result, Success):
            self.menu_items = [*self.menu_items, result.value]
        else:
            self._apply_failure(result)
        self.notify_listeners()
        return result

    async def update_menu_item(self, item_id: str, updates: dict[str, Any], token: str) -> Result[MenuItem]:
        result = await self.menu_manager.update_menu_item(item_id, updates, token)
        if self.disposed:
            return result
        if isinstance(result, Success):
            self._replace(result.value)
        else:
            self._apply_failure(result)
        self.notify_listeners()
        return result

    async def toggle_availability(self, item: MenuItem, token: str) -> Result[MenuItem]:
        result = await self.menu_manager.toggle_availability(item, token)
        if self.disposed:
            return result
        if isinstance(result, Success):
            self._replace(result.value)
        else:
            self._apply_failure(result)
        self.notify_listeners()
        return result

    async def delete_menu_item(self, item_id: str, token: str) -> Result[None]:
        result = await self.menu_manager.delete_menu_item(item_id, token)
        if self.disposed:
            return result
        if isinstance(result, Success):
            self.menu_items = [i for i in self.menu_items if i.id != item_id]
        else:
            self._apply_failure(result)
        self.notify_listeners()
        return result
