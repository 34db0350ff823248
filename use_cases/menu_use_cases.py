"""
Операции с меню.
"""
import logging
from typing import Any, Optional

from domain.entities import Category, MenuItem
from domain.result import Result
from domain.validation import MenuItemInput, MenuItemUpdateInput, require_text, require_token, validate_input
from repositories.menu_repository import MenuRepository

logger = logging.getLogger(__name__)


class GetMenuItemsUseCase:
    """Список блюд; меню доступно и без токена."""

    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(
        self,
        token: Optional[str] = None,
        category: Optional[str] = None,
        dietary: Optional[str] = None,
        search: Optional[str] = None,
        available: Optional[bool] = None,
        chef_special: Optional[bool] = None,
    ) -> Result[list[MenuItem]]:
        result = await self.repository.get_menu_items(
            token,
            category=category,
            dietary=dietary,
            search=search.strip() if search else None,
            available=available,
            chef_special=chef_special,
        )
        return result.with_context("Failed to load menu")


class GetMenuItemUseCase:
    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(self, item_id: str, token: Optional[str] = None) -> Result[MenuItem]:
        if failure := require_text(item_id, "Menu item ID"):
            return failure
        result = await self.repository.get_menu_item(item_id, token)
        return result.with_context("Failed to load menu item")


class CreateMenuItemUseCase:
    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(self, data: dict[str, Any] | MenuItemInput, token: str) -> Result[MenuItem]:
        if failure := require_token(token):
            return failure
        validated = validate_input(MenuItemInput, data)
        if not validated.is_success:
            return validated
        result = await self.repository.create_menu_item(validated.value.to_payload(), token)
        if result.is_success:
            logger.info("Menu item created: id=%s, name=%s", result.value.id, result.value.name)
        return result.with_context("Failed to create menu item")


class UpdateMenuItemUseCase:
    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(self, item_id: str, updates: dict[str, Any], token: str) -> Result[MenuItem]:
        if failure := require_token(token) or require_text(item_id, "Menu item ID"):
            return failure
        validated = validate_input(MenuItemUpdateInput, updates)
        if not validated.is_success:
            return validated
        result = await self.repository.update_menu_item(item_id, validated.value.to_payload(), token)
        return result.with_context("Failed to update menu item")


class ToggleAvailabilityUseCase:
    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(self, item: MenuItem, token: str) -> Result[MenuItem]:
        if failure := require_token(token):
            return failure
        result = await self.repository.update_menu_item(
            item.id, {"availability": not item.availability}, token
        )
        return result.with_context("Failed to update availability")


class DeleteMenuItemUseCase:
    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(self, item_id: str, token: str) -> Result[None]:
        if failure := require_token(token) or require_text(item_id, "Menu item ID"):
            return failure
        result = await self.repository.delete_menu_item(item_id, token)
        if result.is_success:
            logger.info("Menu item deleted: id=%s", item_id)
        return result.with_context("Failed to delete menu item")


class GetCategoriesUseCase:
    def __init__(self, repository: MenuRepository):
        self.repository = repository

    async def execute(
        self,
        token: Optional[str] = None,
        name: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Result[list[Category]]:
        result = await self.repository.get_categories(token, name=name, is_active=is_active)
        return result.with_context("Failed to load categories")
