"""
Фасад меню: CRUD блюд, категории и локальная фильтрация снимка.
"""
from typing import Any, Iterable, Optional

from domain.entities import Category, MenuItem
from domain.menu_filter import MenuFilter, apply_menu_filters, extract_categories
from domain.result import Result
from domain.validation import MenuItemInput, validate_input
from repositories.menu_repository import MenuRepository
from use_cases.menu_use_cases import (
    CreateMenuItemUseCase,
    DeleteMenuItemUseCase,
    GetCategoriesUseCase,
    GetMenuItemsUseCase,
    GetMenuItemUseCase,
    ToggleAvailabilityUseCase,
    UpdateMenuItemUseCase,
)


def calculate_profit_margin(price: float, cost: float) -> float:
    """Маржа в процентах: (price - cost) / price * 100; 0.0 при cost <= 0 или price <= 0."""
    if cost <= 0 or price <= 0:
        return 0.0
    return (price - cost) / price * 100


class MenuManager:
    def __init__(
        self,
        get_menu_items: GetMenuItemsUseCase,
        get_menu_item: GetMenuItemUseCase,
        create_menu_item: CreateMenuItemUseCase,
        update_menu_item: UpdateMenuItemUseCase,
        toggle_availability: ToggleAvailabilityUseCase,
        delete_menu_item: DeleteMenuItemUseCase,
        get_categories: GetCategoriesUseCase,
    ):
        self._get_menu_items = get_menu_items
        self._get_menu_item = get_menu_item
        self._create_menu_item = create_menu_item
        self._update_menu_item = update_menu_item
        self._toggle_availability = toggle_availability
        self._delete_menu_item = delete_menu_item
        self._get_categories = get_categories

    @classmethod
    def from_repository(cls, repository: MenuRepository) -> "MenuManager":
        return cls(
            GetMenuItemsUseCase(repository),
            GetMenuItemUseCase(repository),
            CreateMenuItemUseCase(repository),
            UpdateMenuItemUseCase(repository),
            ToggleAvailabilityUseCase(repository),
            DeleteMenuItemUseCase(repository),
            GetCategoriesUseCase(repository),
        )

    async def get_all_menu_items(
        self,
        token: Optional[str] = None,
        category: Optional[str] = None,
        dietary: Optional[str] = None,
        search: Optional[str] = None,
        available: Optional[bool] = None,
        chef_special: Optional[bool] = None,
    ) -> Result[list[MenuItem]]:
        return await self._get_menu_items.execute(
            token,
            category=category,
            dietary=dietary,
            search=search,
            available=available,
            chef_special=chef_special,
        )

    async def get_menu_item(self, item_id: str, token: Optional[str] = None) -> Result[MenuItem]:
        return await self._get_menu_item.execute(item_id, token)

    async def create_menu_item(self, data: dict[str, Any], token: str) -> Result[MenuItem]:
        return await self._create_menu_item.execute(data, token)

    async def update_menu_item(self, item_id: str, updates: dict[str, Any], token: str) -> Result[MenuItem]:
        return await self._update_menu_item.execute(item_id, updates, token)

    async def toggle_availability(self, item: MenuItem, token: str) -> Result[MenuItem]:
        return await self._toggle_availability.execute(item, token)

    async def delete_menu_item(self, item_id: str, token: str) -> Result[None]:
        return await self._delete_menu_item.execute(item_id, token)

    async def get_categories(self, token: Optional[str] = None, is_active: Optional[bool] = None) -> Result[list[Category]]:
        return await self._get_categories.execute(token, is_active=is_active)

    def validate_menu_item_data(self, data: dict[str, Any]) -> Result[MenuItemInput]:
        """Проверка формы блюда без запроса (для подсветки ошибок)."""
        return validate_input(MenuItemInput, data)

    @staticmethod
    def calculate_profit_margin(price: float, cost: float) -> float:
        return calculate_profit_margin(price, cost)

    @staticmethod
    def filter_menu_items(items: Iterable[MenuItem], config: MenuFilter) -> list[MenuItem]:
        return apply_menu_filters(items, config)

    @staticmethod
    def categories_of(items: Iterable[MenuItem]) -> list[str]:
        return extract_categories(items)
