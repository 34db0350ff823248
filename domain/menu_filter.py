"""
Фильтрация и сортировка снимка меню.

Порядок этапов фиксирован: быстрый фильтр → поиск → категории → доступность →
спецпредложение шефа → сортировка (всегда последней, стабильная).
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable

from domain.entities import MenuItem

ALL_CATEGORIES = "all"
FAST_PREP_MINUTES = 15


class QuickFilter(str, enum.Enum):
    ALL = "all"
    POPULAR = "popular"
    CHEF_SPECIAL = "chefSpecial"
    VEGETARIAN = "vegetarian"
    FAST_PREP = "fastPrep"


class AvailabilityFilter(str, enum.Enum):
    ALL = "all"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class ChefSpecialFilter(str, enum.Enum):
    ALL = "all"
    SPECIAL = "special"
    REGULAR = "regular"


class PriceSort(str, enum.Enum):
    NONE = "none"
    LOW_TO_HIGH = "lowToHigh"
    HIGH_TO_LOW = "highToLow"


@dataclass(frozen=True)
class MenuFilter:
    """Конфигурация фильтров. Пустой набор категорий или "all" означает все."""
    quick_filter: QuickFilter = QuickFilter.ALL
    search_term: str = ""
    categories: frozenset[str] = field(default_factory=lambda: frozenset({ALL_CATEGORIES}))
    availability: AvailabilityFilter = AvailabilityFilter.ALL
    chef_special: ChefSpecialFilter = ChefSpecialFilter.ALL
    price_sort: PriceSort = PriceSort.NONE

    def with_quick_filter(self, value: QuickFilter) -> MenuFilter:
        return replace(self, quick_filter=value)

    def with_search(self, term: str) -> MenuFilter:
        return replace(self, search_term=term)

    def with_categories(self, categories: Iterable[str]) -> MenuFilter:
        return replace(self, categories=frozenset(categories))

    def with_availability(self, value: AvailabilityFilter) -> MenuFilter:
        return replace(self, availability=value)

    def with_chef_special(self, value: ChefSpecialFilter) -> MenuFilter:
        return replace(self, chef_special=value)

    def with_price_sort(self, value: PriceSort) -> MenuFilter:
        return replace(self, price_sort=value)

    @property
    def all_categories(self) -> bool:
        return not self.categories or ALL_CATEGORIES in self.categories


def _quick(items: list[MenuItem], quick: QuickFilter) -> list[MenuItem]:
    if quick is QuickFilter.CHEF_SPECIAL:
        return [i for i in items if i.chef_special]
    if quick is QuickFilter.VEGETARIAN:
        return [i for i in items if i.is_vegetarian]
    if quick is QuickFilter.FAST_PREP:
        return [i for i in items if i.preparation_time <= FAST_PREP_MINUTES]
    # POPULAR пока без данных о рейтинге продаж, пропускает всё
    return items


def _search(items: list[MenuItem], term: str) -> list[MenuItem]:
    term = term.strip().lower()
    if not term:
        return items
    return [i for i in items if term in i.name.lower() or term in i.description.lower()]


def _categories(items: list[MenuItem], config: MenuFilter) -> list[MenuItem]:
    if config.all_categories:
        return items
    return [
        i for i in items
        if i.category_name in config.categories or i.category_id in config.categories
    ]


def _availability(items: list[MenuItem], value: AvailabilityFilter) -> list[MenuItem]:
    if value is AvailabilityFilter.ALL:
        return items
    wanted = value is AvailabilityFilter.AVAILABLE
    return [i for i in items if i.availability == wanted]


def _chef_special(items: list[MenuItem], value: ChefSpecialFilter) -> list[MenuItem]:
    if value is ChefSpecialFilter.ALL:
        return items
    wanted = value is ChefSpecialFilter.SPECIAL
    return [i for i in items if i.chef_special == wanted]


def _sort(items: list[MenuItem], order: PriceSort) -> list[MenuItem]:
    if order is PriceSort.LOW_TO_HIGH:
        return sorted(items, key=lambda i: i.price)
    if order is PriceSort.HIGH_TO_LOW:
        # sorted() со reverse=True сохраняет стабильность для равных цен
        return sorted(items, key=lambda i: i.price, reverse=True)
    return items


def apply_menu_filters(items: Iterable[MenuItem], config: MenuFilter) -> list[MenuItem]:
    """Применить все этапы к снимку меню. Исходный список не меняется."""
    result = list(items)
    result = _quick(result, config.quick_filter)
    result = _search(result, config.search_term)
    result = _categories(result, config)
    result = _availability(result, config.availability)
    result = _chef_special(result, config.chef_special)
    return _sort(result, config.price_sort)


def extract_categories(items: Iterable[MenuItem]) -> list[str]:
    """Отсортированные уникальные названия категорий."""
    return sorted({i.category_name for i in items if i.category_name})


@dataclass(frozen=True, slots=True)
class MenuSummary:
    total: int
    available: int
    unavailable: int
    chef_specials: int


def summarize_menu(items: Iterable[MenuItem]) -> MenuSummary:
    items = list(items)
    available = sum(1 for i in items if i.availability)
    return MenuSummary(
        total=len(items),
        available=available,
        unavailable=len(items) - available,
        chef_specials=sum(1 for i in items if i.chef_special),
    )
