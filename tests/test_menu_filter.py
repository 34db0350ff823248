"""
Tests for the menu filter and sort pipeline.
"""
import random

import pytest

from domain.menu_filter import (
    AvailabilityFilter,
    ChefSpecialFilter,
    MenuFilter,
    PriceSort,
    QuickFilter,
    apply_menu_filters,
    extract_categories,
    summarize_menu,
)


@pytest.fixture
def menu(make_menu_item):
    return [
        make_menu_item("1", name="Steak", price=25, chefSpecial=True, preparationTime=30,
                       category={"_id": "c1", "name": "Mains"}),
        make_menu_item("2", name="Salad", description="Fresh greens", price=8, dietaryTags=["vegetarian"],
                       preparationTime=10, category={"_id": "c2", "name": "Starters"}),
        make_menu_item("3", name="Tofu bowl", price=12, dietaryTags=["Vegan"], availability=False,
                       category={"_id": "c1", "name": "Mains"}),
        make_menu_item("4", name="Espresso", price=3, preparationTime=5,
                       category={"_id": "c3", "name": "Drinks"}),
        make_menu_item("5", name="Cake", description="Chocolate steak-shaped cake", price=8,
                       category={"_id": "c4", "name": "Desserts"}),
    ]


def ids(items):
    return [i.id for i in items]


class TestQuickFilters:
    def test_all_and_popular_pass_through(self, menu):
        assert ids(apply_menu_filters(menu, MenuFilter())) == ["1", "2", "3", "4", "5"]
        popular = MenuFilter(quick_filter=QuickFilter.POPULAR)
        assert ids(apply_menu_filters(menu, popular)) == ["1", "2", "3", "4", "5"]

    def test_chef_special(self, menu):
        assert ids(apply_menu_filters(menu, MenuFilter(quick_filter=QuickFilter.CHEF_SPECIAL))) == ["1"]

    def test_vegetarian_includes_vegan(self, menu):
        assert ids(apply_menu_filters(menu, MenuFilter(quick_filter=QuickFilter.VEGETARIAN))) == ["2", "3"]

    def test_fast_prep(self, menu):
        assert ids(apply_menu_filters(menu, MenuFilter(quick_filter=QuickFilter.FAST_PREP))) == ["2", "4"]


class TestFineFilters:
    def test_search_is_case_insensitive_over_name_and_description(self, menu):
        assert ids(apply_menu_filters(menu, MenuFilter(search_term="STEAK"))) == ["1", "5"]

    def test_categories(self, menu):
        config = MenuFilter().with_categories({"Mains", "Drinks"})
        assert ids(apply_menu_filters(menu, config)) == ["1", "3", "4"]

    def test_all_category_sentinel_and_empty_set_skip(self, menu):
        assert len(apply_menu_filters(menu, MenuFilter().with_categories({"all", "Mains"}))) == 5
        assert len(apply_menu_filters(menu, MenuFilter().with_categories(set()))) == 5

    def test_availability(self, menu):
        available = apply_menu_filters(menu, MenuFilter(availability=AvailabilityFilter.AVAILABLE))
        assert available and all(i.availability for i in available)
        unavailable = apply_menu_filters(menu, MenuFilter(availability=AvailabilityFilter.UNAVAILABLE))
        assert ids(unavailable) == ["3"]

    def test_chef_special_filter(self, menu):
        regular = apply_menu_filters(menu, MenuFilter(chef_special=ChefSpecialFilter.REGULAR))
        assert "1" not in ids(regular)
        assert len(regular) == 4


class TestSorting:
    def test_low_to_high_is_non_decreasing(self, menu):
        prices = [i.price for i in apply_menu_filters(menu, MenuFilter(price_sort=PriceSort.LOW_TO_HIGH))]
        assert prices == sorted(prices)

    def test_sort_is_stable_for_equal_prices(self, menu):
        asc = apply_menu_filters(menu, MenuFilter(price_sort=PriceSort.LOW_TO_HIGH))
        desc = apply_menu_filters(menu, MenuFilter(price_sort=PriceSort.HIGH_TO_LOW))
        assert ids(asc) == ["4", "2", "5", "3", "1"]
        assert ids(desc) == ["1", "3", "2", "5", "4"]

    def test_input_is_not_mutated(self, menu):
        before = ids(menu)
        apply_menu_filters(menu, MenuFilter(price_sort=PriceSort.HIGH_TO_LOW))
        assert ids(menu) == before


class TestComposition:
    def test_chef_special_then_sort(self, make_menu_item):
        items = [
            make_menu_item("1", price=10, chefSpecial=True),
            make_menu_item("2", price=5, chefSpecial=False),
        ]
        config = MenuFilter(quick_filter=QuickFilter.CHEF_SPECIAL, price_sort=PriceSort.LOW_TO_HIGH)
        result = apply_menu_filters(items, config)
        assert [(i.id, i.price) for i in result] == [("1", 10)]

    def test_result_independent_of_input_order(self, menu):
        config = MenuFilter(
            availability=AvailabilityFilter.AVAILABLE,
            search_term="a",
            price_sort=PriceSort.HIGH_TO_LOW,
        )
        expected = [i.price for i in apply_menu_filters(menu, config)]
        shuffled = list(menu)
        random.Random(7).shuffle(shuffled)
        assert [i.price for i in apply_menu_filters(shuffled, config)] == expected


class TestHelpers:
    def test_extract_categories_sorted_unique(self, menu):
        assert extract_categories(menu) == ["Desserts", "Drinks", "Mains", "Starters"]

    def test_summary(self, menu):
        summary = summarize_menu(menu)
        assert (summary.total, summary.available, summary.unavailable, summary.chef_specials) == (5, 4, 1, 1)
