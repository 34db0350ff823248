"""
Tests for screen view models.
"""
import asyncio

import pytest

from domain.entities import OrderStatus, OrderType
from domain.menu_filter import ChefSpecialFilter, QuickFilter
from domain.result import Failure, Success
from managers.menu_manager import MenuManager
from managers.order_manager import OrderManager
from repositories.menu_repository import MenuRepository
from repositories.order_repository import OrderRepository
from view_models.kitchen import KitchenViewModel
from view_models.menu import MenuViewModel
from view_models.waiter_order import WaiterOrderViewModel


@pytest.fixture
def waiter(fake_api):
    return WaiterOrderViewModel(
        MenuManager.from_repository(MenuRepository(fake_api)),
        OrderManager.from_repository(OrderRepository(fake_api)),
    )


@pytest.mark.asyncio
class TestWaiterOrderViewModel:
    async def test_load_menu_and_filter(self, fake_api, waiter, menu_item_json):
        fake_api.respond("GET", "/menu", Success([
            menu_item_json("m1", chefSpecial=True),
            menu_item_json("m2"),
        ]))
        notified = []
        waiter.add_listener(lambda: notified.append(waiter.is_loading))

        await waiter.load_menu()
        waiter.set_quick_filter(QuickFilter.CHEF_SPECIAL)

        assert [i.id for i in waiter.filtered_menu_items] == ["m1"]
        assert waiter.categories == ["Mains"]
        assert notified[:2] == [True, False]

    async def test_unavailable_item_is_not_added(self, waiter, make_menu_item):
        waiter.add_to_cart(make_menu_item("m1", name="Soup", availability=False))
        assert waiter.cart.is_empty
        assert waiter.error == "Soup is not available"

    async def test_submit_clears_cart_on_success(self, fake_api, waiter, make_menu_item, order_json):
        fake_api.respond("POST", "/orders", Success(order_json(status="confirmed")))
        waiter.add_to_cart(make_menu_item("m1"))
        waiter.set_table_number(4)

        result = await waiter.submit_order("tok")

        assert result.value.status is OrderStatus.CONFIRMED
        assert waiter.cart.is_empty
        assert waiter.table_number is None
        assert not waiter.is_submitting
        assert fake_api.calls[0][2]["payload"]["status"] == "confirmed"

    async def test_submit_failure_keeps_cart(self, fake_api, waiter, make_menu_item):
        fake_api.respond("POST", "/orders", Failure.network("Network error"))
        waiter.add_to_cart(make_menu_item("m1"))
        waiter.set_table_number(2)

        await waiter.submit_order("tok")

        assert len(waiter.cart) == 1
        assert waiter.error == "Failed to create order: Network error"

    async def test_takeaway_without_name_fails(self, waiter, make_menu_item):
        waiter.add_to_cart(make_menu_item("m1"))
        waiter.set_order_type(OrderType.TAKEAWAY)
        result = await waiter.submit_order("tok")
        assert waiter.error == "Customer name is required"
        assert result.is_failure

    async def test_takeaway_with_name_is_submitted(self, fake_api, waiter, make_menu_item, order_json):
        fake_api.respond("POST", "/orders", Success(order_json(status="confirmed", orderType="takeaway")))
        notified = []
        waiter.add_listener(lambda: notified.append((waiter.order_type, waiter.customer_name)))
        waiter.add_to_cart(make_menu_item("m1"))

        waiter.set_order_type(OrderType.TAKEAWAY)
        waiter.set_customer_name(" Ann ")
        result = await waiter.submit_order("tok")

        assert result.is_success
        assert (OrderType.TAKEAWAY, None) in notified
        assert (OrderType.TAKEAWAY, " Ann ") in notified
        payload = fake_api.calls[0][2]["payload"]
        assert payload["orderType"] == "takeaway"
        assert payload["customerName"] == "Ann"
        assert "tableNumber" not in payload
        assert waiter.customer_name is None

    async def test_chef_special_filter(self, fake_api, waiter, menu_item_json):
        fake_api.respond("GET", "/menu", Success([
            menu_item_json("m1", chefSpecial=True),
            menu_item_json("m2"),
        ]))
        await waiter.load_menu()
        notified = []
        waiter.add_listener(lambda: notified.append(waiter.filter.chef_special))

        waiter.set_chef_special(ChefSpecialFilter.REGULAR)
        assert [i.id for i in waiter.filtered_menu_items] == ["m2"]
        waiter.set_chef_special(ChefSpecialFilter.SPECIAL)
        assert [i.id for i in waiter.filtered_menu_items] == ["m1"]
        assert notified == [ChefSpecialFilter.REGULAR, ChefSpecialFilter.SPECIAL]

    async def test_result_after_dispose_is_not_applied(self, waiter, make_menu_item, order_json):
        gate = asyncio.Event()

        class SlowOrders:
            async def create_order(self, cart, token, **kwargs):
                await gate.wait()
                return Success(None)

        waiter.order_manager = SlowOrders()
        waiter.add_to_cart(make_menu_item("m1"))
        calls = []
        waiter.add_listener(lambda: calls.append("notified"))

        task = asyncio.create_task(waiter.submit_order("tok"))
        await asyncio.sleep(0)
        waiter.dispose()
        calls.clear()
        gate.set()
        await task

        assert len(waiter.cart) == 1
        assert calls == []


@pytest.mark.asyncio
class TestKitchenViewModel:
    async def test_load_and_group(self, fake_api, order_json):
        fake_api.respond("GET", "/orders", Success([
            order_json("o1", status="confirmed"),
            order_json("o2", status="preparing"),
        ]))
        kitchen = KitchenViewModel(OrderManager.from_repository(OrderRepository(fake_api)))

        await kitchen.load_orders("tok")

        # один и тот же ответ на оба запроса по статусам
        assert [o.id for o in kitchen.confirmed_orders] == ["o1", "o1"]
        assert [o.id for o in kitchen.preparing_orders] == ["o2", "o2"]

    async def test_advance_reloads_on_success(self, fake_api, make_order, order_json):
        fake_api.respond("PATCH", "/orders/o1/status", Success(order_json(status="preparing")))
        kitchen = KitchenViewModel(OrderManager.from_repository(OrderRepository(fake_api)))

        result = await kitchen.advance(make_order(status="confirmed"), "tok")

        assert result.is_success
        assert fake_api.calls[0][2]["payload"] == {"status": "preparing"}
        assert fake_api.paths("GET") == ["/orders", "/orders"]

    async def test_chef_cannot_serve(self, fake_api, make_order):
        kitchen = KitchenViewModel(OrderManager.from_repository(OrderRepository(fake_api)))
        result = await kitchen.advance(make_order(status="ready"), "tok")
        assert result.is_failure
        assert kitchen.error is not None
        assert fake_api.calls == []


@pytest.mark.asyncio
class TestMenuViewModel:
    async def test_toggle_replaces_item(self, fake_api, make_menu_item, menu_item_json):
        fake_api.respond("GET", "/menu", Success([menu_item_json("m1"), menu_item_json("m2")]))
        fake_api.respond("PUT", "/menu/m1", Success(menu_item_json("m1", availability=False)))
        screen = MenuViewModel(MenuManager.from_repository(MenuRepository(fake_api)))
        await screen.load_menu_items("tok")

        await screen.toggle_availability(screen.menu_items[0], "tok")

        assert screen.summary.unavailable == 1
        assert [i.id for i in screen.menu_items] == ["m1", "m2"]

    async def test_delete_removes_item(self, fake_api, menu_item_json):
        fake_api.respond("GET", "/menu", Success([menu_item_json("m1"), menu_item_json("m2")]))
        screen = MenuViewModel(MenuManager.from_repository(MenuRepository(fake_api)))
        await screen.load_menu_items("tok")

        await screen.delete_menu_item("m2", "tok")

        assert [i.id for i in screen.menu_items] == ["m1"]
