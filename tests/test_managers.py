"""
Tests for manager facades.
"""
import pytest

from domain.entities import OrderStatus, UserRole
from domain.menu_filter import MenuFilter, QuickFilter
from domain.result import Failure, FailureKind, Success
from managers.auth_manager import AuthManager
from managers.back_office_manager import BackOfficeManager
from managers.menu_manager import MenuManager, calculate_profit_margin
from managers.order_manager import OrderManager
from managers.user_manager import UserManager
from repositories.auth_repository import AuthRepository
from repositories.inventory_repository import InventoryRepository
from repositories.menu_repository import MenuRepository
from repositories.order_repository import OrderRepository
from repositories.review_repository import ReviewRepository
from repositories.supplier_repository import SupplierRepository
from repositories.user_repository import UserRepository
from services.inflight import InFlightGuard
from services.storage import MemoryStore, SessionStore


def make_auth_manager(api, store=None):
    return AuthManager.from_repository(AuthRepository(api, store or SessionStore(MemoryStore())))


class RoutingApi:
    """Отдаёт разные списки заказов в зависимости от фильтра статуса."""

    def __init__(self, by_status):
        self.by_status = by_status
        self.requested = []

    async def get_list(self, path, field="data", params=None, token=None):
        status = params["status"]
        self.requested.append(status)
        return self.by_status[status]


@pytest.mark.asyncio
class TestOrderManager:
    async def test_kitchen_orders_merge_and_sort_newest_first(self, order_json):
        api = RoutingApi({
            OrderStatus.CONFIRMED: Success([
                order_json("old", status="confirmed", orderDate="2024-05-01T09:00:00Z"),
            ]),
            OrderStatus.PREPARING: Success([
                order_json("new", status="preparing", orderDate="2024-05-01T11:00:00Z"),
                order_json("mid", status="preparing", orderDate="2024-05-01T10:00:00Z"),
            ]),
        })
        manager = OrderManager.from_repository(OrderRepository(api), InFlightGuard())

        result = await manager.get_kitchen_orders("tok")

        assert [o.id for o in result.value] == ["new", "mid", "old"]
        assert api.requested == [OrderStatus.CONFIRMED, OrderStatus.PREPARING]

    async def test_kitchen_orders_stop_on_first_failure(self):
        api = RoutingApi({OrderStatus.CONFIRMED: Failure.network("Network error")})
        manager = OrderManager.from_repository(OrderRepository(api))

        result = await manager.get_kitchen_orders("tok")

        assert result.kind is FailureKind.NETWORK
        assert api.requested == [OrderStatus.CONFIRMED]

    async def test_update_status_passes_actor_role(self, fake_api):
        manager = OrderManager.from_repository(OrderRepository(fake_api))
        result = await manager.update_order_status("o1", "confirmed", "preparing", "tok", actor_role=UserRole.WAITER)
        assert result.kind is FailureKind.PERMISSION
        assert fake_api.calls == []


class TestMenuManagerHelpers:
    @pytest.mark.parametrize("price, cost, margin", [
        (10.0, 4.0, 60.0),
        (10.0, 0.0, 0.0),
        (0.0, 5.0, 0.0),
        (8.0, 10.0, -25.0),
    ])
    def test_profit_margin(self, price, cost, margin):
        assert calculate_profit_margin(price, cost) == pytest.approx(margin)
        assert MenuManager.calculate_profit_margin(price, cost) == pytest.approx(margin)

    def test_filter_and_categories(self, make_menu_item):
        items = [
            make_menu_item("1", chefSpecial=True, category={"_id": "c2", "name": "Soups"}),
            make_menu_item("2"),
        ]
        filtered = MenuManager.filter_menu_items(items, MenuFilter(quick_filter=QuickFilter.CHEF_SPECIAL))
        assert [i.id for i in filtered] == ["1"]
        assert MenuManager.categories_of(items) == ["Mains", "Soups"]

    def test_validate_menu_item_data(self, fake_api):
        manager = MenuManager.from_repository(MenuRepository(fake_api))
        result = manager.validate_menu_item_data({"name": "Soup", "description": "Hot", "price": 1500, "category": "c1"})
        assert result.message == "Price cannot exceed 1000"


@pytest.mark.asyncio
class TestAuthManager:
    async def test_login_sets_session(self, fake_api, user_json):
        fake_api.respond("POST", "/auth/login", Success({"token": "jwt", "user": user_json(role="manager")}))
        manager = make_auth_manager(fake_api)

        await manager.login("alice@example.com", "secret")

        assert manager.is_authenticated
        assert manager.token == "jwt"
        assert manager.has_role(UserRole.CHEF)
        assert not manager.has_role(UserRole.ADMIN)

    async def test_failed_login_sets_error(self, fake_api):
        fake_api.respond("POST", "/auth/login", Failure.authentication("Invalid credentials"))
        manager = make_auth_manager(fake_api)

        await manager.login("alice@example.com", "bad")

        assert not manager.is_authenticated
        assert manager.error == "Invalid credentials"
        manager.clear_error()
        assert manager.error is None

    async def test_initialize_without_session_is_quiet(self, fake_api):
        manager = make_auth_manager(fake_api)
        result = await manager.initialize()
        assert result.kind is FailureKind.AUTHENTICATION
        assert manager.error is None
        assert not manager.is_authenticated

    async def test_initialize_restores_session(self, fake_api, user_json):
        store = SessionStore(MemoryStore())
        await store.save_auth_token("jwt")
        fake_api.respond("GET", "/auth/me", Success({"user": user_json()}))
        manager = make_auth_manager(fake_api, store)

        await manager.initialize()

        assert manager.current_user.id == "u1"
        assert fake_api.calls[0][2]["token"] == "jwt"

    async def test_logout_clears_state(self, fake_api, user_json):
        fake_api.respond("POST", "/auth/login", Success({"token": "jwt", "user": user_json()}))
        store = SessionStore(MemoryStore())
        manager = make_auth_manager(fake_api, store)
        await manager.login("alice@example.com", "secret")

        await manager.logout()

        assert manager.token is None
        assert manager.current_user is None
        assert await store.get_auth_token() is None

    async def test_update_profile_without_token(self, fake_api):
        result = await make_auth_manager(fake_api).update_profile("", name="Bob")
        assert result.kind is FailureKind.AUTHENTICATION

    async def test_session_calls_use_the_given_token(self, fake_api, user_json):
        fake_api.respond("POST", "/auth/login", Success({"token": "jwt", "user": user_json()}))
        fake_api.respond("GET", "/auth/me", Success({"user": user_json()}))
        fake_api.respond("PUT", "/auth/update", Success({"user": user_json(name="Bob")}))
        manager = make_auth_manager(fake_api)
        await manager.login("alice@example.com", "secret")

        await manager.refresh_current_user("other")
        profile = await manager.update_profile("other", name="Bob")
        await manager.change_password("old123", "new456", "other")

        assert profile.value.name == "Bob"
        assert manager.current_user.name == "Bob"
        assert [call[2]["token"] for call in fake_api.calls[1:]] == ["other", "other", "other"]


@pytest.mark.asyncio
class TestUserAndBackOfficeManagers:
    async def test_user_manager_self_delete(self, fake_api):
        manager = UserManager.from_repository(UserRepository(fake_api))
        result = await manager.delete_user("u1", "tok", acting_user_id="u1")
        assert result.kind is FailureKind.PERMISSION

    async def test_back_office_low_stock(self, fake_api):
        fake_api.respond("GET", "/inventory/low-stock", Success([{"name": "Flour", "quantity": 1}]))
        manager = BackOfficeManager(
            SupplierRepository(fake_api), ReviewRepository(fake_api), InventoryRepository(fake_api)
        )
        result = await manager.get_low_stock("tok")
        assert result.value == [{"name": "Flour", "quantity": 1}]

    async def test_back_office_create_supplier_validates(self, fake_api):
        manager = BackOfficeManager(
            SupplierRepository(fake_api), ReviewRepository(fake_api), InventoryRepository(fake_api)
        )
        result = await manager.create_supplier({"name": "", "email": "farm"}, "tok")
        assert result.kind is FailureKind.VALIDATION
        assert fake_api.calls == []
