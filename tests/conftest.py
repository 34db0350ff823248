"""
Общие фикстуры: фабрики JSON-ответов сервера и поддельный ApiClient.
"""
import pytest

from domain.entities import MenuItem, Order
from domain.result import Success


class FakeApiClient:
    """Записывает вызовы и отдаёт заранее заданные Result по (method, path)."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []
        self.responses: dict[tuple[str, str], object] = {}

    def respond(self, method: str, path: str, result) -> None:
        self.responses[(method, path)] = result

    def paths(self, method: str) -> list[str]:
        return [path for m, path, _ in self.calls if m == method]

    async def _call(self, method: str, path: str, default, **kwargs):
        self.calls.append((method, path, kwargs))
        return self.responses.get((method, path), default)

    async def get(self, path, params=None, token=None):
        return await self._call("GET", path, Success({}), params=params, token=token)

    async def get_list(self, path, field="data", params=None, token=None):
        return await self._call("GET", path, Success([]), field=field, params=params, token=token)

    async def post(self, path, payload=None, token=None):
        return await self._call("POST", path, Success({}), payload=payload, token=token)

    async def put(self, path, payload=None, token=None):
        return await self._call("PUT", path, Success({}), payload=payload, token=token)

    async def patch(self, path, payload=None, token=None):
        return await self._call("PATCH", path, Success({}), payload=payload, token=token)

    async def delete(self, path, token=None):
        return await self._call("DELETE", path, Success({}), token=token)


@pytest.fixture
def fake_api():
    return FakeApiClient()


@pytest.fixture
def menu_item_json():
    """Фабрика JSON блюда в формате сервера."""
    def make(item_id="m1", **overrides):
        data = {
            "_id": item_id,
            "name": f"Dish {item_id}",
            "description": "Tasty",
            "price": 10.0,
            "category": {"_id": "c1", "name": "Mains"},
            "dietaryTags": [],
            "availability": True,
            "preparationTime": 20,
            "chefSpecial": False,
        }
        data.update(overrides)
        return data
    return make


@pytest.fixture
def make_menu_item(menu_item_json):
    def make(item_id="m1", **overrides):
        return MenuItem.from_json(menu_item_json(item_id, **overrides))
    return make


@pytest.fixture
def order_json():
    def make(order_id="o1", **overrides):
        data = {
            "_id": order_id,
            "items": [
                {"menuItem": {"_id": "m1", "name": "Soup"}, "quantity": 2, "price": 12.99},
                {"menuItem": "m2", "quantity": 1, "price": 5.0},
            ],
            "totalAmount": 30.98,
            "status": "pending",
            "customer": {"_id": "u9", "name": "Guest", "email": "guest@example.com"},
            "tableNumber": 4,
            "orderType": "dine-in",
            "orderDate": "2024-05-01T12:30:00.000Z",
            "createdAt": "2024-05-01T12:30:00.000Z",
            "updatedAt": "2024-05-01T12:30:00.000Z",
        }
        data.update(overrides)
        return data
    return make


@pytest.fixture
def make_order(order_json):
    def make(order_id="o1", **overrides):
        return Order.from_json(order_json(order_id, **overrides))
    return make


@pytest.fixture
def user_json():
    def make(user_id="u1", **overrides):
        data = {
            "_id": user_id,
            "name": "Alice",
            "email": "alice@example.com",
            "role": "waiter",
            "phone": "+998 90 123 45 67",
            "isActive": True,
        }
        data.update(overrides)
        return data
    return make
