"""
Пользователи (персонал).
"""
from domain.entities import User, parse_entities, parse_entity
from domain.result import Result
from services import endpoints
from services.api_client import ApiClient, unwrap


class UserRepository:
    """Доступ к /users."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def get_users(self, token: str) -> Result[list[User]]:
        result = await self.api.get_list(endpoints.USERS, field="users", token=token)
        return result.flat_map(lambda rows: parse_entities(User, rows, "user"))

    async def get_user(self, user_id: str, token: str) -> Result[User]:
        result = await self.api.get(endpoints.item(endpoints.USERS, user_id), token=token)
        return result.flat_map(lambda body: parse_entity(User, unwrap(body, "user"), "user"))

    async def update_user(self, user_id: str, updates: dict, token: str) -> Result[User]:
        result = await self.api.put(endpoints.item(endpoints.USERS, user_id), updates, token=token)
        return result.flat_map(lambda body: parse_entity(User, unwrap(body, "user"), "user"))

    async def delete_user(self, user_id: str, token: str) -> Result[None]:
        result = await self.api.delete(endpoints.item(endpoints.USERS, user_id), token=token)
        return result.map(lambda _: None)
