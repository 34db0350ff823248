"""
Фасад управления персоналом.
"""
from typing import Any, Optional

from domain.entities import User
from domain.result import Result
from repositories.user_repository import UserRepository
from use_cases.user_use_cases import DeleteUserUseCase, GetUsersUseCase, GetUserUseCase, UpdateUserUseCase


class UserManager:
    def __init__(
        self,
        get_users: GetUsersUseCase,
        get_user: GetUserUseCase,
        update_user: UpdateUserUseCase,
        delete_user: DeleteUserUseCase,
    ):
        self._get_users = get_users
        self._get_user = get_user
        self._update_user = update_user
        self._delete_user = delete_user

    @classmethod
    def from_repository(cls, repository: UserRepository) -> "UserManager":
        return cls(
            GetUsersUseCase(repository),
            GetUserUseCase(repository),
            UpdateUserUseCase(repository),
            DeleteUserUseCase(repository),
        )

    async def get_all_users(self, token: str) -> Result[list[User]]:
        return await self._get_users.execute(token)

    async def get_user_by_id(self, user_id: str, token: str) -> Result[User]:
        return await self._get_user.execute(user_id, token)

    async def update_user(
        self,
        user_id: str,
        updates: dict[str, Any],
        token: str,
        acting_user_id: Optional[str] = None,
    ) -> Result[User]:
        return await self._update_user.execute(user_id, updates, token, acting_user_id=acting_user_id)

    async def delete_user(self, user_id: str, token: str, acting_user_id: Optional[str] = None) -> Result[None]:
        return await self._delete_user.execute(user_id, token, acting_user_id=acting_user_id)
