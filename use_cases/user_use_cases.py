"""
Управление персоналом.
"""
import logging
from typing import Any, Optional

from domain.entities import User
from domain.result import Failure, Result
from domain.validation import UserUpdateInput, require_text, require_token, validate_input
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class GetUsersUseCase:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(self, token: str) -> Result[list[User]]:
        if failure := require_token(token):
            return failure
        result = await self.repository.get_users(token)
        return result.with_context("Failed to load users")


class GetUserUseCase:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(self, user_id: str, token: str) -> Result[User]:
        if failure := require_token(token) or require_text(user_id, "User ID"):
            return failure
        result = await self.repository.get_user(user_id, token)
        return result.with_context("Failed to load user")


class UpdateUserUseCase:
    """Изменение пользователя; деактивировать самого себя нельзя."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(
        self,
        user_id: str,
        updates: dict[str, Any],
        token: str,
        acting_user_id: Optional[str] = None,
    ) -> Result[User]:
        if failure := require_token(token) or require_text(user_id, "User ID"):
            return failure
        validated = validate_input(UserUpdateInput, updates)
        if isinstance(validated, Failure):
            return validated
        if acting_user_id == user_id and validated.value.is_active is False:
            return Failure.permission("You cannot deactivate your own account")
        result = await self.repository.update_user(user_id, validated.value.to_payload(), token)
        if result.is_success:
            logger.info("User updated: id=%s, fields=%s", user_id, sorted(validated.value.to_payload()))
        return result.with_context("Failed to update user")


class DeleteUserUseCase:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def execute(self, user_id: str, token: str, acting_user_id: Optional[str] = None) -> Result[None]:
        if failure := require_token(token) or require_text(user_id, "User ID"):
            return failure
        if acting_user_id == user_id:
            return Failure.permission("You cannot delete your own account")
        result = await self.repository.delete_user(user_id, token)
        if result.is_success:
            logger.info("User deleted: id=%s", user_id)
        return result.with_context("Failed to delete user")
