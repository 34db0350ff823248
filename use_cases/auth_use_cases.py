"""
Вход, регистрация, профиль и сессия.
"""
import logging
from typing import Any, Optional

from domain.entities import AuthSession, User
from domain.result import Failure, FailureKind, Result, Success
from domain.validation import (
    LoginInput,
    PasswordChangeInput,
    ProfileUpdateInput,
    RegisterInput,
    require_token,
    validate_input,
)
from repositories.auth_repository import AuthRepository

logger = logging.getLogger(__name__)


class LoginUseCase:
    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self, email: str, password: str) -> Result[AuthSession]:
        validated = validate_input(LoginInput, {"email": email, "password": password})
        if isinstance(validated, Failure):
            return validated
        result = await self.repository.login(validated.value.email, validated.value.password)
        if result.is_success:
            logger.info("User logged in: id=%s, role=%s", result.value.user.id, result.value.user.role.value)
        else:
            logger.warning("Login failed for %s: %s", validated.value.email, result.message)
        return result


class RegisterUseCase:
    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self, data: dict[str, Any]) -> Result[AuthSession]:
        validated = validate_input(RegisterInput, data)
        if isinstance(validated, Failure):
            return validated
        result = await self.repository.register(validated.value.to_payload())
        return result.with_context("Registration failed")


class GetCurrentUserUseCase:
    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self, token: str) -> Result[User]:
        if failure := require_token(token):
            return failure
        return await self.repository.get_current_user(token)


class UpdateProfileUseCase:
    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self, token: str, name: Optional[str] = None, phone: Optional[str] = None) -> Result[User]:
        if failure := require_token(token):
            return failure
        validated = validate_input(ProfileUpdateInput, {"name": name, "phone": phone})
        if isinstance(validated, Failure):
            return validated
        result = await self.repository.update_profile(validated.value.to_payload(), token)
        return result.with_context("Failed to update profile")


class ChangePasswordUseCase:
    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self, current_password: str, new_password: str, token: str) -> Result[None]:
        if failure := require_token(token):
            return failure
        validated = validate_input(
            PasswordChangeInput,
            {"current_password": current_password, "new_password": new_password},
        )
        if isinstance(validated, Failure):
            return validated
        result = await self.repository.change_password(
            validated.value.current_password, validated.value.new_password, token
        )
        return result.with_context("Failed to change password")


class LogoutUseCase:
    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self) -> Result[None]:
        return await self.repository.logout()


class RestoreSessionUseCase:
    """Восстановить сессию из хранилища: токен + актуальный пользователь с сервера."""

    def __init__(self, repository: AuthRepository):
        self.repository = repository

    async def execute(self) -> Result[AuthSession]:
        token_result = await self.repository.get_stored_token()
        if isinstance(token_result, Failure):
            return token_result
        token = token_result.value
        user_result = await self.repository.get_current_user(token)
        if isinstance(user_result, Failure):
            # Сервер недоступен: работаем со снимком, если он есть
            if user_result.kind is FailureKind.NETWORK:
                stored = await self.repository.get_stored_user()
                if stored.is_success and stored.value is not None:
                    logger.info("Server unreachable, restored session from snapshot: id=%s", stored.value.id)
                    return Success(AuthSession(token=token, user=stored.value))
            return user_result
        return Success(AuthSession(token=token, user=user_result.value))
