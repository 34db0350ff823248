"""
Фасад авторизации: хранит текущую сессию (пользователь, токен, ошибка).

Токен из сессии передаётся в остальные менеджеры явным параметром, сами
доменные функции его нигде не читают.
"""
import logging
from typing import Optional

from domain.entities import AuthSession, User, UserRole
from domain.result import Failure, Result, Success
from repositories.auth_repository import AuthRepository
from use_cases.auth_use_cases import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
    RestoreSessionUseCase,
    UpdateProfileUseCase,
)

logger = logging.getLogger(__name__)


class AuthManager:
    def __init__(
        self,
        login_use_case: LoginUseCase,
        register_use_case: RegisterUseCase,
        get_current_user_use_case: GetCurrentUserUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        change_password_use_case: ChangePasswordUseCase,
        logout_use_case: LogoutUseCase,
        restore_session_use_case: RestoreSessionUseCase,
    ):
        self._login = login_use_case
        self._register = register_use_case
        self._get_current_user = get_current_user_use_case
        self._update_profile = update_profile_use_case
        self._change_password = change_password_use_case
        self._logout = logout_use_case
        self._restore_session = restore_session_use_case

        self.current_user: Optional[User] = None
        self.token: Optional[str] = None
        self.error: Optional[str] = None

    @classmethod
    def from_repository(cls, repository: AuthRepository) -> "AuthManager":
        return cls(
            LoginUseCase(repository),
            RegisterUseCase(repository),
            GetCurrentUserUseCase(repository),
            UpdateProfileUseCase(repository),
            ChangePasswordUseCase(repository),
            LogoutUseCase(repository),
            RestoreSessionUseCase(repository),
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.current_user is not None

    def has_role(self, required_role: UserRole) -> bool:
        return self.current_user is not None and self.current_user.can_access(required_role)

    def clear_error(self) -> None:
        self.error = None

    def _apply_session(self, result: Result[AuthSession]) -> Result[AuthSession]:
        if isinstance(result, Success):
            self.token = result.value.token
            self.current_user = result.value.user
            self.error = None
        else:
            self.error = result.message
        return result

    async def initialize(self) -> Result[AuthSession]:
        """Восстановить сессию при старте; отсутствие сессии не считается ошибкой UI."""
        result = await self._restore_session.execute()
        if isinstance(result, Failure):
            self.token = None
            self.current_user = None
            logger.info("No active session restored: %s", result.message)
            return result
        return self._apply_session(result)

    async def login(self, email: str, password: str) -> Result[AuthSession]:
        return self._apply_session(await self._login.execute(email, password))

    async def register(self, data: dict) -> Result[AuthSession]:
        return self._apply_session(await self._register.execute(data))

    async def refresh_current_user(self, token: str) -> Result[User]:
        result = await self._get_current_user.execute(token)
        if isinstance(result, Success):
            self.current_user = result.value
        else:
            self.error = result.message
        return result

    async def update_profile(
        self, token: str, name: Optional[str] = None, phone: Optional[str] = None
    ) -> Result[User]:
        result = await self._update_profile.execute(token, name=name, phone=phone)
        if isinstance(result, Success):
            self.current_user = result.value
            self.error = None
        else:
            self.error = result.message
        return result

    async def change_password(self, current_password: str, new_password: str, token: str) -> Result[None]:
        result = await self._change_password.execute(current_password, new_password, token)
        self.error = result.message if isinstance(result, Failure) else None
        return result

    async def logout(self) -> Result[None]:
        result = await self._logout.execute()
        # Локальное состояние сбрасываем даже при ошибке хранилища
        self.token = None
        self.current_user = None
        self.error = result.message if isinstance(result, Failure) else None
        return result
