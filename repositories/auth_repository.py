"""
Авторизация: вход, регистрация, профиль и локальная сессия.
"""
import logging
from typing import Optional

from domain.entities import AuthSession, User, parse_entity
from domain.result import Failure, Result, Success
from services import endpoints
from services.api_client import ApiClient, unwrap
from services.storage import SessionStore, StorageError

logger = logging.getLogger(__name__)


class AuthRepository:
    """Доступ к /auth/* и к локальному хранилищу токена."""

    def __init__(self, api: ApiClient, session_store: SessionStore):
        self.api = api
        self.session_store = session_store

    async def _persist(self, session: AuthSession) -> Result[AuthSession]:
        try:
            await self.session_store.save_auth_token(session.token)
            await self.session_store.save_user_data(session.user.to_json())
        except StorageError as e:
            logger.error("Failed to persist session for user %s: %s", session.user.id, e)
            return Failure.generic(f"Failed to save session: {e}")
        return Success(session)

    async def login(self, email: str, password: str) -> Result[AuthSession]:
        result = await self.api.post(endpoints.LOGIN, {"email": email, "password": password})
        session = result.flat_map(lambda body: parse_entity(AuthSession, unwrap(body), "login response"))
        return await session.async_map(self._persist)

    async def register(self, payload: dict) -> Result[AuthSession]:
        result = await self.api.post(endpoints.REGISTER, payload)
        session = result.flat_map(lambda body: parse_entity(AuthSession, unwrap(body), "register response"))
        return await session.async_map(self._persist)

    async def get_current_user(self, token: str) -> Result[User]:
        result = await self.api.get(endpoints.CURRENT_USER, token=token)
        return result.flat_map(lambda body: parse_entity(User, unwrap(body, "user"), "user"))

    async def update_profile(self, updates: dict, token: str) -> Result[User]:
        result = await self.api.put(endpoints.UPDATE_PROFILE, updates, token=token)
        user = result.flat_map(lambda body: parse_entity(User, unwrap(body, "user"), "user"))
        return await user.async_map(self._persist_user)

    async def _persist_user(self, user: User) -> Result[User]:
        try:
            await self.session_store.save_user_data(user.to_json())
        except StorageError as e:
            logger.error("Failed to persist user snapshot %s: %s", user.id, e)
            return Failure.generic(f"Failed to save user data: {e}")
        return Success(user)

    async def change_password(self, current_password: str, new_password: str, token: str) -> Result[None]:
        result = await self.api.put(
            endpoints.CHANGE_PASSWORD,
            {"currentPassword": current_password, "newPassword": new_password},
            token=token,
        )
        return result.map(lambda _: None)

    async def logout(self) -> Result[None]:
        try:
            await self.session_store.clear_auth_data()
        except StorageError as e:
            logger.error("Failed to clear session: %s", e)
            return Failure.generic(f"Failed to clear session: {e}")
        return Success(None)

    async def get_stored_token(self) -> Result[str]:
        try:
            token = await self.session_store.get_auth_token()
        except StorageError as e:
            logger.error("Failed to read stored token: %s", e)
            return Failure.generic(f"Failed to read session: {e}")
        if not token:
            return Failure.authentication("No stored session")
        return Success(token)

    async def get_stored_user(self) -> Result[Optional[User]]:
        """Снимок пользователя из хранилища; повреждённый снимок -> None."""
        try:
            data = await self.session_store.get_user_data()
        except StorageError as e:
            logger.error("Failed to read stored user: %s", e)
            return Failure.generic(f"Failed to read session: {e}")
        if data is None:
            return Success(None)
        parsed = parse_entity(User, data, "stored user")
        return Success(parsed.value_or(None))
