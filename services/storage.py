"""
Локальное хранилище ключ-значение для токена и снимка пользователя.

Бэкенды: память, JSON-файл, Redis (если доступен). Запись по принципу
"последняя побеждает", схемы версий нет.
"""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "auth_token"
USER_DATA_KEY = "user_data"


class StorageError(Exception):
    """Ошибка бэкенда хранилища."""


class MemoryStore:
    """In-memory хранилище (по умолчанию и fallback, если Redis недоступен)."""

    def __init__(self):
        self._data: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            self._data[key] = value

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._data.pop(key, None)


class JsonFileStore:
    """Хранилище в одном JSON-файле."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp.replace(self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._load().get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._save(data)


class RedisStore:
    """Хранилище на Redis (redis.asyncio) с префиксом ключей."""

    def __init__(self, redis_client, prefix: str = "staff_app:"):
        self.redis = redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(self._key(key))
        except RedisError as e:
            raise StorageError(f"Redis get failed for {key}: {e}") from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self.redis.set(self._key(key), value)
        except RedisError as e:
            raise StorageError(f"Redis set failed for {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(self._key(key))
        except RedisError as e:
            raise StorageError(f"Redis delete failed for {key}: {e}") from e


KeyValueStore = MemoryStore | JsonFileStore | RedisStore


class SessionStore:
    """Токен авторизации и снимок пользователя поверх любого бэкенда."""

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    async def save_auth_token(self, token: str) -> None:
        await self.backend.set(AUTH_TOKEN_KEY, token)

    async def get_auth_token(self) -> Optional[str]:
        return await self.backend.get(AUTH_TOKEN_KEY)

    async def save_user_data(self, user_data: dict) -> None:
        await self.backend.set(USER_DATA_KEY, json.dumps(user_data, ensure_ascii=False))

    async def get_user_data(self) -> Optional[dict]:
        raw = await self.backend.get(USER_DATA_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored user data is not valid JSON, ignoring")
            return None
        return data if isinstance(data, dict) else None

    async def clear_auth_data(self) -> None:
        await self.backend.delete(AUTH_TOKEN_KEY)
        await self.backend.delete(USER_DATA_KEY)


async def init_store(cfg, redis_client=None) -> KeyValueStore:
    """Выбрать бэкенд по STORAGE_BACKEND; Redis без ответа на ping -> память."""
    backend = cfg.STORAGE_BACKEND
    if backend == "redis":
        if redis_client is None:
            from redis.asyncio import Redis
            redis_client = Redis(
                host=cfg.REDIS_HOST,
                port=cfg.REDIS_PORT,
                db=cfg.REDIS_DB,
                password=cfg.REDIS_PASSWORD,
                decode_responses=True,
            )
        try:
            await redis_client.ping()
            logger.info("Using Redis session store")
            return RedisStore(redis_client, prefix=cfg.REDIS_KEY_PREFIX)
        except (RedisError, OSError) as e:
            logger.warning("Redis not available for session store, using memory: %s", e)
            return MemoryStore()
    if backend == "file":
        logger.info("Using file session store: %s", cfg.STORAGE_PATH)
        return JsonFileStore(cfg.STORAGE_PATH)
    logger.info("Using memory session store")
    return MemoryStore()
