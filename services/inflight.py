"""
Сериализация одновременных операций с одинаковым ключом.

Два быстрых обновления статуса одного заказа выполняются строго по очереди,
поэтому ответы приходят в порядке отправки.
"""
import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InFlightGuard:
    """Карта ключ -> asyncio.Lock; замок удаляется, когда ключ свободен."""

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    def is_busy(self, key: str) -> bool:
        return key in self._waiters

    async def run(self, key: str, operation: Callable[[], Awaitable[T]]) -> T:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        if lock.locked():
            logger.debug("Operation %s is in flight, waiting", key)
        try:
            async with lock:
                return await operation()
        finally:
            self._waiters[key] -= 1
            if not self._waiters[key]:
                del self._waiters[key]
                del self._locks[key]
