"""
Базовый держатель состояния экрана: подписчики и флаг dispose.

После dispose() поздние результаты запросов не применяются и подписчики
не вызываются; сам запрос не отменяется.
"""
import logging
from typing import Callable, Optional

from domain.result import Failure, Result

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class BaseViewModel:
    def __init__(self):
        self._listeners: list[Listener] = []
        self._disposed = False
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add_listener(self, listener: Listener) -> None:
        if not self._disposed:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_listeners(self) -> None:
        if self._disposed:
            return
        for listener in list(self._listeners):
            listener()

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()

    def clear_error(self) -> None:
        self.error = None
        self.notify_listeners()

    def _set_loading(self, value: bool) -> None:
        self.is_loading = value
        self.notify_listeners()

    def _apply_failure(self, result: Result) -> None:
        if isinstance(result, Failure):
            logger.debug("%s failure (%s): %s", type(self).__name__, result.kind.value, result.message)
            self.error = result.message
