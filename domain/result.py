"""
Результат операции: Success | Failure.

Каждая асинхронная доменная операция возвращает Result вместо исключения.
Failure проходит через map/flat_map/async_map без изменений, трансформации
после первой ошибки не выполняются.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union, assert_never

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class FailureKind(str, enum.Enum):
    """Закрытый перечень видов ошибок."""
    NETWORK = "network"
    SERVER = "server"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    VALIDATION = "validation"
    GENERIC = "generic"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Успешный результат с полезной нагрузкой."""
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Failure], R]) -> R:
        return on_success(self.value)

    def map(self, transform: Callable[[T], U]) -> Success[U]:
        return Success(transform(self.value))

    def flat_map(self, transform: Callable[[T], Result[U]]) -> Result[U]:
        return transform(self.value)

    async def async_map(self, transform: Callable[[T], Awaitable[Result[U]]]) -> Result[U]:
        return await transform(self.value)

    def value_or(self, default: Any) -> T:
        return self.value

    def with_context(self, prefix: str) -> Success[T]:
        return self


@dataclass(frozen=True, slots=True)
class Failure:
    """Ошибка: вид + человекочитаемое сообщение (без трейсбеков)."""
    kind: FailureKind
    message: str

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def fold(self, on_success: Callable[[Any], R], on_failure: Callable[[Failure], R]) -> R:
        return on_failure(self)

    def map(self, transform: Callable[[Any], Any]) -> Failure:
        return self

    def flat_map(self, transform: Callable[[Any], Any]) -> Failure:
        return self

    async def async_map(self, transform: Callable[[Any], Awaitable[Any]]) -> Failure:
        return self

    def value_or(self, default: R) -> R:
        return default

    def with_context(self, prefix: str) -> Failure:
        """Уточнить сообщение контекстом, вид ошибки сохраняется."""
        return Failure(self.kind, f"{prefix}: {self.message}")

    @classmethod
    def network(cls, message: str) -> Failure:
        return cls(FailureKind.NETWORK, message)

    @classmethod
    def server(cls, message: str) -> Failure:
        return cls(FailureKind.SERVER, message)

    @classmethod
    def authentication(cls, message: str = "Authentication required") -> Failure:
        return cls(FailureKind.AUTHENTICATION, message)

    @classmethod
    def permission(cls, message: str) -> Failure:
        return cls(FailureKind.PERMISSION, message)

    @classmethod
    def validation(cls, message: str) -> Failure:
        return cls(FailureKind.VALIDATION, message)

    @classmethod
    def generic(cls, message: str) -> Failure:
        return cls(FailureKind.GENERIC, message)


Result = Union[Success[T], Failure]


def fold(result: Result[T], on_success: Callable[[T], R], on_failure: Callable[[Failure], R]) -> R:
    """Исчерпывающий разбор результата (без ветки по умолчанию)."""
    match result:
        case Success(value=value):
            return on_success(value)
        case Failure():
            return on_failure(result)
        case _:
            assert_never(result)


def failure_title(kind: FailureKind) -> str:
    """Заголовок сообщения об ошибке для вывода пользователю."""
    match kind:
        case FailureKind.NETWORK:
            return "Connection problem"
        case FailureKind.SERVER:
            return "Server error"
        case FailureKind.AUTHENTICATION:
            return "Please sign in again"
        case FailureKind.PERMISSION:
            return "Access denied"
        case FailureKind.VALIDATION:
            return "Check the entered data"
        case FailureKind.GENERIC:
            return "Something went wrong"
        case _:
            assert_never(kind)
