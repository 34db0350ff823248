"""
Машина состояний статуса заказа.

pending → confirmed → preparing → ready → served, отмена (cancelled) из любого
нетерминального состояния. served и cancelled терминальны.

Легальность перехода (состояние) и право актора (роль) проверяются
независимо, обе проверки должны пройти. Проверка роли на клиенте носит
рекомендательный характер, окончательное решение за сервером.
"""
import logging
from typing import Optional

from domain.entities import OrderStatus, UserRole
from domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)

_FORWARD: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.SERVED,
}

TERMINAL_STATUSES = frozenset({OrderStatus.SERVED, OrderStatus.CANCELLED})

# Роли без ограничений по целевому статусу
_UNRESTRICTED_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER})

ROLE_STATUS_PERMISSIONS: dict[UserRole, frozenset[OrderStatus]] = {
    UserRole.CHEF: frozenset({OrderStatus.PREPARING, OrderStatus.READY}),
    UserRole.WAITER: frozenset({OrderStatus.CONFIRMED, OrderStatus.SERVED}),
}


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    """Следующий статус по основному пути или None для терминальных."""
    return _FORWARD.get(current)


def allowed_transitions(current: OrderStatus) -> frozenset[OrderStatus]:
    if is_terminal(current):
        return frozenset()
    return frozenset({_FORWARD[current], OrderStatus.CANCELLED})


def is_valid_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in allowed_transitions(current)


def can_set_status(role: UserRole, requested: OrderStatus) -> bool:
    """Может ли роль выставить статус requested."""
    if role in _UNRESTRICTED_ROLES:
        return True
    return requested in ROLE_STATUS_PERMISSIONS.get(role, frozenset())


def check_transition(
    current: OrderStatus,
    requested: OrderStatus,
    actor_role: Optional[UserRole] = None,
) -> Result[OrderStatus]:
    """
    Проверить переход до сетевого запроса.

    Returns:
        Success(requested) или Failure VALIDATION (недопустимый переход) /
        PERMISSION (роль не может выставить этот статус).
    """
    if not is_valid_transition(current, requested):
        return Failure.validation(
            f"Invalid status transition: {current.value} -> {requested.value}"
        )
    if actor_role is not None and not can_set_status(actor_role, requested):
        logger.warning(
            "Status change denied by role policy: role=%s, %s -> %s",
            actor_role.value, current.value, requested.value,
        )
        return Failure.permission(
            f"Role '{actor_role.value}' cannot set order status to '{requested.value}'"
        )
    return Success(requested)
