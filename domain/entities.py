"""
Доменные сущности и перечисления.

Сущности строятся строгой валидацией ответа сервера (pydantic): обязательные
поля не подставляются молча, значения по умолчанию есть только у полей
с документированным бизнес-умолчанием (availability=True и т.п.).
JSON использует camelCase и `_id`.
"""
from __future__ import annotations

import enum
import logging
from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from domain.result import Failure, Result, Success

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Entity")


# --- Enums ---

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.READY: "Ready to Serve",
    OrderStatus.SERVED: "Served",
    OrderStatus.CANCELLED: "Cancelled",
}


class OrderType(str, enum.Enum):
    DINE_IN = "dine-in"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"


class InventoryDeductionStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CHEF = "chef"
    WAITER = "waiter"
    CASHIER = "cashier"
    CUSTOMER = "customer"

    @property
    def level(self) -> int:
        """Уровень в иерархии ролей (admin > manager > ... > customer)."""
        return _ROLE_LEVELS[self]


_ROLE_LEVELS = {
    UserRole.ADMIN: 5,
    UserRole.MANAGER: 4,
    UserRole.CHEF: 3,
    UserRole.WAITER: 2,
    UserRole.CASHIER: 1,
    UserRole.CUSTOMER: 0,
}


# --- Base ---

class Entity(BaseModel):
    """База сущностей: camelCase-алиасы, неизвестные поля игнорируются."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _null_to_default(cls, data: Any) -> Any:
        """null в поле со значением по умолчанию -> значение по умолчанию; обязательные поля строгие."""
        if not isinstance(data, dict):
            return data
        defaulted = {
            key
            for name, field in cls.model_fields.items()
            if not field.is_required()
            for key in (name, field.alias)
            if key
        }
        return {k: v for k, v in data.items() if v is not None or k not in defaulted}

    @classmethod
    def from_json(cls: type[E], payload: Any) -> E:
        return cls.model_validate(payload)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _unpack_reference(data: Any, key: str, prefix: str, extra: tuple[str, ...] = ("name",)) -> Any:
    """
    Развернуть ссылку, которая приходит либо id-строкой, либо populated-объектом.

    {"customer": {"_id": "c1", "name": "Ann"}} -> {"customerId": "c1", "customerName": "Ann"}
    """
    if not isinstance(data, dict) or key not in data:
        return data
    data = dict(data)
    ref = data.pop(key)
    if isinstance(ref, dict):
        data.setdefault(f"{prefix}Id", ref.get("_id") or ref.get("id"))
        for field in extra:
            data.setdefault(f"{prefix}{field.capitalize()}", ref.get(field))
    elif ref is not None:
        data.setdefault(f"{prefix}Id", str(ref))
    return data


# --- Menu ---

class IngredientReference(Entity):
    ingredient: str = Field(validation_alias=AliasChoices("ingredient", "ingredientId"))
    quantity: float = Field(default=0.0, ge=0)
    unit: str = ""

    @model_validator(mode="before")
    @classmethod
    def _unpack_ingredient(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("ingredient"), dict):
            data = dict(data)
            ref = data["ingredient"]
            data["ingredient"] = ref.get("_id") or ref.get("id")
        return data


class Category(Entity):
    id: str = Field(alias="_id", min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    is_active: bool = True


class MenuItem(Entity):
    id: str = Field(alias="_id", min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0)
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    ingredient_references: list[IngredientReference] = Field(default_factory=list)
    dietary_tags: list[str] = Field(default_factory=list)
    availability: bool = True
    preparation_time: int = Field(default=15, ge=1, le=240)
    chef_special: bool = False
    average_rating: float = 0.0
    review_count: int = 0
    image_url: Optional[str] = None
    cost_price: Optional[float] = None
    profit_margin: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _unpack_category(cls, data: Any) -> Any:
        return _unpack_reference(data, "category", "category")

    @property
    def is_vegetarian(self) -> bool:
        tags = {t.lower() for t in self.dietary_tags}
        return "vegetarian" in tags or "vegan" in tags

    @property
    def is_fast_prep(self) -> bool:
        return self.preparation_time <= 15

    def to_json(self) -> dict:
        data = super().to_json()
        category_id = data.pop("categoryId", None)
        category_name = data.pop("categoryName", None)
        if category_id is not None:
            data["category"] = {"_id": category_id, "name": category_name} if category_name else category_id
        return data


# --- Orders ---

class OrderItem(Entity):
    menu_item_id: str = Field(min_length=1)
    menu_item_name: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    price: float = Field(ge=0)
    special_instructions: Optional[str] = None
    original_price: Optional[float] = None
    discount_amount: Optional[float] = None
    final_price: Optional[float] = None
    applied_promotion: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _unpack_menu_item(cls, data: Any) -> Any:
        return _unpack_reference(data, "menuItem", "menuItem")

    @property
    def unit_price(self) -> float:
        return self.final_price if self.final_price is not None else self.price

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity


class InventoryDeduction(Entity):
    status: InventoryDeductionStatus = InventoryDeductionStatus.PENDING
    data: Optional[dict[str, Any]] = None
    warning: Optional[str] = None
    timestamp: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class Order(Entity):
    id: str = Field(alias="_id", min_length=1)
    items: list[OrderItem] = Field(default_factory=list)
    total_amount: float = Field(ge=0)
    total_discount_amount: Optional[float] = None
    status: OrderStatus = OrderStatus.PENDING
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    table_number: Optional[int] = None
    order_type: OrderType = OrderType.DINE_IN
    order_date: datetime
    inventory_deduction: Optional[InventoryDeduction] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _unpack_customer(cls, data: Any) -> Any:
        return _unpack_reference(data, "customer", "customer", extra=("name", "email"))

    @property
    def items_total(self) -> float:
        """Сумма позиций. Авторитетна только total_amount с сервера."""
        return sum(item.total for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_terminal(self) -> bool:
        return self.status in (OrderStatus.SERVED, OrderStatus.CANCELLED)

    @property
    def status_label(self) -> str:
        return self.status.label


class BestSellingDish(Entity):
    name: str = "Unknown Dish"
    quantity: int = 0
    revenue: float = 0.0


class OrderStats(Entity):
    daily_earnings: float = 0.0
    weekly_earnings: float = 0.0
    yearly_earnings: float = 0.0
    today_order_count: int = 0
    avg_order_value: float = 0.0
    orders_by_status: dict[str, int] = Field(default_factory=dict)
    best_selling_dishes: list[BestSellingDish] = Field(default_factory=list)


# --- Users ---

class User(Entity):
    id: str = Field(alias="_id", min_length=1)
    name: str
    email: str
    role: UserRole = UserRole.CUSTOMER
    phone: Optional[str] = None
    is_active: bool = True

    def can_access(self, required_role: UserRole) -> bool:
        return self.role.level >= required_role.level

    def has_any_role(self, *roles: UserRole) -> bool:
        return self.role in roles


class AuthSession(Entity):
    token: str = Field(min_length=1)
    user: User


# --- Back office ---

class Supplier(Entity):
    id: str = Field(alias="_id", min_length=1)
    name: str = Field(min_length=1)
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True


class Review(Entity):
    id: str = Field(alias="_id", min_length=1)
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    menu_item_id: Optional[str] = None
    menu_item_name: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _unpack_refs(cls, data: Any) -> Any:
        data = _unpack_reference(data, "user", "user")
        return _unpack_reference(data, "menuItem", "menuItem")


# --- Parsing ---

def describe_errors(error: ValidationError) -> str:
    """Собрать сообщения pydantic в одну строку через ", "."""
    messages = []
    for err in error.errors():
        if err.get("type") == "value_error":
            messages.append(str(err["msg"]).removeprefix("Value error, "))
        else:
            location = ".".join(str(part) for part in err.get("loc", ()))
            messages.append(f"{location}: {err['msg']}" if location else str(err["msg"]))
    return ", ".join(messages)


def parse_entity(model: type[E], payload: Any, label: str) -> Result[E]:
    """JSON -> сущность или Failure(VALIDATION)."""
    try:
        return Success(model.from_json(payload))
    except ValidationError as e:
        logger.warning("Invalid %s payload: %s", label, e)
        return Failure.validation(f"Invalid {label} data: {describe_errors(e)}")


def parse_entities(model: type[E], payloads: list[Any], label: str) -> Result[list[E]]:
    """Список JSON -> список сущностей; первая ошибка прерывает разбор."""
    entities: list[E] = []
    for payload in payloads:
        result = parse_entity(model, payload, label)
        if isinstance(result, Failure):
            return result
        entities.append(result.value)
    return Success(entities)
