"""
Валидация входных данных до сетевого запроса.
"""
import enum
import re
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from domain.entities import UserRole, describe_errors
from domain.result import Failure, Result, Success

M = TypeVar("M", bound=BaseModel)
EnumT = TypeVar("EnumT", bound=enum.Enum)

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_PRICE = 1000
MIN_PREPARATION_TIME = 1
MAX_PREPARATION_TIME = 240
MIN_PASSWORD_LENGTH = 6

_PHONE_RE = re.compile(r'^[\d\s\+\-\(\)]+$')


class InputModel(BaseModel):
    """База входных моделей: принимает snake_case и camelCase, отдаёт camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_default=True,
        extra="ignore",
    )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _require_updates(model: BaseModel) -> None:
    if not model.model_dump(exclude_none=True):
        raise ValueError("No updates provided")


# --- Общие проверки полей ---

def _check_name(v: str) -> str:
    if not v:
        raise ValueError("Name is required")
    if len(v) > MAX_NAME_LENGTH:
        raise ValueError(f"Name must be less than {MAX_NAME_LENGTH} characters")
    return v


def _check_description(v: str) -> str:
    if not v:
        raise ValueError("Description is required")
    if len(v) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(f"Description must be less than {MAX_DESCRIPTION_LENGTH} characters")
    return v


def _check_price(v: float) -> float:
    if v <= 0:
        raise ValueError("Price must be greater than 0")
    if v > MAX_PRICE:
        raise ValueError(f"Price cannot exceed {MAX_PRICE}")
    return v


def _check_preparation_time(v: int) -> int:
    if v < MIN_PREPARATION_TIME or v > MAX_PREPARATION_TIME:
        raise ValueError(
            f"Preparation time must be between {MIN_PREPARATION_TIME} and {MAX_PREPARATION_TIME} minutes"
        )
    return v


def _check_email(v: str) -> str:
    if not v or "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("Please enter a valid email")
    return v.lower()


def _check_phone(v: str) -> str:
    # Простая валидация: цифры, +, -, пробелы, скобки
    if not _PHONE_RE.match(v):
        raise ValueError("Invalid phone number format")
    if len(v) < 7 or len(v) > 20:
        raise ValueError("Phone number must be 7 to 20 characters long")
    return v


# --- Меню ---

class MenuItemInput(InputModel):
    """Данные нового блюда."""

    name: str = ""
    description: str = ""
    price: float = 0.0
    category: str = ""
    preparation_time: int = 15
    dietary_tags: list[str] = Field(default_factory=list)
    availability: bool = True
    chef_special: bool = False
    image_url: Optional[str] = None
    cost_price: Optional[float] = None
    ingredient_references: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _check_description(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        return _check_price(v)

    @field_validator("preparation_time")
    @classmethod
    def validate_preparation_time(cls, v: int) -> int:
        return _check_preparation_time(v)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if not v:
            raise ValueError("Category is required")
        return v

    @field_validator("cost_price")
    @classmethod
    def validate_cost_price(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("Cost price cannot be negative")
        return v


class MenuItemUpdateInput(InputModel):
    """Частичное обновление блюда: те же правила, все поля необязательны."""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    preparation_time: Optional[int] = None
    dietary_tags: Optional[list[str]] = None
    availability: Optional[bool] = None
    chef_special: Optional[bool] = None
    image_url: Optional[str] = None
    cost_price: Optional[float] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_description(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Optional[float]) -> Optional[float]:
        return v if v is None else _check_price(v)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v:
            raise ValueError("Category is required")
        return v

    @field_validator("preparation_time")
    @classmethod
    def validate_preparation_time(cls, v: Optional[int]) -> Optional[int]:
        return v if v is None else _check_preparation_time(v)

    @model_validator(mode="after")
    def validate_not_empty(self):
        _require_updates(self)
        return self


# --- Авторизация и пользователи ---

class LoginInput(InputModel):
    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class RegisterInput(InputModel):
    name: str = ""
    email: str = ""
    password: str = ""
    role: UserRole = UserRole.CUSTOMER

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v


class ProfileUpdateInput(InputModel):
    """Обновление своего профиля: имя и/или телефон."""

    name: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_name(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_phone(v)

    @model_validator(mode="after")
    def validate_not_empty(self):
        _require_updates(self)
        return self


class PasswordChangeInput(InputModel):
    current_password: str = ""
    new_password: str = ""

    @field_validator("current_password")
    @classmethod
    def validate_current(cls, v: str) -> str:
        if not v:
            raise ValueError("Current password is required")
        return v

    @field_validator("new_password")
    @classmethod
    def validate_new(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v

    @model_validator(mode="after")
    def validate_changed(self):
        if self.current_password and self.current_password == self.new_password:
            raise ValueError("New password must be different from the current password")
        return self


class UserUpdateInput(InputModel):
    """Изменение пользователя администратором."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_phone(v)

    @model_validator(mode="after")
    def validate_not_empty(self):
        _require_updates(self)
        return self


# --- Бэк-офис ---

class SupplierInput(InputModel):
    name: str = ""
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_email(v)


class ReviewInput(InputModel):
    menu_item: str = ""
    rating: int = 0
    comment: str = ""

    @field_validator("menu_item")
    @classmethod
    def validate_menu_item(cls, v: str) -> str:
        if not v:
            raise ValueError("Menu item ID is required")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if v < 1 or v > 5:
            raise ValueError("Rating must be between 1 and 5")
        return v


# --- Хелперы ---

def validate_input(model_class: type[M], data: Any, error_message: Optional[str] = None) -> Result[M]:
    """
    Валидировать входные данные.

    Args:
        model_class: Класс модели Pydantic
        data: Словарь с данными (или уже готовая модель)
        error_message: Кастомное сообщение об ошибке

    Returns:
        Success(модель) или Failure(VALIDATION) с сообщениями через ", "
    """
    if isinstance(data, model_class):
        return Success(data)
    try:
        return Success(model_class.model_validate(data or {}))
    except ValidationError as e:
        return Failure.validation(error_message or describe_errors(e))


def require_token(token: Optional[str]) -> Optional[Failure]:
    """Failure(AUTHENTICATION), если токен пустой."""
    if not token or not token.strip():
        return Failure.authentication("Authentication required")
    return None


def require_text(value: Optional[str], label: str) -> Optional[Failure]:
    if value is None or not str(value).strip():
        return Failure.validation(f"{label} is required")
    return None


def require_updates(data: Optional[dict]) -> Optional[Failure]:
    if not data:
        return Failure.validation("No updates provided")
    return None


def parse_choice(enum_class: type[EnumT], value: Any, label: str) -> Result[EnumT]:
    """Строка (или значение перечисления) -> член перечисления."""
    if isinstance(value, enum_class):
        return Success(value)
    raw = str(value).strip() if value is not None else ""
    for candidate in (raw, raw.lower()):
        try:
            return Success(enum_class(candidate))
        except ValueError:
            continue
    return Failure.validation(f"Invalid {label}: {value}")
