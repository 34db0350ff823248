"""
Конфигурация приложения с валидацией через Pydantic.
"""
from typing import Dict, Optional
from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Config(BaseSettings):
    """Конфигурация приложения с валидацией."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # REST API
    API_BASE_URL: str = Field(default="http://localhost:5000/api", description="Базовый URL API (оканчивается на /api)")
    API_CONNECT_TIMEOUT: float = Field(default=15.0, description="Таймаут соединения в секундах")
    API_RECEIVE_TIMEOUT: float = Field(default=15.0, description="Таймаут чтения ответа в секундах")
    API_RETRY_ATTEMPTS: int = Field(default=3, description="Количество попыток GET при сетевой ошибке")
    API_RETRY_DELAY: float = Field(default=1.0, description="Базовая задержка между попытками в секундах")
    # Формат: "Header-Name:value,Other:value" (например ngrok-skip-browser-warning:true)
    API_EXTRA_HEADERS: str = Field(default="", description="Дополнительные заголовки запросов")

    @field_validator("API_BASE_URL")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Валидация URL API."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"API_BASE_URL должен начинаться с http:// или https://: {v}")
        return v

    @field_validator("API_RETRY_ATTEMPTS")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("API_RETRY_ATTEMPTS должен быть не меньше 1")
        return v

    @computed_field
    @property
    def API_EXTRA_HEADERS_DICT(self) -> Dict[str, str]:
        """Дополнительные заголовки как словарь."""
        headers = {}
        for pair in self.API_EXTRA_HEADERS.split(","):
            name, sep, value = pair.partition(":")
            if sep and name.strip():
                headers[name.strip()] = value.strip()
        return headers

    # Orders
    TAX_RATE: float = Field(default=0.10, description="Ставка налога для корзины")

    @field_validator("TAX_RATE")
    @classmethod
    def validate_tax_rate(cls, v: float) -> float:
        """Валидация ставки налога."""
        if not 0 <= v < 1:
            raise ValueError(f"TAX_RATE должен быть в диапазоне [0, 1): {v}")
        return v

    # Session storage
    STORAGE_BACKEND: str = Field(default="file", description="Хранилище сессии: memory, file или redis")
    STORAGE_PATH: str = Field(default=".session.json", description="Путь к файлу сессии")

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Валидация типа хранилища."""
        v = v.lower()
        if v not in ("memory", "file", "redis"):
            raise ValueError(f"Неподдерживаемое хранилище: {v}. Допустимые: memory, file, redis")
        return v

    # Redis
    REDIS_HOST: str = Field(default="localhost", description="Хост Redis")
    REDIS_PORT: int = Field(default=6379, description="Порт Redis")
    REDIS_DB: int = Field(default=0, description="Номер БД Redis")
    REDIS_PASSWORD: Optional[str] = Field(default=None, description="Пароль Redis")
    REDIS_KEY_PREFIX: str = Field(default="staff_app:", description="Префикс ключей сессии в Redis")

    # Staff account for the console entry point
    STAFF_EMAIL: str = Field(default="", description="Email сотрудника для входа из main.py")
    STAFF_PASSWORD: str = Field(default="", description="Пароль сотрудника для входа из main.py")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Уровень логирования")
    LOG_FILE: str = Field(default="staff_app.log", description="Файл лога (ротация 10 MB x 5)")
    DEBUG: bool = Field(default=False, description="Режим отладки")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Валидация уровня логирования."""
        v = v.upper()
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v not in valid_levels:
            raise ValueError(f"Неподдерживаемый уровень логирования: {v}. Допустимые: {valid_levels}")
        return v


# Создаем экземпляр конфигурации с валидацией
try:
    config = Config()
except Exception as e:
    import sys
    print(f"❌ Ошибка загрузки конфигурации: {e}", file=sys.stderr)
    sys.exit(1)
