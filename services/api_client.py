"""
HTTP-клиент REST API ресторана (aiohttp).

Все методы возвращают Result и не бросают исключений при сетевых и HTTP
ошибках: транспорт/таймаут -> NETWORK, коды ответа -> вид ошибки по таблице
_STATUS_FAILURES. GET-запросы повторяются при сетевой ошибке.
"""
from __future__ import annotations

import asyncio
import json
import logging
import time
from datetime import date, datetime
from typing import Any, Mapping, Optional

import aiohttp

from domain.result import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0

_STATUS_FAILURES: dict[int, FailureKind] = {
    400: FailureKind.VALIDATION,
    401: FailureKind.AUTHENTICATION,
    403: FailureKind.PERMISSION,
    500: FailureKind.SERVER,
    502: FailureKind.SERVER,
    503: FailureKind.SERVER,
}


def clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Query-параметры без None; bool -> true/false, даты -> ISO 8601."""
    cleaned: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        elif isinstance(value, (datetime, date)):
            cleaned[key] = value.isoformat()
        elif hasattr(value, "value"):
            cleaned[key] = str(value.value)
        else:
            cleaned[key] = str(value)
    return cleaned


def _error_message(body: Any, status: int) -> str:
    if isinstance(body, dict):
        for key in ("message", "error"):
            message = body.get(key)
            if message:
                return str(message)
    return f"Server error: {status}"


def map_response(status: int, content_type: str, text: str) -> Result[Any]:
    """
    Разобрать ответ сервера в Result.

    Args:
        status: HTTP код
        content_type: Заголовок Content-Type
        text: Тело ответа
    """
    stripped = text.lstrip()
    if "text/html" in content_type.lower() or stripped.lower().startswith(("<!doctype", "<html")):
        return Failure.server(f"Server returned HTML instead of JSON. Status: {status}")

    if not stripped:
        body: Any = {}
    else:
        try:
            body = json.loads(text)
        except ValueError as e:
            return Failure.generic(f"Failed to parse response: {e}")

    if 200 <= status < 300:
        return Success(body)

    kind = _STATUS_FAILURES.get(status, FailureKind.GENERIC)
    return Failure(kind, _error_message(body, status))


def as_dict(body: Any) -> dict:
    """Не-словарь оборачивается в {"data": ...}."""
    return body if isinstance(body, dict) else {"data": body}


def unwrap(body: dict, *keys: str) -> Any:
    """Снять конверт ответа: первое вложенное поле-словарь из keys или data."""
    for key in (*keys, "data"):
        value = body.get(key)
        if isinstance(value, dict):
            return value
    return body


def extract_list(body: Any, field: str = "data") -> list:
    """Список из ответа: само тело, поле field, поле data или пустой список."""
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in (field, "data"):
            value = body.get(key)
            if isinstance(value, list):
                return value
    logger.warning("No list found in response (field=%s)", field)
    return []


class ApiClient:
    """HTTP-клиент для REST API ресторана."""

    def __init__(
        self,
        base_url: str,
        connect_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        receive_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        retry_attempts: int = 1,
        retry_delay: float = 1.0,
        extra_headers: Optional[Mapping[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=None, sock_connect=connect_timeout, sock_read=receive_timeout
        )
        self.retry_attempts = max(1, retry_attempts)
        self.retry_delay = retry_delay
        self.default_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **(extra_headers or {}),
        }

    @classmethod
    def from_config(cls, cfg) -> ApiClient:
        return cls(
            base_url=cfg.API_BASE_URL,
            connect_timeout=cfg.API_CONNECT_TIMEOUT,
            receive_timeout=cfg.API_RECEIVE_TIMEOUT,
            retry_attempts=cfg.API_RETRY_ATTEMPTS,
            retry_delay=cfg.API_RETRY_DELAY,
            extra_headers=cfg.API_EXTRA_HEADERS_DICT,
        )

    def _headers(self, token: Optional[str]) -> dict[str, str]:
        headers = dict(self.default_headers)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        payload: Any = None,
        token: Optional[str] = None,
    ) -> Result[Any]:
        url = f"{self.base_url}{path}"
        started = time.monotonic()
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(
                    method,
                    url,
                    params=clean_params(params),
                    json=payload,
                    headers=self._headers(token),
                ) as resp:
                    status = resp.status
                    content_type = resp.headers.get("Content-Type", "")
                    charset = resp.charset or "utf-8"
                    raw = await resp.read()
        except asyncio.TimeoutError:
            logger.warning("API timeout [%s %s] after %.0f ms", method, path, (time.monotonic() - started) * 1000)
            return Failure.network(f"Request timed out: {method} {path}")
        except aiohttp.ClientError as e:
            logger.warning("API network error [%s %s]: %s", method, path, e)
            return Failure.network(f"Network error: {e}")

        elapsed_ms = (time.monotonic() - started) * 1000
        try:
            text = raw.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning("API %s %s -> %s undecodable body (%s): %s", method, path, status, charset, e)
            return Failure.generic(f"Failed to parse response: {e}")
        result = map_response(status, content_type, text)
        if isinstance(result, Failure):
            logger.warning(
                "API %s %s -> %s (%s) time_ms=%.1f: %s",
                method, path, status, result.kind.value, elapsed_ms, result.message,
            )
        else:
            logger.debug("API %s %s -> %s time_ms=%.1f", method, path, status, elapsed_ms)
        return result

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        payload: Any = None,
        token: Optional[str] = None,
    ) -> Result[Any]:
        # Повторяем только идемпотентные GET и только при сетевой ошибке
        attempts = self.retry_attempts if method == "GET" else 1
        result: Result[Any] = Failure.network("Request was not sent")
        for attempt in range(attempts):
            result = await self._send(method, path, params=params, payload=payload, token=token)
            if not (isinstance(result, Failure) and result.kind is FailureKind.NETWORK):
                return result
            if attempt < attempts - 1:
                logger.info("Retrying %s %s (attempt %s/%s)", method, path, attempt + 2, attempts)
                await asyncio.sleep(self.retry_delay * (attempt + 1))
        return result

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Result[dict]:
        result = await self._request("GET", path, params=params, token=token)
        return result.map(as_dict)

    async def get_list(
        self,
        path: str,
        field: str = "data",
        params: Optional[Mapping[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Result[list]:
        result = await self._request("GET", path, params=params, token=token)
        return result.map(lambda body: extract_list(body, field))

    async def post(self, path: str, payload: Any = None, token: Optional[str] = None) -> Result[dict]:
        result = await self._request("POST", path, payload=payload, token=token)
        return result.map(as_dict)

    async def put(self, path: str, payload: Any = None, token: Optional[str] = None) -> Result[dict]:
        result = await self._request("PUT", path, payload=payload, token=token)
        return result.map(as_dict)

    async def patch(self, path: str, payload: Any = None, token: Optional[str] = None) -> Result[dict]:
        result = await self._request("PATCH", path, payload=payload, token=token)
        return result.map(as_dict)

    async def delete(self, path: str, token: Optional[str] = None) -> Result[dict]:
        result = await self._request("DELETE", path, token=token)
        return result.map(as_dict)
