"""aiohttp wrapper around the directory REST API.

Attaches the bearer credential, encodes JSON or multipart bodies and turns
failed responses into the ``DirectoryError`` hierarchy.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp

from employee_directory.core.config import Settings
from employee_directory.core.exceptions import (
    AuthenticationError,
    DatabaseConnectionError,
    DirectoryError,
    NetworkError,
    NotFoundError,
    RemoteFailureError,
    RemoteValidationError,
)
from employee_directory.models.upload import ImageUpload

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


def extract_error_message(body: Any, default: str) -> str:
    """Top-level ``message`` first, then the first structured error, then ``default``."""
    if not isinstance(body, dict):
        return default

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        first = errors[0].get("msg")
        if isinstance(first, str) and first:
            return first

    return default


def _field_errors(body: Any) -> dict[str, str]:
    if not isinstance(body, dict) or not isinstance(body.get("errors"), list):
        return {}

    fields: dict[str, str] = {}
    for item in body["errors"]:
        if not isinstance(item, dict) or not item.get("msg"):
            continue
        field = item.get("path") or item.get("param") or item.get("field")
        if field and field not in fields:
            fields[str(field)] = str(item["msg"])
    return fields


def _reports_database_down(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    if body.get("error") == "MongoDB not connected":
        return True
    message = body.get("message")
    return isinstance(message, str) and "Database connection" in message


def error_from_response(status: int, body: Any, default: str) -> DirectoryError:
    if _reports_database_down(body):
        return DatabaseConnectionError(status)

    message = extract_error_message(body, default)

    if status == 404:
        return NotFoundError(message, status)
    if status == 401:
        return AuthenticationError(message, status)

    fields = _field_errors(body)
    if fields:
        return RemoteValidationError(message, fields, status)

    return RemoteFailureError(message, status)


def build_multipart(fields: Mapping[str, str], files: Mapping[str, ImageUpload]) -> aiohttp.MultipartWriter:
    writer = aiohttp.MultipartWriter("form-data")
    for name, value in fields.items():
        part = writer.append(value)
        part.set_content_disposition("form-data", name=name)
    for name, upload in files.items():
        part = writer.append(upload.content, {"Content-Type": upload.content_type})
        part.set_content_disposition("form-data", name=name, filename=upload.filename)
    return writer


class ApiClient:
    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.timeout_seconds = 30.0
        self._token_provider: TokenProvider | None = None

    async def initialize(self, settings: Settings, token_provider: TokenProvider | None = None) -> None:
        if self.initialized:
            return

        if not settings.API_BASE_URL:
            logger.warning("API_BASE_URL missing, ApiClient not initialized")
            return

        self.base_url = settings.API_BASE_URL.rstrip("/")
        self.timeout_seconds = settings.API_TIMEOUT_SECONDS
        self._token_provider = token_provider
        self.initialized = True
        logger.info("ApiClient initialized (base_url=%s)", self.base_url)

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""
        self._token_provider = None

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token is None and self._token_provider is not None:
            token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        form: Mapping[str, str] | None = None,
        files: Mapping[str, ImageUpload] | None = None,
        token: str | None = None,
        default_error: str = "Request failed. Please try again.",
    ) -> Any:
        if not self.initialized:
            raise RuntimeError("ApiClient not initialized")

        url = f"{self.base_url}{path}"
        headers = self._headers(token)
        data = build_multipart(form or {}, files or {}) if form is not None or files else None

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method,
                    url,
                    headers=headers,
                    params=dict(params) if params else None,
                    json=json_body,
                    data=data,
                ) as response:
                    body = self._decode(await response.text(errors="replace"))
                    if response.status < 400:
                        return body

                    error = error_from_response(response.status, body, default_error)
                    logger.error("%s %s failed: %s - %s", method, path, response.status, error.message)
                    raise error
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("%s %s unreachable: %s", method, path, e)
            raise NetworkError() from e

    @staticmethod
    def _decode(text: str) -> Any:
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text
