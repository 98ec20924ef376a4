"""Async HTTP client for the jobs backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response or transport failure. ``status`` is 0 for transport failures."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"


def _error_message(response: httpx.Response) -> str:
    """Best-effort message: JSON error, JSON message, raw text, then the status phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message"):
            if body.get(key):
                return str(body[key])
    text = response.text.strip()
    if text:
        return text
    return response.reason_phrase or f"HTTP {response.status_code}"


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient``: base-relative paths, JSON in and out.

    No retries, no timeouts and no auth headers. A 204 or an empty body resolves
    to ``None``; any other non-JSON success body raises ``ApiError``.
    """

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=None,
        )

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        if files is not None:
            kwargs["files"] = files
        elif json is not None:
            kwargs["json"] = json

        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ApiError(0, str(e) or "Network error") from e

        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s returned a non-JSON body", method, path)
            raise ApiError(response.status_code, "Invalid JSON response") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Any = None) -> Any:
        return await self.request("POST", path, json=data)

    async def put(self, path: str, data: Any = None) -> Any:
        return await self.request("PUT", path, json=data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def upload(self, path: str, files: list[tuple[str, bytes, str]]) -> Any:
        """POST multipart form data; every file goes under the ``photos`` field."""
        parts = [("photos", (name, data, content_type)) for name, data, content_type in files]
        return await self.request("POST", path, files=parts)

    async def aclose(self) -> None:
        await self._http.aclose()
