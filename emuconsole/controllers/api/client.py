"""Async HTTP client for the admin console REST surface."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from emuconsole.constants.defaults import BASE_URL_DEFAULT
from emuconsole.constants.timeouts import REQUEST_TIMEOUT
from emuconsole.controllers.base.errors import ApiError, TransportError

logger = logging.getLogger(__name__)

_FILENAME_PATTERN = re.compile(r"""filename\*?=(?:UTF-8'')?["']?([^"';]+)["']?""", re.IGNORECASE)


def error_message(response: httpx.Response) -> str:
    """Return the backend's ``error`` text, falling back to ``HTTP <status>``."""
    fallback = f"HTTP {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str) and message:
            return message
    return fallback


def filename_from_disposition(header: str | None) -> str | None:
    """Extract the filename from a ``Content-Disposition`` header."""
    if not header:
        return None
    match = _FILENAME_PATTERN.search(header)
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


class ConsoleApiClient:
    """Thin JSON client over ``httpx.AsyncClient``.

    Every request either returns decoded JSON or raises ``ApiError`` for a
    non-2xx answer and ``TransportError`` when no answer arrived.
    """

    def __init__(
        self,
        base_url: str = BASE_URL_DEFAULT,
        *,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def http(self) -> httpx.AsyncClient:
        """Underlying httpx client, shared with the event stream transport."""
        return self._http

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._send("GET", path, params=params)
        return self._decode(response)

    async def post_json(self, path: str, payload: dict[str, Any]) -> Any:
        response = await self._send("POST", path, json=payload)
        # Action endpoints may answer with an empty body
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    async def download(self, path: str) -> tuple[bytes, str | None]:
        """GET a document and return its bytes and suggested filename."""
        response = await self._send("GET", path)
        filename = filename_from_disposition(response.headers.get("content-disposition"))
        return response.content, filename

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            message = error_message(response)
            logger.debug("%s %s answered %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        return response

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(response.status_code, f"Invalid JSON response: {exc}") from exc


__all__ = [
    "ConsoleApiClient",
    "error_message",
    "filename_from_disposition",
]
