# src/api/client.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests

from src import config

log = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ApiClient:
    """
    Authenticated fetch:
      - attaches `Authorization: Bearer <token>` when a token is available
      - returns decoded JSON (None for empty body)
      - raises ApiError on transport failure / non-2xx / bad JSON
    """
    def __init__(
        self,
        base_url: str | None = None,
        token_getter: Optional[Callable[[], str | None]] = None,
        session: requests.Session | None = None,
        timeout: float = config.HTTP_TIMEOUT,
    ):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self._token_getter = token_getter
        self._session = session or requests.Session()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_getter() if self._token_getter else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method: str, path: str, json: Any = None) -> Any:
        url = self.url(path)
        log.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"{method} {url} failed: {e}") from e

        if not resp.ok:
            raise ApiError(f"{method} {url} -> {resp.status_code}: {_error_text(resp)}", resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"{method} {url}: invalid JSON response", resp.status_code) from e

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def _error_text(resp) -> str:
    try:
        data = resp.json()
    except ValueError:
        return (resp.text or "").strip() or resp.reason or ""
    if isinstance(data, dict):
        return str(data.get("error") or data.get("message") or data)
    return str(data)
