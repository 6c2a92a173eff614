from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT, GENERIC_ERROR_MESSAGE
from ..core.exceptions import ApiError, SessionExpiredError
from .rest_base import error_message, unwrap_envelope

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout: int = DEFAULT_API_TIMEOUT


class ApiConnection:
    """Shared HTTP client for the REST backend.

    Note: One request per call. Failures are never retried; the user re-triggers
    the action instead.
    """

    _instance: Optional["ApiConnection"] = None

    def __init__(
        self,
        config: ApiConfig,
        *,
        token_provider: Optional[TokenProvider] = None,
        http: Optional[requests.Session] = None,
    ):
        self._config = config
        self._token_provider = token_provider or (lambda: None)
        self._http = http or requests.Session()

    @classmethod
    def get_instance(cls, config: ApiConfig, *, token_provider: Optional[TokenProvider] = None) -> "ApiConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = ApiConnection(config, token_provider=token_provider)
        return cls._instance

    @property
    def config(self) -> ApiConfig:
        return self._config

    def url_for(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        files: Optional[dict] = None,
        token: Optional[str] = None,
        raw: bool = False,
    ) -> Any:
        headers = {"Accept": "application/json"}
        token = token or self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = self._http.request(
                method,
                self.url_for(path),
                headers=headers,
                params=params,
                json=json,
                data=data,
                files=files,
                timeout=self._config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError("Could not reach the server. Please try again.") from e

        logger.debug("%s %s -> %s", method, path, resp.status_code)

        if resp.status_code >= 400:
            message = error_message(resp, GENERIC_ERROR_MESSAGE)
            logger.warning("%s %s rejected (%s): %s", method, path, resp.status_code, message)
            if resp.status_code == 401 or "jwt expired" in message.lower():
                raise SessionExpiredError(message, status_code=resp.status_code)
            raise ApiError(message, status_code=resp.status_code)

        if raw:
            return resp.content
        if not resp.content:
            return None
        try:
            payload = resp.json()
        except ValueError:
            raise ApiError("The server sent an unreadable response.", status_code=resp.status_code)
        return unwrap_envelope(payload)

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)
