import logging
from typing import Any, Optional

import requests

from monhub.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed call to the marketplace API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[dict] = None,
        timeout: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}
        self.timeout = timeout

    def __str__(self) -> str:
        return f"{self.status_code or 'network'}: {self.message}"


class ApiClient:
    """Thin JSON client bound to the marketplace API base URL.

    The caller's bearer token is forwarded on every request. Responses are
    returned as decoded JSON; any non-2xx status, transport error or timeout
    raises ApiError.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.API_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def close(self) -> None:
        self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None,
        files: Optional[dict] = None,
        data: Optional[dict] = None,
    ) -> Any:
        url = self._url(path)
        try:
            res = self.session.request(
                method,
                url,
                params=params,
                json=json,
                files=files,
                data=data,
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.error(f"API timeout: {method} {path}")
            raise ApiError("Le serveur ne répond pas", timeout=True) from exc
        except requests.RequestException as exc:
            logger.error(f"API transport error: {method} {path}: {exc}")
            raise ApiError("Impossible de joindre le serveur") from exc

        try:
            body = res.json() if res.content else {}
        except ValueError:
            body = {}

        if not res.ok:
            message = (
                body.get("message") or body.get("error")
                if isinstance(body, dict)
                else None
            ) or res.reason or "Erreur serveur"
            logger.warning(f"API error {res.status_code}: {method} {path}: {message}")
            raise ApiError(
                message,
                status_code=res.status_code,
                payload=body if isinstance(body, dict) else {},
            )

        if isinstance(body, dict) and body.get("success") is False:
            message = body.get("message") or "Erreur serveur"
            logger.warning(f"API refused {method} {path}: {message}")
            raise ApiError(message, status_code=res.status_code, payload=body)

        return body

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)

    def upload(self, path: str, files: dict, data: Optional[dict] = None) -> Any:
        return self.request("POST", path, files=files, data=data)
