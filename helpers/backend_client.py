"""
Thin REST client for the upstream EcoCheck backend.

Every call takes the caller's bearer token explicitly; the client itself
holds no identity.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from config.settings import settings

logger = logging.getLogger(__name__)


class BackendAPIError(Exception):
    """Upstream call failed: non-2xx status, unreachable host or unreadable body."""

    def __init__(self, status_code: Optional[int], message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


def error_message(payload: Any, default: str) -> str:
    """Pick the human-readable message out of an upstream error body."""
    if isinstance(payload, dict):
        for field in ("message", "msg", "error"):
            value = payload.get(field)
            if isinstance(value, str) and value:
                return value
    return default


class BackendClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        **kwargs,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = kwargs.pop("headers", {}) or {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise BackendAPIError(None, f"Backend unreachable: {e}") from e

        try:
            payload = resp.json() if resp.content else None
        except ValueError:
            payload = resp.text

        if not 200 <= resp.status_code < 300:
            message = error_message(payload, "An error occurred")
            logger.info("%s %s -> %s: %s", method, url, resp.status_code, message)
            raise BackendAPIError(resp.status_code, message, payload)

        if isinstance(payload, str):
            raise BackendAPIError(resp.status_code, "Malformed response from backend", payload)
        return payload

    # ─── Auth ──────────────────────────────────────────────────────────────────
    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )

    def verify_email(self, email: str, code: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/verify-email", json={"email": email, "code": code})

    def forgot_password(self, email: str) -> Any:
        return self._request("POST", "/auth/forgot-password", json={"email": email})

    def reset_password(self, email: str, reset_code: str, new_password: str) -> Any:
        return self._request(
            "POST",
            "/auth/reset-password",
            json={"email": email, "resetCode": reset_code, "newPassword": new_password},
        )

    # ─── Reports ───────────────────────────────────────────────────────────────
    def list_reports(self, token: str) -> Any:
        return self._request("GET", "/reports", token=token)

    def create_report(
        self,
        token: str,
        fields: Dict[str, str],
        photo: Tuple[str, bytes, str],
    ) -> Any:
        """POST a multipart report; `photo` is (filename, content, content_type)."""
        return self._request("POST", "/reports", token=token, data=fields, files={"photo": photo})

    # ─── Users ─────────────────────────────────────────────────────────────────
    def get_user(self, token: str, user_id: str) -> Optional[Dict[str, Any]]:
        body = self._request("GET", f"/users/{user_id}", token=token)
        if isinstance(body, dict):
            return body.get("data")
        return None
