"""
Backend REST Client Base
Shared request handling for the CDR, campaign and number-inventory backends
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Raised when a backend call fails at transport or envelope level"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BackendClient:
    """
    Thin JSON client for one backend endpoint.

    The dashboard user's bearer token, when known, is forwarded on every
    request so the backend applies its own authorization.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        auth_token: Optional[str] = None,
        timeout: float = 10.0
    ):
        self.base_url = base_url.rstrip("/")
        self._http = http_client
        self._auth_token = auth_token
        self._timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    async def request_json(
        self,
        method: str,
        path: str = "",
        **kwargs: Any
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            BackendError: On transport failure, non-2xx status, a body that
                is not JSON, or an envelope with ``success: false``
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout,
                **kwargs
            )
        except httpx.HTTPError as e:
            raise BackendError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            raise BackendError(
                f"Backend API responded with status: {response.status_code}",
                status_code=response.status_code
            )

        try:
            result = response.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from {url}") from e

        if isinstance(result, dict) and result.get("success") is False:
            raise BackendError(
                result.get("message") or f"{method} {url} reported failure",
                status_code=response.status_code
            )

        return result


def unwrap_list(result: Any) -> List[Dict[str, Any]]:
    """
    Extract the item list from a backend response.

    Accepts ``{"data": [...]}``, a bare list, or an empty object.
    """
    if isinstance(result, dict) and isinstance(result.get("data"), list):
        return result["data"]
    if isinstance(result, list):
        return result
    if isinstance(result, dict) and not result:
        return []
    raise BackendError(f"Unknown API response format: {type(result).__name__}")


def unwrap_object(result: Any) -> Dict[str, Any]:
    """Extract the single object from ``{"data": {...}}`` or a bare object"""
    if isinstance(result, dict) and isinstance(result.get("data"), dict):
        return result["data"]
    if isinstance(result, dict):
        return result
    raise BackendError(f"Unknown API response format: {type(result).__name__}")
