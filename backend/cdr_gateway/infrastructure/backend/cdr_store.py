"""
HTTP CDR Store
Writes and lists call-detail records on the CDR backend
"""
import logging
from typing import Any, Dict, Optional

import httpx

from cdr_gateway.domain.errors import PersistenceError
from cdr_gateway.domain.interfaces.cdr_store import CdrStore
from cdr_gateway.domain.models.cdr import CdrRecord
from cdr_gateway.infrastructure.backend.base import BackendClient, BackendError, unwrap_object

logger = logging.getLogger(__name__)


class HttpCdrStore(CdrStore):
    """CDR backend adapter (``POST CDR_API_URL/create``, ``GET CDR_API_URL``)"""

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        auth_token: Optional[str] = None,
        timeout: float = 10.0
    ):
        self._client = BackendClient(base_url, http_client, auth_token=auth_token, timeout=timeout)

    async def persist(self, record: CdrRecord) -> Dict[str, Any]:
        try:
            result = await self._client.request_json("POST", "/create", json=record.to_payload())
            return unwrap_object(result)
        except BackendError as e:
            logger.error(f"Error creating CDR record for {record.src}: {e}")
            raise PersistenceError(f"Failed to create CDR record: {e}") from e

    async def list_records(self, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            result = await self._client.request_json("GET", params=params or None)
        except BackendError as e:
            logger.error(f"Error fetching CDR records: {e}")
            raise PersistenceError(f"Failed to fetch CDR records: {e}") from e

        if isinstance(result, dict):
            return result
        return {"success": True, "data": result}
