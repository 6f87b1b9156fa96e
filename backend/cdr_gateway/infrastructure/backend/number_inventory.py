"""
HTTP Number Inventory
Lists phone numbers from the numbers backend
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from cdr_gateway.domain.errors import NumberInventoryError
from cdr_gateway.domain.interfaces.number_inventory import NumberInventory
from cdr_gateway.domain.models.phone_number import PhoneNumber
from cdr_gateway.infrastructure.backend.base import BackendClient, BackendError, unwrap_list

logger = logging.getLogger(__name__)


class HttpNumberInventory(NumberInventory):
    """Numbers backend adapter (``GET NUMBERS_API_URL``)"""

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        auth_token: Optional[str] = None,
        timeout: float = 10.0
    ):
        self._client = BackendClient(base_url, http_client, auth_token=auth_token, timeout=timeout)

    async def list_numbers(self) -> List[PhoneNumber]:
        try:
            result = await self._client.request_json("GET")
            items = unwrap_list(result)
        except BackendError as e:
            raise NumberInventoryError(f"Failed to fetch phone numbers: {e}") from e

        numbers = []
        for item in items:
            try:
                numbers.append(PhoneNumber.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed phone number entry: {e}")
        return numbers
