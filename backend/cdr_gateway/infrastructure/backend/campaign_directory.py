"""
HTTP Campaign Directory
Lists campaigns from the campaign backend with a fixed-delay retry
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from cdr_gateway.domain.errors import CampaignLookupError
from cdr_gateway.domain.interfaces.campaign_directory import CampaignDirectory
from cdr_gateway.domain.models.campaign import Campaign
from cdr_gateway.domain.services.retry_policy import RetryPolicy
from cdr_gateway.infrastructure.backend.base import BackendClient, unwrap_list

logger = logging.getLogger(__name__)


class HttpCampaignDirectory(CampaignDirectory):
    """
    Campaign backend adapter (``GET CAMPAIGN_API_URL``).

    Every attempt re-reads the backend; the campaign set can change between
    requests, so nothing is cached.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        retry_policy: Optional[RetryPolicy] = None,
        auth_token: Optional[str] = None,
        timeout: float = 10.0
    ):
        self._client = BackendClient(base_url, http_client, auth_token=auth_token, timeout=timeout)
        self._retry = retry_policy or RetryPolicy()

    async def list_campaigns(self) -> List[Campaign]:
        try:
            return await self._retry.run(self._fetch_campaigns, description="Campaign lookup")
        except Exception as e:
            raise CampaignLookupError(
                f"Campaign lookup failed after {self._retry.max_attempts} attempts: {e}",
                last_error=e
            ) from e

    async def _fetch_campaigns(self) -> List[Campaign]:
        """Single attempt"""
        result = await self._client.request_json("GET")
        items = unwrap_list(result)

        campaigns = []
        for item in items:
            try:
                campaigns.append(Campaign.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed campaign entry: {e}")
        logger.debug(f"Fetched {len(campaigns)} campaigns")
        return campaigns
