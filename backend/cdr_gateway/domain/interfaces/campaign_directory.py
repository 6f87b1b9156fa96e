"""
Campaign Directory Interface
"""
from abc import ABC, abstractmethod
from typing import List
from cdr_gateway.domain.models.campaign import Campaign


class CampaignDirectory(ABC):
    """Read-only view of the active campaigns"""

    @abstractmethod
    async def list_campaigns(self) -> List[Campaign]:
        """
        Fetch the current campaign list, in backend order

        Raises:
            CampaignLookupError: When every retry attempt failed
        """
        pass
