"""
Number Masking Resolver
Picks a trusted caller ID to present in place of a VoIP source number
"""
import logging
from typing import Optional

from cdr_gateway.domain.interfaces.number_inventory import NumberInventory

logger = logging.getLogger(__name__)


class NumberMaskingResolver:
    """
    Best-effort caller-ID masking.

    Masking is cosmetic, so it fails open: an inventory outage or an empty
    candidate list both resolve to None and the call keeps its original
    number. Nothing here ever raises to the caller.
    """

    def __init__(self, inventory: NumberInventory):
        self._inventory = inventory

    async def resolve_mask(self, voip_number: str) -> Optional[str]:
        """
        Find a replacement number for a VoIP caller.

        Args:
            voip_number: The VoIP source number being masked

        Returns:
            First available, enabled, non-VoIP inventory number, or None
        """
        try:
            numbers = await self._inventory.list_numbers()
        except Exception as e:
            logger.warning(f"Number inventory lookup failed, leaving {voip_number} unmasked: {e}")
            return None

        for phone_number in numbers:
            if phone_number.is_masking_candidate:
                logger.info(f"Masking {voip_number} with {phone_number.number}")
                return phone_number.number

        logger.warning(f"No masking candidate in inventory ({len(numbers)} numbers), leaving {voip_number} unmasked")
        return None
