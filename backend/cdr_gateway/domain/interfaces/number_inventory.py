"""
Number Inventory Interface
"""
from abc import ABC, abstractmethod
from typing import List
from cdr_gateway.domain.models.phone_number import PhoneNumber


class NumberInventory(ABC):
    """Read-only view of the call center's phone numbers"""

    @abstractmethod
    async def list_numbers(self) -> List[PhoneNumber]:
        """
        Fetch all numbers in inventory

        Raises:
            NumberInventoryError: When the inventory cannot be listed
        """
        pass
