"""
CDR Store Interface
"""
from abc import ABC, abstractmethod
from typing import Any, Dict
from cdr_gateway.domain.models.cdr import CdrRecord


class CdrStore(ABC):
    """Backend store for call-detail records"""

    @abstractmethod
    async def persist(self, record: CdrRecord) -> Dict[str, Any]:
        """
        Write a call-detail record

        Returns:
            The record as stored by the backend

        Raises:
            PersistenceError: On network or backend failure
        """
        pass

    @abstractmethod
    async def list_records(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        List records, forwarding query parameters unchanged

        Raises:
            PersistenceError: On network or backend failure
        """
        pass
