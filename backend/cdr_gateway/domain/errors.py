"""
Ingestion Error Types

Two families that must never be conflated:

- FatalIngestionError: the request itself failed (HTTP 500).
- DomainRejection: the call was refused by policy (HTTP 200, success=false).
"""
from typing import Optional

from cdr_gateway.domain.models.disposition import RejectReason


class FatalIngestionError(Exception):
    """Raised when a CDR cannot be ingested at all"""
    pass


class ClassificationError(FatalIngestionError):
    """Raised when the line classifier lookup fails"""
    pass


class PersistenceError(FatalIngestionError):
    """Raised when the CDR backend rejects or cannot receive a record"""
    pass


class IngestionTimeoutError(FatalIngestionError):
    """Raised when a call exceeds the pipeline's request timeout budget"""
    pass


class CampaignLookupError(Exception):
    """Raised when the campaign directory fails on every retry attempt"""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.last_error = last_error


class NumberInventoryError(Exception):
    """Raised when the number inventory cannot be listed"""
    pass


class DomainRejection(Exception):
    """Raised inside the VoIP branch to refuse a call for a policy reason"""

    def __init__(self, reason: RejectReason, detail: str = ""):
        super().__init__(detail or reason.message)
        self.reason = reason
        self.detail = detail
