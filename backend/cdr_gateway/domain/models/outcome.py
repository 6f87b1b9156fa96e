"""
Ingestion Outcome Model
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from cdr_gateway.domain.models.cdr import CdrRecord
from cdr_gateway.domain.models.classification import ClassificationResult
from cdr_gateway.domain.models.disposition import (
    Accepted,
    Disposition,
    MaskingAssignment,
    Rejected,
    RoutingState,
)


class IngestionOutcome(BaseModel):
    """Result of running one inbound call through the routing engine"""
    disposition: Disposition
    terminal_state: RoutingState = Field(..., description="Deciding state before DONE")
    path: List[RoutingState] = Field(default_factory=list, description="States visited, START to DONE")
    classification: ClassificationResult
    record: CdrRecord
    persisted: Dict[str, Any] = Field(default_factory=dict, description="CDR as stored by the backend")
    masking: Optional[MaskingAssignment] = None

    @property
    def accepted(self) -> bool:
        return isinstance(self.disposition, Accepted)

    def to_response(self) -> Dict[str, Any]:
        """
        Response envelope for the dashboard.

        Rejections are a domain outcome and still go out with HTTP 200.
        """
        if isinstance(self.disposition, Rejected):
            return {
                "success": False,
                "message": self.disposition.reason.message,
                "data": self.record.rejection_summary(),
            }
        return {"success": True, "data": self.persisted}
