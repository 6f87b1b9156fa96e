"""
Call Detail Record Models
"""
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Any, Dict, Optional

from cdr_gateway.domain.models.classification import ClassificationResult
from cdr_gateway.domain.models.disposition import MaskingAssignment, RejectReason


REJECTED_STATUS = "REJECTED"


class CdrRecord(BaseModel):
    """
    Call-detail record written to the CDR backend.

    Inbound call fields the pipeline does not own (dst, duration, ...) ride
    along as extra fields and are written back untouched.
    """
    src: str
    line_type: str
    is_voip: bool
    fraud_score: int
    recent_abuse: bool
    masked: bool = False
    original_src: Optional[str] = None
    campaign_id: Optional[str] = None
    campaign_name: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @model_validator(mode="after")
    def check_masking_invariant(self) -> "CdrRecord":
        if self.masked and not self.is_voip:
            raise ValueError("masked record must be a VoIP call")
        if self.masked and self.campaign_id is None:
            raise ValueError("masked record must carry a campaign_id")
        return self

    @classmethod
    def build(
        cls,
        call_fields: Dict[str, Any],
        src: str,
        classification: ClassificationResult,
        **pipeline_fields: Any
    ) -> "CdrRecord":
        """Merge caller fields with classification and pipeline fields (pipeline wins)"""
        return cls(**{
            **call_fields,
            "src": src,
            **classification.cdr_fields(),
            **pipeline_fields,
        })

    @classmethod
    def accepted(
        cls,
        call_fields: Dict[str, Any],
        classification: ClassificationResult
    ) -> "CdrRecord":
        return cls.build(call_fields, classification.source_number, classification, masked=False)

    @classmethod
    def masked_voip(
        cls,
        call_fields: Dict[str, Any],
        classification: ClassificationResult,
        assignment: MaskingAssignment,
        campaign_name: str
    ) -> "CdrRecord":
        return cls.build(
            call_fields,
            assignment.presented_number,
            classification,
            masked=True,
            original_src=assignment.original_number,
            campaign_id=assignment.campaign_id,
            campaign_name=campaign_name,
        )

    @classmethod
    def rejected(
        cls,
        call_fields: Dict[str, Any],
        classification: ClassificationResult,
        reason: RejectReason
    ) -> "CdrRecord":
        return cls.build(
            call_fields,
            classification.source_number,
            classification,
            masked=False,
            status=REJECTED_STATUS,
            reason=reason.wire_code,
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the CDR backend; unset optional fields are omitted"""
        return self.model_dump(mode="json", exclude_none=True)

    def rejection_summary(self) -> Dict[str, Any]:
        """Audit payload returned to the dashboard for a rejected call"""
        return {
            "src": self.src,
            "line_type": self.line_type,
            "is_voip": self.is_voip,
            "fraud_score": self.fraud_score,
            "recent_abuse": self.recent_abuse,
            "status": self.status,
            "reason": self.reason,
        }
