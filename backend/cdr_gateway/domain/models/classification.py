"""
Line Classification Models
"""
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class LineType(str, Enum):
    """Carrier technology of a phone number"""
    MOBILE = "mobile"
    LANDLINE = "landline"
    VOIP = "voip"
    UNKNOWN = "unknown"
    INVALID = "invalid"  # no digits to look up


class ClassificationResult(BaseModel):
    """Line type and fraud signals for one inbound source number"""
    source_number: str
    line_type: LineType = LineType.UNKNOWN
    is_voip: bool = False
    fraud_score: int = Field(default=0, ge=0, le=100)
    recent_abuse: bool = False

    model_config = ConfigDict(frozen=True)

    def cdr_fields(self) -> dict:
        """Fields folded into the call-detail record"""
        return {
            "line_type": self.line_type.value,
            "is_voip": self.is_voip,
            "fraud_score": self.fraud_score,
            "recent_abuse": self.recent_abuse,
        }
