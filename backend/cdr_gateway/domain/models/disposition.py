"""
Routing Disposition Models
Typed outcome of the ingestion pipeline for one inbound call
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal, Optional, Union
from enum import Enum


class RoutingState(str, Enum):
    """States of the routing decision engine"""
    START = "start"
    CLASSIFIED = "classified"
    NON_VOIP_ACCEPT = "non_voip_accept"
    VOIP_FRAUD_CHECK = "voip_fraud_check"
    VOIP_REJECT_HIGH_FRAUD = "voip_reject_high_fraud"
    VOIP_CAMPAIGN_LOOKUP = "voip_campaign_lookup"
    VOIP_REJECT_NO_CAMPAIGN = "voip_reject_no_campaign"
    VOIP_MASK_AND_ACCEPT = "voip_mask_and_accept"
    VOIP_REJECT_HANDLING_ERROR = "voip_reject_handling_error"
    DONE = "done"


class RejectReason(str, Enum):
    """Why a call was rejected"""
    HIGH_FRAUD_SCORE = "HIGH_FRAUD_SCORE"
    NO_VOIP_CAMPAIGN = "NO_VOIP_CAMPAIGN"
    VOIP_HANDLING_ERROR = "VOIP_HANDLING_ERROR"

    @property
    def wire_code(self) -> str:
        """
        Reason code sent to the dashboard.

        NO_VOIP_CAMPAIGN keeps the historical ``VOIP_CALL`` code that the
        dashboard filters on.
        """
        return _WIRE_CODES[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_WIRE_CODES = {
    RejectReason.HIGH_FRAUD_SCORE: "HIGH_FRAUD_SCORE",
    RejectReason.NO_VOIP_CAMPAIGN: "VOIP_CALL",
    RejectReason.VOIP_HANDLING_ERROR: "VOIP_HANDLING_ERROR",
}

_MESSAGES = {
    RejectReason.HIGH_FRAUD_SCORE: "Call rejected due to high fraud score",
    RejectReason.NO_VOIP_CAMPAIGN: "VOIP call rejected - no campaign accepts VOIP calls",
    RejectReason.VOIP_HANDLING_ERROR: "Call rejected - error handling VOIP call",
}


# Terminal state reached for each rejection
REJECT_STATES = {
    RejectReason.HIGH_FRAUD_SCORE: RoutingState.VOIP_REJECT_HIGH_FRAUD,
    RejectReason.NO_VOIP_CAMPAIGN: RoutingState.VOIP_REJECT_NO_CAMPAIGN,
    RejectReason.VOIP_HANDLING_ERROR: RoutingState.VOIP_REJECT_HANDLING_ERROR,
}


class Accepted(BaseModel):
    """Call accepted, optionally with caller-ID masking"""
    kind: Literal["accepted"] = "accepted"
    masked: bool = False

    model_config = ConfigDict(frozen=True)


class Rejected(BaseModel):
    """Call rejected for a specific reason"""
    kind: Literal["rejected"] = "rejected"
    reason: RejectReason

    model_config = ConfigDict(frozen=True)


Disposition = Annotated[Union[Accepted, Rejected], Field(discriminator="kind")]


class MaskingAssignment(BaseModel):
    """
    Caller-ID substitution for one VoIP call.

    ``masked_number`` is None when no replacement could be found; the
    original number then stays visible downstream.
    """
    original_number: str
    masked_number: Optional[str] = None
    campaign_id: str

    @property
    def presented_number(self) -> str:
        return self.masked_number or self.original_number
