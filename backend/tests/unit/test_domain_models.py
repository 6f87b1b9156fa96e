"""
Unit Tests for domain models
Tests campaign normalisation, CDR record construction and the masking invariant
"""
import pytest
from pydantic import TypeAdapter, ValidationError

from cdr_gateway.domain.models import (
    Accepted,
    Campaign,
    CdrRecord,
    ClassificationResult,
    Disposition,
    LineType,
    MaskingAssignment,
    RejectReason,
    Rejected,
    first_voip_campaign,
)


def voip_classification(src="15557778888", fraud_score=10):
    return ClassificationResult(
        source_number=src, line_type=LineType.VOIP, is_voip=True, fraud_score=fraud_score
    )


class TestCampaign:

    def test_voip_behavior_true_means_reject(self):
        assert Campaign.model_validate({"id": 1, "voipBehavior": True}).accepts_voip is False
        assert Campaign.model_validate({"id": 1, "voipBehavior": False}).accepts_voip is True

    def test_explicit_flag_wins(self):
        campaign = Campaign.model_validate({"id": "1", "accepts_voip": True, "voipBehavior": True})

        assert campaign.accepts_voip is True

    def test_missing_flag_means_no_voip(self):
        campaign = Campaign.model_validate({"_id": 42, "name": None, "targets": ["a"]})

        assert campaign.id == "42"
        assert campaign.name == ""
        assert campaign.accepts_voip is False

    def test_first_voip_campaign_keeps_directory_order(self):
        campaigns = [
            Campaign(id="1", name="A", accepts_voip=False),
            Campaign(id="2", name="B", accepts_voip=True),
            Campaign(id="3", name="C", accepts_voip=True),
        ]

        assert first_voip_campaign(campaigns).id == "2"
        assert first_voip_campaign(campaigns[:1]) is None
        assert first_voip_campaign([]) is None


class TestDisposition:

    def test_discriminated_union(self):
        adapter = TypeAdapter(Disposition)

        assert adapter.validate_python({"kind": "accepted", "masked": True}) == Accepted(masked=True)
        assert adapter.validate_python(
            {"kind": "rejected", "reason": "NO_VOIP_CAMPAIGN"}
        ) == Rejected(reason=RejectReason.NO_VOIP_CAMPAIGN)

    def test_presented_number_falls_back_to_original(self):
        assignment = MaskingAssignment(original_number="15557778888", campaign_id="7")

        assert assignment.presented_number == "15557778888"


class TestCdrRecord:

    def test_masked_record(self):
        record = CdrRecord.masked_voip(
            {"dst": "18005550100"},
            voip_classification(),
            MaskingAssignment(original_number="15557778888", masked_number="15550001111", campaign_id="7"),
            "VoIP-Intake"
        )

        payload = record.to_payload()
        assert payload["src"] == "15550001111"
        assert payload["original_src"] == "15557778888"
        assert payload["campaign_id"] == "7"
        assert payload["campaign_name"] == "VoIP-Intake"
        assert payload["masked"] is True
        assert payload["line_type"] == "voip"
        assert payload["dst"] == "18005550100"

    def test_masked_requires_voip(self):
        with pytest.raises(ValidationError):
            CdrRecord(
                src="15551234567", line_type="mobile", is_voip=False,
                fraud_score=0, recent_abuse=False, masked=True, campaign_id="7"
            )

    def test_masked_requires_campaign(self):
        with pytest.raises(ValidationError):
            CdrRecord(
                src="15557778888", line_type="voip", is_voip=True,
                fraud_score=0, recent_abuse=False, masked=True
            )

    def test_rejected_record_uses_wire_code(self):
        record = CdrRecord.rejected({}, voip_classification(), RejectReason.NO_VOIP_CAMPAIGN)

        assert record.status == "REJECTED"
        assert record.reason == "VOIP_CALL"
        assert record.masked is False
        assert record.rejection_summary() == {
            "src": "15557778888",
            "line_type": "voip",
            "is_voip": True,
            "fraud_score": 10,
            "recent_abuse": False,
            "status": "REJECTED",
            "reason": "VOIP_CALL",
        }

    def test_numeric_src_coerced_to_string(self):
        record = CdrRecord(
            src=15551234567, line_type="mobile", is_voip=False, fraud_score=0, recent_abuse=False
        )

        assert record.src == "15551234567"
