"""
Ingestion Configuration Model
Routing policy values injected into the decision engine
"""
from pydantic import BaseModel, Field


class IngestionConfig(BaseModel):
    """Policy knobs for the CDR ingestion pipeline"""
    fraud_score_threshold: int = Field(
        default=75,
        ge=0,
        le=100,
        description="VoIP calls scoring strictly above this are rejected"
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Total campaign directory attempts before giving up"
    )
    retry_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Fixed delay between campaign directory attempts"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound on one call's trip through the pipeline"
    )

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000.0
