"""Domain models"""

# Classification
from .classification import (
    LineType,
    ClassificationResult,
)

# Backend snapshots
from .campaign import (
    Campaign,
    first_voip_campaign,
)
from .phone_number import (
    PhoneNumber,
)

# Routing
from .disposition import (
    RoutingState,
    RejectReason,
    Accepted,
    Rejected,
    Disposition,
    MaskingAssignment,
)
from .cdr import (
    CdrRecord,
    REJECTED_STATUS,
)
from .outcome import (
    IngestionOutcome,
)
from .ingestion_config import (
    IngestionConfig,
)

__all__ = [
    # Classification
    "LineType",
    "ClassificationResult",
    # Backend snapshots
    "Campaign",
    "first_voip_campaign",
    "PhoneNumber",
    # Routing
    "RoutingState",
    "RejectReason",
    "Accepted",
    "Rejected",
    "Disposition",
    "MaskingAssignment",
    "CdrRecord",
    "REJECTED_STATUS",
    "IngestionOutcome",
    "IngestionConfig",
]
