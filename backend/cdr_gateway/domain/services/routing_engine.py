"""
Routing Decision Engine
Decides accept / accept-masked / reject for an inbound call before its CDR is written

State machine:

    START -> CLASSIFIED -> NON_VOIP_ACCEPT
                        -> VOIP_FRAUD_CHECK -> VOIP_REJECT_HIGH_FRAUD
                                            -> VOIP_CAMPAIGN_LOOKUP -> VOIP_REJECT_NO_CAMPAIGN
                                                                    -> VOIP_REJECT_HANDLING_ERROR
                                                                    -> VOIP_MASK_AND_ACCEPT
    every terminal state -> DONE (record persisted)

Failure containment:
- classification and persistence failures are fatal (FatalIngestionError)
- campaign lookup failures become a VOIP_HANDLING_ERROR rejection
- masking failures leave the call accepted with its original number
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from cdr_gateway.domain.errors import (
    ClassificationError,
    DomainRejection,
    FatalIngestionError,
    IngestionTimeoutError,
    PersistenceError,
)
from cdr_gateway.domain.interfaces.campaign_directory import CampaignDirectory
from cdr_gateway.domain.interfaces.cdr_store import CdrStore
from cdr_gateway.domain.interfaces.line_classifier import LineClassifier
from cdr_gateway.domain.models.campaign import Campaign, first_voip_campaign
from cdr_gateway.domain.models.cdr import CdrRecord
from cdr_gateway.domain.models.classification import ClassificationResult
from cdr_gateway.domain.models.disposition import (
    REJECT_STATES,
    Accepted,
    MaskingAssignment,
    RejectReason,
    Rejected,
    RoutingState,
)
from cdr_gateway.domain.models.ingestion_config import IngestionConfig
from cdr_gateway.domain.models.outcome import IngestionOutcome
from cdr_gateway.domain.services import fraud_gate
from cdr_gateway.domain.services.masking_resolver import NumberMaskingResolver

logger = logging.getLogger(__name__)


class _StateTrail:
    """Per-call record of visited routing states"""

    def __init__(self, src: str):
        self.src = src
        self.path: List[RoutingState] = [RoutingState.START]

    @property
    def current(self) -> RoutingState:
        return self.path[-1]

    def advance(self, state: RoutingState) -> None:
        logger.debug(f"[{self.src}] {self.current.value} -> {state.value}")
        self.path.append(state)


class RoutingDecisionEngine:
    """
    Runs one inbound call through classification, fraud gate, campaign
    lookup and masking, then persists the enriched CDR.

    The engine keeps no state between calls; collaborators are injected so
    each can be replaced in tests.
    """

    def __init__(
        self,
        classifier: LineClassifier,
        campaign_directory: CampaignDirectory,
        masking_resolver: NumberMaskingResolver,
        cdr_store: CdrStore,
        config: Optional[IngestionConfig] = None
    ):
        self._classifier = classifier
        self._campaigns = campaign_directory
        self._masking = masking_resolver
        self._cdr_store = cdr_store
        self.config = config or IngestionConfig()

    async def process(self, call: Dict[str, Any]) -> IngestionOutcome:
        """
        Decide and persist one inbound call.

        Args:
            call: Inbound call fields; ``src`` is required, everything else
                is passed through to the CDR

        Returns:
            IngestionOutcome with the disposition and persisted record

        Raises:
            FatalIngestionError: Classification, persistence or timeout failure
            asyncio.CancelledError: The request was cancelled mid-pipeline
        """
        call_fields = dict(call)
        src = call_fields.pop("src", None)
        if not src:
            raise ValueError("src is required")

        try:
            return await asyncio.wait_for(
                self._run(str(src), call_fields),
                timeout=self.config.request_timeout_seconds
            )
        except asyncio.TimeoutError as e:
            logger.error(
                f"CDR ingestion for {src} exceeded {self.config.request_timeout_seconds}s budget"
            )
            raise IngestionTimeoutError(
                f"Ingestion timed out after {self.config.request_timeout_seconds}s"
            ) from e

    async def _run(self, src: str, call_fields: Dict[str, Any]) -> IngestionOutcome:
        trail = _StateTrail(src)
        try:
            classification = await self._classify(src)
            trail.advance(RoutingState.CLASSIFIED)

            masking: Optional[MaskingAssignment] = None
            if not classification.is_voip:
                trail.advance(RoutingState.NON_VOIP_ACCEPT)
                disposition = Accepted(masked=False)
                record = CdrRecord.accepted(call_fields, classification)
            else:
                logger.info(
                    f"VOIP call detected: number={src}, line_type={classification.line_type.value}, "
                    f"fraud_score={classification.fraud_score}, recent_abuse={classification.recent_abuse}"
                )
                trail.advance(RoutingState.VOIP_FRAUD_CHECK)
                try:
                    campaign, masking = await self._route_voip(classification, trail)
                except DomainRejection as rejection:
                    trail.advance(REJECT_STATES[rejection.reason])
                    logger.info(f"VOIP call {src} rejected: {rejection.reason.value} ({rejection})")
                    disposition = Rejected(reason=rejection.reason)
                    record = CdrRecord.rejected(call_fields, classification, rejection.reason)
                else:
                    trail.advance(RoutingState.VOIP_MASK_AND_ACCEPT)
                    disposition = Accepted(masked=True)
                    record = CdrRecord.masked_voip(call_fields, classification, masking, campaign.name)

            terminal_state = trail.current
            persisted = await self._persist(record)
            trail.advance(RoutingState.DONE)

        except asyncio.CancelledError:
            logger.warning(f"CDR ingestion for {src} cancelled during {trail.current.value}")
            raise

        logger.info(f"CDR for {src} ingested: {terminal_state.value}")
        return IngestionOutcome(
            disposition=disposition,
            terminal_state=terminal_state,
            path=trail.path,
            classification=classification,
            record=record,
            persisted=persisted,
            masking=masking,
        )

    async def _classify(self, src: str) -> ClassificationResult:
        """START -> CLASSIFIED; any failure is fatal"""
        try:
            return await self._classifier.classify(src)
        except ClassificationError:
            raise
        except Exception as e:
            logger.error(f"Line classification failed for {src}: {e}")
            raise ClassificationError(f"Line classification failed: {e}") from e

    async def _route_voip(
        self,
        classification: ClassificationResult,
        trail: _StateTrail
    ) -> Tuple[Campaign, MaskingAssignment]:
        """
        VOIP_FRAUD_CHECK through VOIP_MASK_AND_ACCEPT.

        Raises:
            DomainRejection: For every VoIP rejection, including campaign
                directory failures
        """
        threshold = self.config.fraud_score_threshold
        if not fraud_gate.passes(classification.fraud_score, threshold):
            raise DomainRejection(
                RejectReason.HIGH_FRAUD_SCORE,
                f"fraud score {classification.fraud_score} exceeds threshold {threshold}"
            )

        trail.advance(RoutingState.VOIP_CAMPAIGN_LOOKUP)
        try:
            campaigns = await self._campaigns.list_campaigns()
        except Exception as e:
            logger.error(f"Campaign lookup failed for VOIP call {classification.source_number}: {e}")
            raise DomainRejection(RejectReason.VOIP_HANDLING_ERROR, str(e)) from e

        campaign = first_voip_campaign(campaigns)
        if campaign is None:
            raise DomainRejection(
                RejectReason.NO_VOIP_CAMPAIGN,
                f"none of {len(campaigns)} campaigns accepts VOIP"
            )

        masked_number = await self._resolve_mask(classification.source_number)
        assignment = MaskingAssignment(
            original_number=classification.source_number,
            masked_number=masked_number,
            campaign_id=campaign.id,
        )
        logger.info(
            f"VOIP call {classification.source_number} routed to campaign {campaign.id} "
            f"({campaign.name}), presented as {assignment.presented_number}"
        )
        return campaign, assignment

    async def _resolve_mask(self, src: str) -> Optional[str]:
        """Masking never blocks an accepted call"""
        try:
            return await self._masking.resolve_mask(src)
        except Exception as e:
            logger.warning(f"Masking resolver error for {src}, keeping original number: {e}")
            return None

    async def _persist(self, record: CdrRecord) -> Dict[str, Any]:
        """Write the record; any failure is fatal whatever the disposition"""
        try:
            return await self._cdr_store.persist(record)
        except FatalIngestionError:
            raise
        except Exception as e:
            logger.error(f"CDR persistence failed for {record.src}: {e}")
            raise PersistenceError(f"CDR persistence failed: {e}") from e
