"""
IPQualityScore Line Classifier
Phone validation lookup: line type, VOIP flag, fraud score, recent abuse
"""
import logging
from typing import Any, Dict, Optional

import httpx

from cdr_gateway.domain.errors import ClassificationError
from cdr_gateway.domain.interfaces.line_classifier import LineClassifier
from cdr_gateway.domain.models.classification import ClassificationResult, LineType
from cdr_gateway.utils.phone_utils import format_e164

logger = logging.getLogger(__name__)


# IPQualityScore line_type strings -> LineType
LINE_TYPE_MAP = {
    "wireless": LineType.MOBILE,
    "mobile": LineType.MOBILE,
    "prepaid": LineType.MOBILE,
    "landline": LineType.LANDLINE,
    "voip": LineType.VOIP,
}


class IPQualityScoreClassifier(LineClassifier):
    """
    Line classifier backed by the IPQualityScore phone API.

    ``GET {api_url}/{api_key}/{e164_number}?strictness=1``

    No retries: a failed lookup surfaces immediately as ClassificationError.
    """

    def __init__(
        self,
        api_key: Optional[str],
        http_client: httpx.AsyncClient,
        api_url: str = "https://www.ipqualityscore.com/api/json/phone",
        timeout: float = 10.0,
        strictness: int = 1
    ):
        self._api_key = api_key
        self._http = http_client
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._strictness = strictness

    @property
    def name(self) -> str:
        return "ipqualityscore"

    async def classify(self, source_number: str) -> ClassificationResult:
        formatted = format_e164(source_number)
        if not formatted:
            logger.warning(f"Invalid phone number provided: {source_number!r}")
            return ClassificationResult(
                source_number=source_number,
                line_type=LineType.INVALID,
                is_voip=False,
                fraud_score=0,
                recent_abuse=False,
            )

        if not self._api_key:
            raise ClassificationError("LINE_CLASSIFIER_API_KEY is not configured")

        url = f"{self._api_url}/{self._api_key}/{formatted}"
        logger.debug(f"Fetching line type for {formatted}")

        try:
            response = await self._http.get(
                url,
                params={"strictness": self._strictness},
                timeout=self._timeout
            )
        except httpx.HTTPError as e:
            raise ClassificationError(f"Line classifier request failed: {e}") from e

        if response.is_error:
            logger.error(f"IPQualityScore API error: {response.status_code} {response.reason_phrase}")
            raise ClassificationError(f"Line classifier responded with status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ClassificationError("Line classifier returned invalid JSON") from e

        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            logger.warning(f"IPQualityScore returned unsuccessful response for {formatted}: {message}")
            raise ClassificationError(f"Line classifier lookup unsuccessful: {message or 'unknown error'}")

        result = self.parse_response(source_number, data)
        if result.is_voip:
            logger.info(
                f"VOIP detected: number={formatted}, line_type={data.get('line_type')}, "
                f"fraud_score={result.fraud_score}, recent_abuse={result.recent_abuse}"
            )
        return result

    @staticmethod
    def parse_response(source_number: str, data: Dict[str, Any]) -> ClassificationResult:
        """Map an IPQualityScore payload onto a ClassificationResult"""
        raw_line_type = str(data.get("line_type") or "").strip().lower()
        line_type = LINE_TYPE_MAP.get(raw_line_type, LineType.UNKNOWN)

        try:
            fraud_score = int(float(data.get("fraud_score") or 0))
        except (TypeError, ValueError):
            fraud_score = 0

        return ClassificationResult(
            source_number=source_number,
            line_type=line_type,
            is_voip=bool(data.get("VOIP")) or line_type == LineType.VOIP,
            fraud_score=max(0, min(100, fraud_score)),
            recent_abuse=bool(data.get("recent_abuse")),
        )
