"""
Line Classifier Interface
Abstract base class for phone line-type / fraud lookup services
"""
from abc import ABC, abstractmethod
from cdr_gateway.domain.models.classification import ClassificationResult


class LineClassifier(ABC):
    """Abstract base class for line classifiers"""

    @abstractmethod
    async def classify(self, source_number: str) -> ClassificationResult:
        """
        Look up line type and fraud signals for a number

        Args:
            source_number: Caller-presented number, as received

        Returns:
            ClassificationResult for the number

        Raises:
            ClassificationError: On network failure, timeout or a bad response
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Classifier name"""
        pass
