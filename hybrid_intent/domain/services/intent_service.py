"""
Caller-side policy for acting on intent classifications.

The classifier only labels messages. Whether a label is worth an
automated knowledge response is decided here, from an externally
configured confidence threshold and allow-list of intents.
"""

from typing import Iterable, Optional

from hybrid_intent.config import Settings, get_settings
from hybrid_intent.domain.models.intent import ClassificationResult
from hybrid_intent.infrastructure.ai.intent.hybrid_classifier import HybridIntentClassifier
from hybrid_intent.utils.logger import get_logger, get_request_logger


class IntentService:
    """
    Service wrapping the hybrid classifier with the response gate.
    """

    def __init__(
        self,
        classifier: HybridIntentClassifier,
        confidence_threshold: Optional[float] = None,
        response_intents: Optional[Iterable[str]] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize the intent service with dependencies.

        Args:
            classifier: Ready hybrid classifier
            confidence_threshold: Minimum confidence (exclusive) for a response;
                defaults to ``RESPONSE_CONFIDENCE_THRESHOLD``
            response_intents: Intents considered response-worthy;
                defaults to ``RESPONSE_INTENTS``
            settings: Settings to read defaults from
        """
        settings = settings or get_settings()
        self.classifier = classifier
        self.confidence_threshold = (
            settings.RESPONSE_CONFIDENCE_THRESHOLD
            if confidence_threshold is None else confidence_threshold
        )
        self.response_intents = frozenset(
            settings.RESPONSE_INTENTS if response_intents is None else response_intents
        )
        self.logger = get_logger(__name__)

    def classify(self, message: str, correlation_id: Optional[str] = None) -> ClassificationResult:
        """
        Classify a message, logging the outcome under a correlation id.

        Args:
            message: Raw message text
            correlation_id: Optional id tying the log line to the chat message

        Returns:
            The classifier's result, unchanged
        """
        log = get_request_logger(__name__, correlation_id)
        result = self.classifier.classify(message)
        log.debug(
            f"Classified message as {result.intent} "
            f"({result.confidence:.3f} via {result.method.value})",
            extra={"intent": result.intent}
        )
        return result

    def is_response_worthy(self, result: ClassificationResult) -> bool:
        """
        Whether a classification clears the response gate.

        Returns:
            True if the intent is allow-listed and its confidence exceeds
            the threshold, False otherwise
        """
        return (
            result.intent in self.response_intents
            and result.confidence > self.confidence_threshold
        )

    def should_respond(self, message: str, correlation_id: Optional[str] = None) -> bool:
        """
        Classify a message and apply the response gate in one step.
        """
        result = self.classify(message, correlation_id)
        respond = self.is_response_worthy(result)
        if respond:
            self.logger.info(
                f"Message qualifies for a response: {result.intent} ({result.confidence:.2f})"
            )
        return respond
