"""
Offline tuning helpers for the hybrid classifier.

Nothing here influences production classification; it reports on the
corpus, single messages and labelled sample sets.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from hybrid_intent.domain.schemas.training import TrainingExample
from hybrid_intent.infrastructure.ai.intent.hybrid_classifier import HybridIntentClassifier
from hybrid_intent.infrastructure.data.corpus_loader import corpus_statistics
from hybrid_intent.utils.exceptions import ValidationException
from hybrid_intent.utils.logger import get_logger

DEFAULT_THRESHOLDS = (0.3, 0.4, 0.5, 0.6, 0.7, 0.8)


class DiagnosticService:
    """
    Reports raw and arbitrated classifications for tuning and debugging.
    """

    def __init__(self, classifier: HybridIntentClassifier, corpus: Optional[Sequence[TrainingExample]] = None):
        self.classifier = classifier
        self.corpus = list(corpus or [])
        self.logger = get_logger(__name__)

    def report(self, message: str) -> Dict[str, Any]:
        """Detailed classification of one message as a plain dict."""
        detailed = self.classifier.get_detailed_classification(message)
        self.logger.debug(
            f"Diagnostic: keyword={detailed.keyword.intent} "
            f"bayesian={detailed.bayesian.intent} final={detailed.final.intent}"
        )
        return detailed.to_dict()

    def corpus_report(self) -> Dict[str, Any]:
        """Category distribution of the corpus the service was given."""
        return corpus_statistics(self.corpus).to_dict()

    def evaluate(self, cases: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
        """
        Measure arbitrated accuracy on ``(message, expected_intent)`` pairs.

        Returns:
            Dictionary with ``correct``, ``total``, ``accuracy`` and the list
            of ``mismatches``
        """
        correct = 0
        total = 0
        mismatches: List[Dict[str, Any]] = []

        for message, expected in cases:
            total += 1
            result = self.classifier.classify(message)
            if result.intent == expected:
                correct += 1
            else:
                mismatches.append({
                    "message": message,
                    "expected": expected,
                    **result.to_dict()
                })

        accuracy = correct / total if total else 0.0
        self.logger.info(f"Evaluation: {correct}/{total} correct ({accuracy:.1%})")

        return {
            "correct": correct,
            "total": total,
            "accuracy": accuracy,
            "mismatches": mismatches
        }

    def threshold_analysis(
        self,
        messages: Iterable[str],
        thresholds: Sequence[float] = DEFAULT_THRESHOLDS
    ) -> Dict[float, int]:
        """
        Count how many messages reach each confidence threshold.

        Raises:
            ValidationException: If a threshold lies outside [0, 1]
        """
        invalid = [threshold for threshold in thresholds if not 0.0 <= threshold <= 1.0]
        if invalid:
            raise ValidationException(
                "Thresholds must be between 0 and 1",
                details={"thresholds": invalid}
            )

        confidences = [self.classifier.classify(message).confidence for message in messages]
        return {
            threshold: sum(1 for confidence in confidences if confidence >= threshold)
            for threshold in thresholds
        }
