"""
Domain models for intent classification.
"""

from hybrid_intent.domain.models.intent import (
    ClassificationMethod,
    ClassificationResult,
    CorpusStatistics,
    DetailedClassification,
    IntentType,
    Rule,
)

__all__ = [
    "ClassificationMethod",
    "ClassificationResult",
    "CorpusStatistics",
    "DetailedClassification",
    "IntentType",
    "Rule",
]
