"""
Domain layer package.

This package contains the value objects, resource schemas, interfaces and
services that define what a classification is and how callers act on it.
"""

from hybrid_intent.domain.models.intent import ClassificationMethod, ClassificationResult, IntentType

__all__ = [
    "ClassificationMethod",
    "ClassificationResult",
    "IntentType",
]
