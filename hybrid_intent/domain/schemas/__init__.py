"""
Schemas package for validating the classifier's on-disk resources.
"""

from hybrid_intent.domain.schemas.training import (
    KeywordRuleSet,
    KeywordRuleTable,
    TrainingExample,
)

__all__ = [
    "KeywordRuleSet",
    "KeywordRuleTable",
    "TrainingExample",
]
