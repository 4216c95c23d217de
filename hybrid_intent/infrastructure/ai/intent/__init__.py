"""
Intent classification components.

This package provides:
- A keyword rule engine with ordered, first-match-wins precedence
- A multinomial naive-Bayes classifier trained on the bundled corpus
- The hybrid classifier arbitrating between the two
"""

from hybrid_intent.infrastructure.ai.intent.bayes_classifier import NaiveBayesTextClassifier
from hybrid_intent.infrastructure.ai.intent.hybrid_classifier import (
    HybridIntentClassifier,
    create_hybrid_classifier,
)
from hybrid_intent.infrastructure.ai.intent.keyword_classifier import KeywordRuleEngine

__all__ = [
    "HybridIntentClassifier",
    "KeywordRuleEngine",
    "NaiveBayesTextClassifier",
    "create_hybrid_classifier",
]
