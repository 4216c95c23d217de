"""
Pytest configuration and fixtures for hybrid_intent tests.

The trained classifier is built once per session from the bundled corpus
and rule tables; component tests construct their own small instances.
"""

import json
from typing import List

import pytest

from hybrid_intent.config import Settings
from hybrid_intent.domain.models.intent import ClassificationMethod, ClassificationResult
from hybrid_intent.domain.schemas.training import TrainingExample
from hybrid_intent.infrastructure.ai.intent import (
    HybridIntentClassifier,
    KeywordRuleEngine,
    NaiveBayesTextClassifier,
    create_hybrid_classifier,
)
from hybrid_intent.infrastructure.data.corpus_loader import load_keyword_rules, load_training_corpus

# =========================================================================
# Bundled resources
# =========================================================================


@pytest.fixture(scope="session")
def settings() -> Settings:
    """Default settings pointing at the bundled data files."""
    return Settings()


@pytest.fixture(scope="session")
def corpus(settings) -> List[TrainingExample]:
    return load_training_corpus(settings.CORPUS_PATH)


@pytest.fixture(scope="session")
def keyword_engine(settings) -> KeywordRuleEngine:
    return KeywordRuleEngine(load_keyword_rules(settings.RULES_PATH))


@pytest.fixture(scope="session")
def bayes_classifier(corpus) -> NaiveBayesTextClassifier:
    return NaiveBayesTextClassifier(corpus, alpha=0.1)


@pytest.fixture(scope="session")
def hybrid_classifier(settings) -> HybridIntentClassifier:
    """Fully trained classifier, shared across the session."""
    return create_hybrid_classifier(settings)


# =========================================================================
# Small fixtures
# =========================================================================


@pytest.fixture
def correlation_id() -> str:
    return "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def tiny_corpus() -> List[TrainingExample]:
    """A two-category corpus with disjoint vocabularies."""
    return [
        TrainingExample(category="greeting", text="hello there friend"),
        TrainingExample(category="greeting", text="hello good morning"),
        TrainingExample(category="greeting", text="good evening friend"),
        TrainingExample(category="weather", text="rain forecast tomorrow"),
        TrainingExample(category="weather", text="sunny forecast today"),
        TrainingExample(category="weather", text="heavy rain tonight"),
    ]


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""
    def _write(name, payload) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write


class StubKeywordEngine:
    """Keyword engine returning a fixed result."""

    def __init__(self, intent: str, confidence: float):
        self.result = ClassificationResult(intent, confidence, ClassificationMethod.KEYWORD)
        self.calls = 0

    def classify(self, message: str) -> ClassificationResult:
        self.calls += 1
        return self.result


class StubStatisticalClassifier:
    """Statistical classifier returning a fixed result."""

    def __init__(self, intent: str, confidence: float):
        self.result = ClassificationResult(intent, confidence, ClassificationMethod.BAYESIAN)
        self.calls = 0

    def classify_text(self, message: str) -> ClassificationResult:
        self.calls += 1
        return self.result

    def top_classifications(self, message: str, n: int = 5):
        return [(self.result.intent, self.result.confidence)][:n]


@pytest.fixture
def stub_hybrid():
    """Factory for a hybrid classifier over fixed sub-classifier results."""
    def _build(keyword, bayesian) -> HybridIntentClassifier:
        return HybridIntentClassifier(
            StubKeywordEngine(*keyword),
            StubStatisticalClassifier(*bayesian)
        )
    return _build
