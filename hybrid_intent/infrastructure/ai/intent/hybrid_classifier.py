"""
Hybrid keyword + naive-Bayes intent classifier.

The keyword engine is consulted first and trusted at high confidence
tiers; the statistical model decides everything else, with the keyword
result kept as a last resort when the model has nothing useful to say.
Exactly one sub-classifier's output is returned; scores are never blended.
"""

from typing import Optional
import os

from hybrid_intent.config import Settings, get_settings
from hybrid_intent.domain.models.intent import (
    ClassificationMethod,
    ClassificationResult,
    DetailedClassification,
    IntentType,
)
from hybrid_intent.infrastructure.ai.intent.bayes_classifier import NaiveBayesTextClassifier
from hybrid_intent.infrastructure.ai.intent.keyword_classifier import KeywordRuleEngine
from hybrid_intent.infrastructure.data.corpus_loader import load_keyword_rules, load_training_corpus
from hybrid_intent.utils.logger import get_logger

# Keyword results above this are returned without consulting the model
KEYWORD_TRUST_THRESHOLD = 0.8
# Current-event phrasing is kept from the keyword engine above this
REAL_TIME_TRUST_THRESHOLD = 0.6
# Below this the model is considered to have no opinion
BAYES_UNCERTAIN_THRESHOLD = 0.1
# Minimum keyword confidence to stand in for an uncertain model
KEYWORD_FALLBACK_THRESHOLD = 0.4


class HybridIntentClassifier:
    """
    Arbitrates between a keyword rule engine and a statistical classifier.
    """

    def __init__(
        self,
        keyword_engine: KeywordRuleEngine,
        statistical_classifier: NaiveBayesTextClassifier,
        snippet_length: int = 100,
        top_n: int = 5
    ):
        """
        Initialize the classifier from two ready sub-classifiers.

        Args:
            keyword_engine: Ordered keyword rule engine
            statistical_classifier: Trained naive-Bayes classifier
            snippet_length: Message length kept in diagnostic output
            top_n: Number of ranked model candidates in diagnostic output
        """
        self.logger = get_logger(__name__)
        self.keyword_engine = keyword_engine
        self.statistical_classifier = statistical_classifier
        self.snippet_length = snippet_length
        self.top_n = top_n

    def classify(self, message: str) -> ClassificationResult:
        """
        Classify a single message.

        Args:
            message: Raw message text

        Returns:
            The authoritative classification. Never raises; non-string
            input yields ``unknown`` with method ``fallback``.
        """
        if not isinstance(message, str):
            self.logger.warning(f"Cannot classify non-string input of type {type(message).__name__}")
            return ClassificationResult.unknown(ClassificationMethod.FALLBACK)

        keyword_result = self.keyword_engine.classify(message)
        if keyword_result.confidence > KEYWORD_TRUST_THRESHOLD:
            return keyword_result

        if (
            keyword_result.intent == IntentType.REAL_TIME_KNOWLEDGE.value
            and keyword_result.confidence > REAL_TIME_TRUST_THRESHOLD
        ):
            return keyword_result

        bayesian_result = self.statistical_classifier.classify_text(message)

        if (
            bayesian_result.confidence < BAYES_UNCERTAIN_THRESHOLD
            and keyword_result.confidence > KEYWORD_FALLBACK_THRESHOLD
        ):
            self.logger.debug(
                f"Model uncertain ({bayesian_result.confidence:.3f}); "
                f"keeping keyword result {keyword_result.intent}"
            )
            return ClassificationResult(
                keyword_result.intent,
                keyword_result.confidence,
                ClassificationMethod.KEYWORD
            )

        return bayesian_result

    def get_detailed_classification(self, message: str) -> DetailedClassification:
        """
        Expose both raw results, the arbitrated one and the model's top
        candidates for a message. Has no effect on classification.
        """
        text = message if isinstance(message, str) else ""
        return DetailedClassification(
            message=text[:self.snippet_length],
            keyword=self.keyword_engine.classify(text),
            bayesian=self.statistical_classifier.classify_text(text),
            final=self.classify(message),
            bayesian_top5=self.statistical_classifier.top_classifications(text, self.top_n)
        )


def create_hybrid_classifier(settings: Optional[Settings] = None) -> HybridIntentClassifier:
    """
    Build a ready classifier from configured resources.

    Loads the rule tables and the training corpus and trains the model
    before returning. When ``MODEL_PATH`` points at a saved model it is
    restored instead of retraining; when it points nowhere yet, the freshly
    trained model is saved there.

    Raises:
        CorpusLoadError: If the training corpus cannot be loaded
        RuleConfigurationError: If the keyword rules are invalid
        ModelPersistenceError: If a saved model exists but cannot be restored
    """
    settings = settings or get_settings()
    logger = get_logger(__name__)

    keyword_engine = KeywordRuleEngine(load_keyword_rules(settings.RULES_PATH))

    if settings.MODEL_PATH and os.path.exists(settings.MODEL_PATH):
        statistical_classifier = NaiveBayesTextClassifier.load(settings.MODEL_PATH)
    else:
        corpus = load_training_corpus(settings.CORPUS_PATH)
        statistical_classifier = NaiveBayesTextClassifier(corpus, alpha=settings.BAYES_ALPHA)
        if settings.MODEL_PATH:
            statistical_classifier.save(settings.MODEL_PATH)

    logger.info(
        f"Hybrid classifier ready: categories={statistical_classifier.categories()}"
    )
    return HybridIntentClassifier(
        keyword_engine,
        statistical_classifier,
        snippet_length=settings.DIAGNOSTIC_SNIPPET_LENGTH,
        top_n=settings.DIAGNOSTIC_TOP_N
    )
