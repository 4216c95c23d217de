"""
Unit tests for the naive-Bayes text classifier.

Tests cover:
- Tokenisation and the gibberish pre-filter
- Ranking and the no-opinion cases
- Evaluation metrics
- joblib persistence
"""

import joblib
import pytest

from hybrid_intent.domain.interfaces.model_interface import TextClassifierInterface
from hybrid_intent.domain.models.intent import ClassificationMethod
from hybrid_intent.infrastructure.ai.intent.bayes_classifier import (
    NaiveBayesTextClassifier,
    is_gibberish,
    whitespace_tokenize,
)
from hybrid_intent.utils.exceptions import (
    CorpusLoadError,
    ModelPersistenceError,
    ValidationException,
)


@pytest.mark.unit
class TestTokenisation:

    def test_strips_surrounding_punctuation(self):
        assert whitespace_tokenize("Hello, world! (test) ...") == ["Hello", "world", "test"]

    def test_keeps_inner_punctuation(self):
        assert whitespace_tokenize("what's node.js?") == ["what's", "node.js"]

    @pytest.mark.parametrize("message", ["", "hi", "xyz", "123", "a b c", "brb ttyl", "?? !!"])
    def test_gibberish(self, message):
        assert is_gibberish(message)

    @pytest.mark.parametrize("message", [
        "hello",
        "asdf qwerty",
        "a b c d",
        "what is this",
    ])
    def test_not_gibberish(self, message):
        assert not is_gibberish(message)


@pytest.mark.unit
class TestNaiveBayesTextClassifier:

    def test_implements_interface(self, tiny_corpus):
        assert isinstance(NaiveBayesTextClassifier(tiny_corpus), TextClassifierInterface)

    def test_categories(self, tiny_corpus):
        assert NaiveBayesTextClassifier(tiny_corpus).categories() == ["greeting", "weather"]

    def test_empty_corpus_rejected(self):
        with pytest.raises(CorpusLoadError):
            NaiveBayesTextClassifier([])

    def test_ranking_is_sorted_distribution(self, tiny_corpus):
        ranked = NaiveBayesTextClassifier(tiny_corpus).classify("rain forecast")

        assert [label for label, _ in ranked] == ["weather", "greeting"]
        probabilities = [probability for _, probability in ranked]
        assert probabilities == sorted(probabilities, reverse=True)
        assert sum(probabilities) == pytest.approx(1.0)
        assert all(0.0 <= probability <= 1.0 for probability in probabilities)

    def test_case_and_punctuation_insensitive(self, tiny_corpus):
        classifier = NaiveBayesTextClassifier(tiny_corpus)
        assert classifier.classify("Hello, FRIEND!") == classifier.classify("hello friend")

    def test_unknown_tokens_have_no_opinion(self, tiny_corpus):
        classifier = NaiveBayesTextClassifier(tiny_corpus)
        assert classifier.classify("zebra quokka") == []

        result = classifier.classify_text("zebra quokka")
        assert result.is_unknown()
        assert result.confidence == 0.0
        assert result.method == ClassificationMethod.BAYESIAN

    def test_untrained_model_has_no_opinion(self):
        assert NaiveBayesTextClassifier().classify("hello friend") == []

    def test_classify_text_picks_top_category(self, tiny_corpus):
        result = NaiveBayesTextClassifier(tiny_corpus).classify_text("hello good friend")

        assert result.intent == "greeting"
        assert result.confidence > 0.5
        assert result.method == ClassificationMethod.BAYESIAN

    def test_gibberish_is_unknown(self, tiny_corpus):
        result = NaiveBayesTextClassifier(tiny_corpus).classify_text("xyz")
        assert result.is_unknown()
        assert result.confidence == 0.0

    def test_top_classifications_limit(self, tiny_corpus):
        classifier = NaiveBayesTextClassifier(tiny_corpus)
        assert len(classifier.top_classifications("rain", 1)) == 1
        assert len(classifier.top_classifications("rain")) == 2

    def test_evaluate(self, tiny_corpus):
        classifier = NaiveBayesTextClassifier(tiny_corpus)
        metrics = classifier.evaluate(
            ["hello friend", "rain forecast", "zebra"],
            ["greeting", "weather", "weather"]
        )

        assert metrics["num_samples"] == 3
        assert metrics["accuracy"] == pytest.approx(2 / 3)
        assert metrics["class_metrics"]["greeting"]["recall"] == 1.0
        assert metrics["class_metrics"]["weather"]["recall"] == 0.5

    def test_evaluate_length_mismatch(self, tiny_corpus):
        with pytest.raises(ValidationException):
            NaiveBayesTextClassifier(tiny_corpus).evaluate(["hello"], [])


@pytest.mark.unit
class TestPersistence:

    def test_save_and_load(self, tiny_corpus, tmp_path):
        classifier = NaiveBayesTextClassifier(tiny_corpus, alpha=0.5)
        path = str(tmp_path / "models" / "bayes.joblib")
        classifier.save(path)

        restored = NaiveBayesTextClassifier.load(path)

        assert restored.alpha == 0.5
        assert restored.categories() == classifier.categories()
        assert restored.classify("sunny today") == classifier.classify("sunny today")

    def test_save_untrained(self, tmp_path):
        with pytest.raises(ModelPersistenceError):
            NaiveBayesTextClassifier().save(str(tmp_path / "bayes.joblib"))

    def test_load_missing(self, tmp_path):
        with pytest.raises(ModelPersistenceError):
            NaiveBayesTextClassifier.load(str(tmp_path / "missing.joblib"))

    def test_load_foreign_file(self, tmp_path):
        path = str(tmp_path / "other.joblib")
        joblib.dump([1, 2, 3], path)
        with pytest.raises(ModelPersistenceError, match="saved classifier"):
            NaiveBayesTextClassifier.load(path)


@pytest.mark.integration
class TestBundledModel:

    def test_hello_is_small_talk(self, bayes_classifier):
        result = bayes_classifier.classify_text("hello")
        assert result.intent == "small-talk"
        assert result.confidence > 0.7

    def test_top_five(self, bayes_classifier):
        top = bayes_classifier.top_classifications("how do I center a div in css", 5)
        assert len(top) == 5
        assert top[0][0] == "technical-question"
