from typing import Any, Dict, List, Optional, Sequence, Tuple
import os
import re
import string

import joblib
import numpy as np
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.metrics import accuracy_score, classification_report
from sklearn.naive_bayes import MultinomialNB

from hybrid_intent.domain.interfaces.model_interface import TextClassifierInterface
from hybrid_intent.domain.models.intent import ClassificationMethod, ClassificationResult
from hybrid_intent.domain.schemas.training import TrainingExample
from hybrid_intent.utils.exceptions import CorpusLoadError, ModelPersistenceError, ValidationException
from hybrid_intent.utils.logger import get_logger

_VOWELS = re.compile(r"[aeiou]")
_HAS_LETTER = re.compile(r"[a-z]")
_PUNCTUATION = string.punctuation + "“”‘’…"


def whitespace_tokenize(text: str) -> List[str]:
    """Split on whitespace and trim punctuation hugging each token."""
    tokens = []
    for token in text.split():
        token = token.strip(_PUNCTUATION)
        if token:
            tokens.append(token)
    return tokens


def is_gibberish(message: str) -> bool:
    """
    Whether a message looks like keyboard noise.

    True when every whitespace token is shorter than three characters,
    has no vowel, or has no letter at all, and there are fewer than four
    tokens.
    """
    words = message.lower().strip().split()
    only_noise = all(
        len(word) < 3 or not _VOWELS.search(word) or not _HAS_LETTER.search(word)
        for word in words
    )
    return only_noise and len(words) < 4


class NaiveBayesTextClassifier(TextClassifierInterface):
    """
    Multinomial naive-Bayes classifier over a bag of whitespace tokens.
    Trained synchronously at construction from the full corpus.
    """

    def __init__(self, corpus: Optional[Sequence[TrainingExample]] = None, alpha: float = 0.1):
        """
        Initialize and train the classifier.

        Args:
            corpus: Labelled training examples. ``None`` is only used by ``load``.
            alpha: Additive smoothing for ``MultinomialNB``
        """
        self.logger = get_logger(__name__)
        self.alpha = alpha
        self.vectorizer: Optional[CountVectorizer] = None
        self.model: Optional[MultinomialNB] = None
        self.labels: List[str] = []

        if corpus is not None:
            self.train(corpus)

    def train(self, corpus: Sequence[TrainingExample]) -> None:
        if not corpus:
            raise CorpusLoadError("<memory>", "Cannot train on an empty corpus")

        texts = [example.text for example in corpus]
        labels = [example.category for example in corpus]

        self.vectorizer = CountVectorizer(
            tokenizer=whitespace_tokenize,
            token_pattern=None,
            lowercase=True
        )
        features = self.vectorizer.fit_transform(texts)

        self.model = MultinomialNB(alpha=self.alpha)
        self.model.fit(features, labels)
        self.labels = [str(label) for label in self.model.classes_]

        self.logger.info(
            f"Trained naive-Bayes model on {len(texts)} examples, "
            f"{len(self.labels)} categories, "
            f"{len(self.vectorizer.vocabulary_)} tokens"
        )

    def categories(self) -> List[str]:
        return list(self.labels)

    def classify(self, text: str) -> List[Tuple[str, float]]:
        """
        Rank all categories for the text.

        Returns an empty list when none of the text's tokens were seen
        during training, since the model would only echo class priors.
        """
        if not text or self.model is None or self.vectorizer is None:
            return []

        features = self.vectorizer.transform([text])
        if features.nnz == 0:
            return []

        probabilities = np.clip(self.model.predict_proba(features)[0], 0.0, 1.0)
        all_intents = {label: float(prob) for label, prob in zip(self.labels, probabilities)}
        return sorted(all_intents.items(), key=lambda x: x[1], reverse=True)

    def top_classifications(self, text: str, n: int = 5) -> List[Tuple[str, float]]:
        return self.classify(text)[:n]

    def classify_text(self, message: str) -> ClassificationResult:
        """
        Classify a message into its single most likely category.

        Never raises for malformed input; noise, empty text and text the
        model knows nothing about all resolve to ``unknown`` with zero
        confidence.
        """
        if is_gibberish(message):
            self.logger.debug(f"Gibberish filter matched: {message[:50]}")
            return ClassificationResult.unknown(ClassificationMethod.BAYESIAN)

        ranked = self.classify(message)
        if not ranked:
            return ClassificationResult.unknown(ClassificationMethod.BAYESIAN)

        label, probability = ranked[0]
        return ClassificationResult(label, probability, ClassificationMethod.BAYESIAN)

    def evaluate(self, texts: List[str], labels: List[str]) -> Dict[str, Any]:
        """
        Evaluate model performance on a labelled dataset.

        Args:
            texts: List of test text samples
            labels: List of corresponding intent labels

        Returns:
            Dictionary containing evaluation metrics
        """
        if len(texts) != len(labels):
            raise ValidationException(
                "Texts and labels must have the same length",
                details={"texts": len(texts), "labels": len(labels)}
            )

        predictions = [self.classify_text(text).intent for text in texts]
        accuracy = accuracy_score(labels, predictions)
        report = classification_report(labels, predictions, output_dict=True, zero_division=0)

        class_metrics = {}
        for label in set(labels):
            if label in report:
                class_metrics[label] = {
                    "precision": report[label]["precision"],
                    "recall": report[label]["recall"],
                    "f1-score": report[label]["f1-score"],
                    "support": report[label]["support"]
                }

        return {
            "accuracy": float(accuracy),
            "class_metrics": class_metrics,
            "num_samples": len(texts),
            "macro_avg": report["macro avg"],
            "weighted_avg": report["weighted avg"]
        }

    def save(self, path: str) -> None:
        """Persist the fitted vectorizer and model with joblib."""
        if self.model is None or self.vectorizer is None:
            raise ModelPersistenceError(path, "Cannot save an untrained model")

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        model_data = {
            "model": self.model,
            "vectorizer": self.vectorizer,
            "labels": self.labels,
            "alpha": self.alpha
        }
        joblib.dump(model_data, path)
        self.logger.info(f"Saved naive-Bayes model to {path}")

    @classmethod
    def load(cls, path: str) -> "NaiveBayesTextClassifier":
        """
        Restore a classifier saved with ``save``.

        Raises:
            ModelPersistenceError: If the file is missing or not a saved model
        """
        if not os.path.exists(path):
            raise ModelPersistenceError(path, f"Model file {path} does not exist")

        try:
            model_data = joblib.load(path)
        except Exception as e:
            raise ModelPersistenceError(path, f"Error loading model: {str(e)}") from e

        if not isinstance(model_data, dict) or not {"model", "vectorizer"} <= set(model_data):
            raise ModelPersistenceError(path, "File does not contain a saved classifier")

        classifier = cls(alpha=model_data.get("alpha", 0.1))
        classifier.model = model_data["model"]
        classifier.vectorizer = model_data["vectorizer"]
        classifier.labels = list(model_data.get("labels", classifier.model.classes_))
        classifier.logger.info(f"Loaded naive-Bayes model from {path}")
        return classifier
