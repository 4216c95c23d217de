from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from ..schemas.training import TrainingExample


class TextClassifierInterface(ABC):
    """
    Abstract base class defining the capability a statistical text
    classifier must offer to the arbitration layer.
    Following the Strategy pattern so any multinomial/naive-Bayes
    implementation can be swapped in.
    """

    @abstractmethod
    def train(self, corpus: Sequence[TrainingExample]) -> None:
        """
        Fits the model on the full labelled corpus.

        Args:
            corpus: Labelled examples; every example is used once

        Raises:
            CorpusLoadError: If the corpus is empty or unusable
        """
        pass

    @abstractmethod
    def classify(self, text: str) -> List[Tuple[str, float]]:
        """
        Ranks every known category for the given text.

        Args:
            text: The raw message text

        Returns:
            ``(category, probability)`` pairs, highest probability first.
            An empty list means the model has no opinion on the text.
        """
        pass

    @abstractmethod
    def categories(self) -> List[str]:
        """
        Returns the categories the model was trained on.
        """
        pass
