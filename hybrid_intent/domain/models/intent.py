from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Tuple
from enum import Enum


class IntentType(Enum):
    """Enumeration of the intents the keyword engine names explicitly"""
    GENERAL_KNOWLEDGE = "general-knowledge"
    TECHNICAL_QUESTION = "technical-question"
    COMMAND = "command"
    SMALL_TALK = "small-talk"
    REAL_TIME_KNOWLEDGE = "real-time-knowledge"
    FEEDBACK = "feedback"
    BUSINESS_DISCUSSION = "business-discussion"
    CONTEXTUAL_REFERENCE = "contextual-reference"
    UNKNOWN = "unknown"


class ClassificationMethod(Enum):
    """Which sub-classifier produced a result"""
    KEYWORD = "keyword"
    BAYESIAN = "bayesian"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ClassificationResult:
    """
    Immutable value object for one classification of one message.

    ``intent`` is kept as a plain string because the training corpus may
    carry categories beyond ``IntentType``.
    """
    intent: str
    confidence: float
    method: ClassificationMethod

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence out of range: {self.confidence}")

    @classmethod
    def unknown(cls, method: ClassificationMethod) -> "ClassificationResult":
        return cls(IntentType.UNKNOWN.value, 0.0, method)

    def is_unknown(self) -> bool:
        return self.intent == IntentType.UNKNOWN.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intent": self.intent,
            "confidence": self.confidence,
            "method": self.method.value,
        }

    def __repr__(self) -> str:
        return f"ClassificationResult(intent={self.intent}, " \
               f"confidence={self.confidence:.2f}, " \
               f"method={self.method.value})"


@dataclass(frozen=True)
class Rule:
    """
    One entry of the keyword engine's precedence list.

    ``predicate`` receives the normalized (lower-cased, trimmed) message.
    """
    predicate: Callable[[str], bool]
    category: str
    confidence: float

    def matches(self, content: str) -> bool:
        return self.predicate(content)


@dataclass(frozen=True)
class DetailedClassification:
    """Both raw sub-classifier results next to the arbitrated one."""
    message: str
    keyword: ClassificationResult
    bayesian: ClassificationResult
    final: ClassificationResult
    bayesian_top5: List[Tuple[str, float]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "keyword": self.keyword.to_dict(),
            "bayesian": self.bayesian.to_dict(),
            "final": self.final.to_dict(),
            "bayesian_top5": [
                {"intent": label, "confidence": value}
                for label, value in self.bayesian_top5
            ],
        }


@dataclass
class CorpusStatistics:
    """Category distribution of a training corpus."""
    total: int
    counts: Dict[str, int]

    @property
    def categories(self) -> List[str]:
        return sorted(self.counts)

    @property
    def percentages(self) -> Dict[str, float]:
        if not self.total:
            return {category: 0.0 for category in self.counts}
        return {
            category: round(count / self.total * 100, 1)
            for category, count in self.counts.items()
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["percentages"] = self.percentages
        return data
