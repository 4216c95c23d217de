"""
Loaders for the classifier's static resources.

Both the training corpus and the keyword rule tables are read once at
startup. Any failure here is fatal for the classifier, so errors are
raised rather than degraded into an empty resource.
"""

from collections import Counter
from typing import List, Sequence
import json
import os

from pydantic import ValidationError

from hybrid_intent.domain.models.intent import CorpusStatistics
from hybrid_intent.domain.schemas.training import KeywordRuleSet, TrainingExample
from hybrid_intent.utils.exceptions import CorpusLoadError, RuleConfigurationError
from hybrid_intent.utils.logger import get_logger

logger = get_logger(__name__)


def _read_json(path: str):
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def load_training_corpus(path: str) -> List[TrainingExample]:
    """
    Load and validate the labelled training corpus.

    Args:
        path: Path to a JSON array of ``{"category": ..., "text": ...}`` records

    Returns:
        The validated examples, in file order

    Raises:
        CorpusLoadError: If the file is missing, unparsable, invalid or empty
    """
    if not os.path.exists(path):
        raise CorpusLoadError(path, f"Training corpus not found at {path}")

    try:
        raw = _read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusLoadError(path, f"Failed to read training corpus: {str(e)}") from e

    if not isinstance(raw, list):
        raise CorpusLoadError(path, "Training corpus must be a JSON array")

    try:
        corpus = [TrainingExample.model_validate(item) for item in raw]
    except ValidationError as e:
        raise CorpusLoadError(
            path,
            "Training corpus contains invalid records",
            details={"errors": e.errors(include_url=False)}
        ) from e

    if not corpus:
        raise CorpusLoadError(path, "Training corpus is empty")

    logger.info(f"Loaded {len(corpus)} training examples from {path}")
    return corpus


def load_keyword_rules(path: str) -> KeywordRuleSet:
    """
    Load and validate the versioned keyword rule tables.

    Args:
        path: Path to the rule table JSON document

    Returns:
        The validated rule set, tables in precedence order

    Raises:
        RuleConfigurationError: If the file is missing, unparsable or invalid
    """
    try:
        raw = _read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise RuleConfigurationError(
            f"Failed to read keyword rules: {str(e)}",
            details={"path": path}
        ) from e

    try:
        rule_set = KeywordRuleSet.model_validate(raw)
    except ValidationError as e:
        raise RuleConfigurationError(
            "Keyword rules failed validation",
            details={"path": path, "errors": e.errors(include_url=False)}
        ) from e

    logger.info(
        f"Loaded keyword rules v{rule_set.version} "
        f"({len(rule_set.rules)} tables) from {path}"
    )
    return rule_set


def corpus_statistics(corpus: Sequence[TrainingExample]) -> CorpusStatistics:
    """Count examples per category."""
    counts = Counter(example.category for example in corpus)
    return CorpusStatistics(total=len(corpus), counts=dict(counts))
