"""
Resource loading for the training corpus and keyword rule tables.
"""

from hybrid_intent.infrastructure.data.corpus_loader import (
    corpus_statistics,
    load_keyword_rules,
    load_training_corpus,
)

__all__ = [
    "corpus_statistics",
    "load_keyword_rules",
    "load_training_corpus",
]
