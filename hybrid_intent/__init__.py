"""
Hybrid intent classification for short chat messages.

Combines an ordered keyword rule engine with a multinomial naive-Bayes
model to label a message with one intent and a confidence.

Applications call ``configure_logging()`` once at startup to get JSON log
lines, then build a classifier with
``hybrid_intent.infrastructure.ai.intent.create_hybrid_classifier()``.
"""

from hybrid_intent.config import Settings, get_settings, load_env_file
from hybrid_intent.utils.logger import configure_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "load_env_file",
    "__version__",
]
