"""
Interfaces package containing abstract base classes that define contracts
between the classifier components.
"""

from hybrid_intent.domain.interfaces.model_interface import TextClassifierInterface

__all__ = [
    "TextClassifierInterface",
]
