"""
Domain Services Package.

Services that sit on top of the classifier: the response gate used by the
calling application and the offline diagnostic reporter.
"""

from hybrid_intent.domain.services.diagnostic_service import DiagnosticService
from hybrid_intent.domain.services.intent_service import IntentService

__all__ = [
    "DiagnosticService",
    "IntentService",
]
