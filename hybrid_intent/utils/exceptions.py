from typing import Any, Dict, Optional


class AppException(Exception):
    """Base application exception class."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppException):
    """Exception for data validation errors."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details)


class CorpusLoadError(AppException):
    """Raised when the training corpus cannot be read, parsed or validated."""

    def __init__(
        self,
        path: str,
        message: str = "Training corpus could not be loaded",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize corpus load error.

        Args:
            path: Location of the corpus resource
            message: Error message
            details: Additional error details
        """
        error_details = details or {}
        error_details["path"] = path

        super().__init__(message=message, details=error_details)


class RuleConfigurationError(AppException):
    """Raised when keyword rule tables are missing, malformed or unbound."""

    def __init__(
        self,
        message: str = "Keyword rule configuration is invalid",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, details=details)


class ModelPersistenceError(AppException):
    """Raised when a fitted statistical model cannot be saved or restored."""

    def __init__(
        self,
        path: str,
        message: str = "Model persistence failed",
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        error_details["path"] = path

        super().__init__(message=message, details=error_details)
