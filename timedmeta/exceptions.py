from typing import Dict, Optional


class TimedMetaException(Exception):
    """Base exception for the timed metadata pipeline."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ProviderException(TimedMetaException):
    """Raised when an external provider (store, queue, analysis API) fails."""
    pass


class ConfigurationException(TimedMetaException):
    """Raised when configuration is invalid."""
    pass


class ValidationException(TimedMetaException):
    """Raised when input validation fails."""
    pass


class ResourceNotFoundException(TimedMetaException):
    """Raised when requested resource is not found."""
    pass


class WorkflowTimeoutException(TimedMetaException):
    """Raised when the analysis job did not complete within the allowed poll attempts."""
    pass
