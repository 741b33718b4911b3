"""Shared exceptions for the STACBot client."""
from typing import Any, Dict, Optional


class StacBotClientException(Exception):
    """Base exception for the STACBot client."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(StacBotClientException):
    """Raised when user input validation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class StorageError(StacBotClientException):
    """Raised when local storage operations fail."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORAGE_ERROR", details)


class ExternalServiceError(StacBotClientException):
    """Raised when a call to the backend fails."""

    def __init__(
        self, service: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        full_message = f"{service} service error: {message}"
        super().__init__(full_message, "EXTERNAL_SERVICE_ERROR", details)


class MalformedResponseError(ExternalServiceError):
    """Raised when the backend answers with a body we cannot interpret."""

    def __init__(
        self, service: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(service, message, details)
        self.error_code = "MALFORMED_RESPONSE"


class RequestInFlightError(StacBotClientException):
    """Raised when a send is attempted while another one is pending."""

    def __init__(self, conversation_id: Optional[str]):
        super().__init__(
            "A request is already in flight for this conversation",
            "REQUEST_IN_FLIGHT",
            {"conversation_id": conversation_id},
        )
