"""
DataMind - Custom Exceptions.

Centralized exception handling with standardized error responses.
"""

from typing import Any
from uuid import UUID


class DataMindException(Exception):
    """Base exception for DataMind application."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        request_id: UUID | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.request_id = request_id
        super().__init__(message)


class NotFoundException(DataMindException):
    """Raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int | UUID):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource_type} not found: {resource_id}",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ConflictException(DataMindException):
    """Raised when state transition is not allowed."""

    def __init__(self, message: str, current_state: str | None = None, target_state: str | None = None):
        details = {}
        if current_state:
            details["current_state"] = current_state
        if target_state:
            details["target_state"] = target_state
        super().__init__(
            code="CONFLICT",
            message=message,
            status_code=409,
            details=details if details else None,
        )


class ConversationBusyException(DataMindException):
    """Raised when a turn is submitted while another one is still in flight."""

    def __init__(self):
        super().__init__(
            code="CONVERSATION_BUSY",
            message="Another request is still being processed for this session",
            status_code=409,
        )


class NoDashboardException(DataMindException):
    """Raised when an operation needs a dashboard but none is loaded."""

    def __init__(self, phase: str):
        super().__init__(
            code="NO_DASHBOARD",
            message="No dashboard is loaded for this session",
            status_code=409,
            details={"phase": phase},
        )


class ValidationException(DataMindException):
    """Raised for validation errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details={"errors": errors} if errors else None,
        )


class FeatureDisabledException(DataMindException):
    """Raised when a feature flag is disabled."""

    def __init__(self, feature_name: str):
        super().__init__(
            code="FEATURE_DISABLED",
            message=f"Feature '{feature_name}' is currently disabled",
            status_code=503,
            details={"feature": feature_name},
        )


class ExternalServiceException(DataMindException):
    """Raised when an external service fails."""

    def __init__(self, service_name: str, message: str):
        super().__init__(
            code="EXTERNAL_SERVICE_ERROR",
            message=f"{service_name} error: {message}",
            status_code=502,
            details={"service": service_name},
        )


class IngestionFailure(DataMindException):
    """Raised when an uploaded file yields no usable rows."""

    def __init__(self, message: str = "Could not process data. Please ensure the file is a valid CSV."):
        super().__init__(
            code="INGESTION_FAILED",
            message=message,
            status_code=422,
        )


class AnalysisFailure(DataMindException):
    """Raised when the initial dashboard analysis cannot be produced."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="ANALYSIS_FAILED",
            message=f"Failed to analyze data: {reason}",
            status_code=502,
            details=details,
        )
        self.reason = reason


class ChatTurnFailure(DataMindException):
    """Raised inside the chat contract; always absorbed into an apology message."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="CHAT_TURN_FAILED",
            message=f"Chat turn failed: {reason}",
            status_code=502,
            details=details,
        )
        self.reason = reason
