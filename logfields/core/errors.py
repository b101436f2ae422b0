"""
Error taxonomy for the field registry.

Provides the exception hierarchy raised by FieldRegistry.evaluate and a
structured error model a logging pipeline can report.
Absence of a value is never an error; see logfields.core.absence.
"""

import uuid

from pydantic import BaseModel

# --- Exception Hierarchy ---


class LogFieldsError(Exception):
    """Base exception for all logfields errors."""

    def __init__(self, message: str, trace_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.trace_id = trace_id or str(uuid.uuid4())


class UnknownFieldError(LogFieldsError):
    """A field name was evaluated that has no registered provider."""

    def __init__(self, field_name: str, trace_id: str | None = None):
        super().__init__(f"Field '{field_name}' does not exist.", trace_id=trace_id)
        self.field_name = field_name


class MissingRequiredContextError(LogFieldsError):
    """A field was evaluated before the context it cannot do without was injected."""

    def __init__(self, field_name: str, context: str, trace_id: str | None = None):
        super().__init__(
            f"Field '{field_name}' requires a {context} but none was set.",
            trace_id=trace_id,
        )
        self.field_name = field_name
        self.context = context


class BackendUnavailableError(LogFieldsError):
    """An identity backend is not installed or could not answer.

    Only raised and caught inside user id resolution.
    """

    def __init__(self, backend: str, message: str | None = None, trace_id: str | None = None):
        super().__init__(
            message or f"Identity backend '{backend}' is unavailable", trace_id=trace_id
        )
        self.backend = backend


# --- Structured Error Model ---


class ErrorDetail(BaseModel):
    """Structured error information for pipeline reporting."""

    code: str
    message: str
    field_name: str | None = None
    trace_id: str


def error_to_detail(error: LogFieldsError) -> ErrorDetail:
    """
    Convert a LogFieldsError to an ErrorDetail.

    Args:
        error: The LogFieldsError instance

    Returns:
        ErrorDetail Pydantic model
    """
    if isinstance(error, UnknownFieldError):
        code = "ERR_UNKNOWN_FIELD"
    elif isinstance(error, MissingRequiredContextError):
        code = "ERR_MISSING_CONTEXT"
    elif isinstance(error, BackendUnavailableError):
        code = "ERR_BACKEND_UNAVAILABLE"
    else:
        code = "ERR_UNKNOWN"

    return ErrorDetail(
        code=code,
        message=error.message,
        field_name=getattr(error, "field_name", None),
        trace_id=error.trace_id,
    )
