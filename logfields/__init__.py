"""
logfields - contextual metadata fields for log records

A registry of named field providers (hashed session id, request URL, client
IP, authenticated user id, process identifier, ...) evaluated on demand for
each emitted record.

Example:
    from logfields import FieldRegistry, TokenProvider

    registry = FieldRegistry()
    registry.set_environment("staging")
    registry.set_token_accessor(TokenProvider())
    registry.register("appVersion", lambda: "1.4.2")

    registry.collect()  # {"environment": "staging", "processIdentifier": "...", ...}
"""

from logfields.core.absence import ABSENT, Absent, is_absent
from logfields.core.errors import (
    BackendUnavailableError,
    LogFieldsError,
    MissingRequiredContextError,
    UnknownFieldError,
)
from logfields.core.identity import (
    CallableIdentityResolver,
    IdentityResult,
    ResolutionStatus,
    UserObjectIdentityResolver,
    resolve_principal,
)
from logfields.core.interfaces import (
    IdentityResolver,
    RequestAccessor,
    SessionAccessor,
    TokenAccessor,
)
from logfields.core.registry import FieldRegistry
from logfields.core.token import TokenProvider
from logfields.logging_filter import FieldsFilter

__all__ = [
    "ABSENT",
    "Absent",
    "is_absent",
    "FieldRegistry",
    "FieldsFilter",
    "TokenProvider",
    "SessionAccessor",
    "RequestAccessor",
    "TokenAccessor",
    "IdentityResolver",
    "IdentityResult",
    "ResolutionStatus",
    "CallableIdentityResolver",
    "UserObjectIdentityResolver",
    "resolve_principal",
    "LogFieldsError",
    "UnknownFieldError",
    "MissingRequiredContextError",
    "BackendUnavailableError",
]
