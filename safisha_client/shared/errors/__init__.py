from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    MissingRefreshTokenError,
    StorageError,
    ValidationError,
)
from .http import (
    InvalidAuthResponseError,
    RequestError,
    ResponseDecodeError,
    TransportError,
    error_from_response,
    extract_error_message,
)
from .validation import format_pydantic_errors, raise_validation_error

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "InvalidAuthResponseError",
    "MissingRefreshTokenError",
    "RequestError",
    "ResponseDecodeError",
    "StorageError",
    "TransportError",
    "ValidationError",
    "error_from_response",
    "extract_error_message",
    "format_pydantic_errors",
    "raise_validation_error",
]
