"""
Common exception types and error classification for onfido_client.

Provides:
- ErrorCategory enum for caller retry decisions
- Typed exception hierarchy: transport, API and malformed-response errors
- HTTP status classification utilities

The client never retries on its own. Categories and ``is_retryable`` are
informational so callers can build their own policy.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """
    Classification of error types for handling decisions.

    Categories:
        TRANSIENT: Temporary failures that may succeed if the caller retries
                   (e.g., network timeouts, 429/503 errors)
        AUTH: Authentication failures (e.g., 401, revoked or invalid token)
        PERMANENT: Failures that won't succeed on retry
                   (e.g., 404, 422 validation errors, malformed responses)
        UNKNOWN: Unclassified errors
    """

    TRANSIENT = "transient"
    AUTH = "auth"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


class OnfidoError(Exception):
    """
    Base exception for all client errors.

    Attributes:
        message: Human-readable error description
        category: Error classification for retry decisions
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        context: Optional[dict] = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Whether a caller-side retry could succeed."""
        return self.category in (
            ErrorCategory.TRANSIENT,
            ErrorCategory.UNKNOWN,
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


class ConfigurationError(OnfidoError):
    """Invalid client configuration."""

    category = ErrorCategory.PERMANENT


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(OnfidoError):
    """Network round trip failed before a response was received."""

    category = ErrorCategory.TRANSIENT


class RequestTimeoutError(TransportError):
    """Request exceeded the configured timeout."""

    pass


class RequestCancelledError(TransportError):
    """Request was cancelled by the caller."""

    category = ErrorCategory.PERMANENT


class InvalidRequestError(TransportError):
    """Request could not be built (bad URL, unserializable body)."""

    category = ErrorCategory.PERMANENT


# =============================================================================
# API Errors (server answered with a non-2xx status)
# =============================================================================


class ApiError(OnfidoError):
    """
    Server rejected the request.

    Attributes:
        status_code: HTTP status returned by the server
        error_type: Machine error type from the error envelope (if any)
        error_id: Server-side error identifier (if any)
        fields: Per-field validation errors (if any)
        url: Request URL (sanitized)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: Optional[str] = None,
        error_id: Optional[str] = None,
        fields: Optional[Dict[str, Any]] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, context={"status_code": status_code, "url": url})
        self.status_code = status_code
        self.error_type = error_type
        self.error_id = error_id
        self.fields = fields or {}
        self.url = url
        self.category = classify_http_status(status_code)


class AuthenticationError(ApiError):
    """Token missing, invalid or revoked (401)."""

    pass


class ForbiddenError(ApiError):
    """Token lacks permission for the resource (403)."""

    pass


class NotFoundError(ApiError):
    """Resource not found (404)."""

    pass


class ValidationError(ApiError):
    """Request payload rejected by server validation (422)."""

    pass


class RateLimitError(ApiError):
    """Rate limited (429)."""

    def __init__(self, *args: Any, retry_after: Optional[float] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.retry_after = retry_after  # Seconds to wait if provided


class ServerError(ApiError):
    """Server-side failure (5xx)."""

    pass


# =============================================================================
# Decode Errors
# =============================================================================


class MalformedResponseError(OnfidoError):
    """Success status, but the body did not match the expected shape."""

    category = ErrorCategory.PERMANENT

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message, cause, context)
        self.status_code = status_code


# =============================================================================
# Error Classification Utilities
# =============================================================================


def classify_http_status(status_code: int) -> ErrorCategory:
    """
    Classify HTTP status code into error category.

    Args:
        status_code: HTTP response status

    Returns:
        Appropriate ErrorCategory
    """
    if 200 <= status_code < 300:
        return ErrorCategory.UNKNOWN  # Not an error

    if status_code == 401:
        return ErrorCategory.AUTH

    if status_code in (408, 429):
        return ErrorCategory.TRANSIENT

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT

    if status_code >= 500:
        return ErrorCategory.TRANSIENT

    return ErrorCategory.UNKNOWN


_STATUS_ERRORS = {
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    422: ValidationError,
    429: RateLimitError,
}


def classify_api_error(
    status: int,
    message: str,
    error_type: Optional[str] = None,
    error_id: Optional[str] = None,
    fields: Optional[Dict[str, Any]] = None,
    url: Optional[str] = None,
    retry_after: Optional[float] = None,
) -> ApiError:
    """
    Create the appropriate ApiError subclass for an HTTP status code.

    - 401: AuthenticationError
    - 403: ForbiddenError
    - 404: NotFoundError
    - 422: ValidationError
    - 429: RateLimitError (carries retry_after when the server sent one)
    - 5xx: ServerError
    - anything else: ApiError

    Args:
        status: HTTP status code
        message: Human-readable message (decoded or synthesized)
        error_type: Machine error type from the envelope
        error_id: Server error id from the envelope
        fields: Field errors from the envelope
        url: Request URL for context
        retry_after: Value of the Retry-After header, in seconds

    Returns:
        ApiError with proper classification
    """
    kwargs: Dict[str, Any] = dict(
        status_code=status,
        error_type=error_type,
        error_id=error_id,
        fields=fields,
        url=url,
    )

    if status == 429:
        return RateLimitError(message, retry_after=retry_after, **kwargs)

    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None and status >= 500:
        error_cls = ServerError
    return (error_cls or ApiError)(message, **kwargs)
