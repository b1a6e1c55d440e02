"""Async client library for the Onfido identity verification API.

This package contains:
- Transport: authenticated HTTP round trips against a configurable endpoint
- Envelope decoding: typed success values, typed API errors
- ResourceIter: lazy iteration over paginated collections
- OnfidoApiClient: accessors for checks, reports, applicants, documents
  and live videos
"""

__version__ = "0.3.0"

from onfido_client.api_client import OnfidoApiClient
from onfido_client.common.exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    ErrorCategory,
    ForbiddenError,
    InvalidRequestError,
    MalformedResponseError,
    NotFoundError,
    OnfidoError,
    RateLimitError,
    RequestCancelledError,
    RequestTimeoutError,
    ServerError,
    TransportError,
    ValidationError,
)
from onfido_client.config import ClientConfig
from onfido_client.iterator import Page, ResourceIter, collection_decoder
from onfido_client.transport import Request, Response, Transport

__all__ = [
    "ApiError",
    "AuthenticationError",
    "ClientConfig",
    "ConfigurationError",
    "ErrorCategory",
    "ForbiddenError",
    "InvalidRequestError",
    "MalformedResponseError",
    "NotFoundError",
    "OnfidoApiClient",
    "OnfidoError",
    "Page",
    "RateLimitError",
    "Request",
    "RequestCancelledError",
    "RequestTimeoutError",
    "ResourceIter",
    "Response",
    "ServerError",
    "Transport",
    "TransportError",
    "ValidationError",
    "collection_decoder",
    "__version__",
]
