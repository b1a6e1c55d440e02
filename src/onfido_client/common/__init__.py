"""Common infrastructure shared by the transport, decoder and accessors."""

from onfido_client.common.exceptions import (
    ApiError,
    ErrorCategory,
    MalformedResponseError,
    OnfidoError,
    TransportError,
)
from onfido_client.common.logging import LoggedClass, get_logger, logged_operation

__all__ = [
    "ApiError",
    "ErrorCategory",
    "LoggedClass",
    "MalformedResponseError",
    "OnfidoError",
    "TransportError",
    "get_logger",
    "logged_operation",
]
