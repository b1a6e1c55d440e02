"""Error envelope returned by the API on non-2xx responses."""

from typing import Any, Dict, Optional

from onfido_client.schemas.base import OnfidoModel


class ErrorDetail(OnfidoModel):
    """Body of the ``error`` key.

    Example:
        {"error": {"type": "validation_error",
                   "message": "There was a validation error on this request",
                   "fields": {"email": ["invalid format"]}}}
    """

    id: Optional[str] = None
    type: Optional[str] = None
    message: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None


class ErrorEnvelope(OnfidoModel):
    error: ErrorDetail
