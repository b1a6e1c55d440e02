"""
Response envelope decoding.

Turns a raw Response into either a typed value or a raised error:

- 2xx: body validated against the requested pydantic model (or handed back
  verbatim in raw mode, for binary downloads)
- non-2xx: body parsed as the API error envelope and raised as ApiError;
  bodies that don't fit the envelope still produce an ApiError carrying the
  status and the raw text
- 2xx with an undecodable body: MalformedResponseError
"""

import json
from typing import Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from onfido_client.common.exceptions import (
    ApiError,
    MalformedResponseError,
    classify_api_error,
)
from onfido_client.common.security import sanitize_error_message, sanitize_url
from onfido_client.schemas.errors import ErrorEnvelope
from onfido_client.transport import Response

M = TypeVar("M", bound=BaseModel)


def _retry_after(response: Response) -> Optional[float]:
    value = response.header("Retry-After")
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None  # HTTP-date form is not interpreted


def parse_api_error(response: Response) -> ApiError:
    """
    Build the ApiError for a non-2xx response.

    Never raises: a body that isn't the documented error envelope yields an
    ApiError whose message is the best text available (a bare string
    ``error`` value, else the raw body).

    Args:
        response: Response with a non-2xx status

    Returns:
        ApiError subclass matching the status code
    """
    url = sanitize_url(response.url)
    error_type = error_id = None
    fields = None

    try:
        detail = ErrorEnvelope.model_validate_json(response.body).error
    except SchemaValidationError:
        detail = None

    if detail is not None:
        message = detail.message or detail.type or "Unknown error"
        error_type = detail.type
        error_id = detail.id
        fields = detail.fields
    else:
        message = _best_effort_message(response)

    return classify_api_error(
        response.status,
        f"HTTP {response.status}: {sanitize_error_message(message)}",
        error_type=error_type,
        error_id=error_id,
        fields=fields,
        url=url,
        retry_after=_retry_after(response),
    )


def _best_effort_message(response: Response) -> str:
    text = response.text.strip()
    if not text:
        return "Empty error response"
    try:
        data = json.loads(text)
    except ValueError:
        return text
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(data.get("message"), str) and data["message"]:
            return data["message"]
    return text


def raise_for_status(response: Response) -> None:
    """
    Raise the decoded ApiError if the response status is not 2xx.

    Raises:
        ApiError: For any non-2xx status
    """
    if not response.ok:
        raise parse_api_error(response)


def decode_json(response: Response, model: Type[M]) -> M:
    """
    Decode a JSON success body into ``model``.

    Args:
        response: Response from the transport
        model: Pydantic model describing the expected body

    Returns:
        Validated model instance

    Raises:
        ApiError: If the status is not 2xx
        MalformedResponseError: If the body is empty or doesn't match model
    """
    raise_for_status(response)

    if not response.body:
        raise MalformedResponseError(
            f"Empty response body, expected {model.__name__}",
            status_code=response.status,
            context={"url": sanitize_url(response.url)},
        )

    try:
        return model.model_validate_json(response.body)
    except SchemaValidationError as e:
        raise MalformedResponseError(
            f"Response body is not a valid {model.__name__}",
            status_code=response.status,
            cause=e,
            context={"url": sanitize_url(response.url)},
        ) from e


def decode_raw(response: Response) -> bytes:
    """
    Return a success body verbatim, without JSON parsing.

    Raises:
        ApiError: If the status is not 2xx
    """
    raise_for_status(response)
    return response.body


def decode_empty(response: Response) -> None:
    """
    Accept a success response whose body carries no result (e.g. 204).

    Raises:
        ApiError: If the status is not 2xx
    """
    raise_for_status(response)
