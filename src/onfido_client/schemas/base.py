"""Shared pydantic base classes for API resources."""

from typing import Optional

from pydantic import BaseModel, Field


class OnfidoModel(BaseModel):
    """Base for resource records.

    Unknown fields are ignored so new server-side attributes never break
    decoding.
    """

    model_config = {
        "extra": "ignore",
        "populate_by_name": True,
    }


class BinaryDownload(BaseModel):
    """Raw bytes returned by a download endpoint, untouched."""

    data: bytes = Field(..., description="Binary content exactly as received")
    content_type: Optional[str] = Field(
        default=None,
        description="Content-Type reported by the server",
    )

    @property
    def size(self) -> int:
        return len(self.data)
