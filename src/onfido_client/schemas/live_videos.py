"""Live video resource records."""

from datetime import datetime
from typing import Optional

from onfido_client.schemas.base import BinaryDownload, OnfidoModel


class LiveVideo(OnfidoModel):
    id: str
    created_at: Optional[datetime] = None
    href: Optional[str] = None
    download_href: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None


class LiveVideoDownload(BinaryDownload):
    """Binary content of a live video recording."""
