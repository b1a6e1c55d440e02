"""Document resource records."""

from datetime import datetime
from typing import Optional

from onfido_client.schemas.base import BinaryDownload, OnfidoModel


class Document(OnfidoModel):
    id: str
    created_at: Optional[datetime] = None
    href: Optional[str] = None
    download_href: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    type: Optional[str] = None
    side: Optional[str] = None
    issuing_country: Optional[str] = None
    applicant_id: Optional[str] = None


class DocumentDownload(BinaryDownload):
    """Binary content of a document image or PDF."""
