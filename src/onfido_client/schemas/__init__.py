"""
Pydantic records exchanged with the Onfido API.

These are plain data carriers: the transport, decoder and iterator treat
them as opaque target shapes.
"""

from onfido_client.schemas.applicants import Address, Applicant, ApplicantRequest, IdNumber
from onfido_client.schemas.base import BinaryDownload, OnfidoModel
from onfido_client.schemas.checks import (
    Check,
    CheckRequest,
    CheckResult,
    CheckRetrieved,
    CheckStatus,
    CheckType,
)
from onfido_client.schemas.documents import Document, DocumentDownload
from onfido_client.schemas.errors import ErrorDetail, ErrorEnvelope
from onfido_client.schemas.live_videos import LiveVideo, LiveVideoDownload
from onfido_client.schemas.reports import (
    Report,
    ReportName,
    ReportResult,
    ReportStatus,
    ReportSubResult,
)

__all__ = [
    "Address",
    "Applicant",
    "ApplicantRequest",
    "BinaryDownload",
    "Check",
    "CheckRequest",
    "CheckResult",
    "CheckRetrieved",
    "CheckStatus",
    "CheckType",
    "Document",
    "DocumentDownload",
    "ErrorDetail",
    "ErrorEnvelope",
    "IdNumber",
    "LiveVideo",
    "LiveVideoDownload",
    "OnfidoModel",
    "Report",
    "ReportName",
    "ReportResult",
    "ReportStatus",
    "ReportSubResult",
]
