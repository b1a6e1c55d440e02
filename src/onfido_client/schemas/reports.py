"""Report resource records."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from onfido_client.schemas.base import OnfidoModel


class ReportName(str, Enum):
    """Report types that can be requested in a check."""

    DOCUMENT = "document"
    DOCUMENT_WITH_ADDRESS_INFORMATION = "document_with_address_information"
    FACIAL_SIMILARITY_PHOTO = "facial_similarity_photo"
    FACIAL_SIMILARITY_PHOTO_FULLY_AUTO = "facial_similarity_photo_fully_auto"
    FACIAL_SIMILARITY_VIDEO = "facial_similarity_video"
    FACIAL_SIMILARITY_MOTION = "facial_similarity_motion"
    KNOWN_FACES = "known_faces"
    IDENTITY_ENHANCED = "identity_enhanced"
    WATCHLIST_AML = "watchlist_aml"
    WATCHLIST_ENHANCED = "watchlist_enhanced"
    WATCHLIST_STANDARD = "watchlist_standard"
    WATCHLIST_PEPS_ONLY = "watchlist_peps_only"
    WATCHLIST_SANCTIONS_ONLY = "watchlist_sanctions_only"
    PROOF_OF_ADDRESS = "proof_of_address"
    DEVICE_INTELLIGENCE = "device_intelligence"


class ReportStatus(str, Enum):
    AWAITING_DATA = "awaiting_data"
    AWAITING_APPROVAL = "awaiting_approval"
    COMPLETE = "complete"
    WITHDRAWN = "withdrawn"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class ReportResult(str, Enum):
    CLEAR = "clear"
    CONSIDER = "consider"
    UNIDENTIFIED = "unidentified"


class ReportSubResult(str, Enum):
    CLEAR = "clear"
    REJECTED = "rejected"
    SUSPECTED = "suspected"
    CAUTION = "caution"


class Report(OnfidoModel):
    """A single report within a check.

    ``name``, ``status``, ``result`` and ``sub_result`` are kept as plain
    strings so values added server-side still decode; compare them against
    the enums above (they are str enums).
    """

    id: str
    created_at: Optional[datetime] = None
    href: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    result: Optional[str] = None
    sub_result: Optional[str] = None
    check_id: Optional[str] = None
    documents: List[Dict[str, Any]] = Field(default_factory=list)
    breakdown: Dict[str, Any] = Field(default_factory=dict)
    properties: Dict[str, Any] = Field(default_factory=dict)
