"""Check resource records."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from onfido_client.schemas.base import OnfidoModel
from onfido_client.schemas.reports import Report


class CheckStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    AWAITING_APPLICANT = "awaiting_applicant"
    COMPLETE = "complete"
    WITHDRAWN = "withdrawn"
    PAUSED = "paused"
    REOPENED = "reopened"


class CheckResult(str, Enum):
    CLEAR = "clear"
    CONSIDER = "consider"


class CheckType(str, Enum):
    EXPRESS = "express"
    STANDARD = "standard"


class CheckRequest(OnfidoModel):
    """Body for POST /checks.

    Unset optional fields are omitted from the request body.
    """

    applicant_id: str = Field(..., min_length=1)
    report_names: List[str] = Field(..., min_length=1)
    document_ids: Optional[List[str]] = None
    redirect_uri: Optional[str] = None
    tags: Optional[List[str]] = None
    suppress_form_emails: Optional[bool] = None
    asynchronous: Optional[bool] = None
    charge_applicant_for_check: Optional[bool] = None
    # Sandbox only: report names that should come back as "consider"
    consider: Optional[List[str]] = None
    applicant_provides_data: bool = False


class _CheckFields(OnfidoModel):
    id: str
    created_at: Optional[datetime] = None
    href: Optional[str] = None
    type: Optional[CheckType] = None
    status: Optional[CheckStatus] = None
    result: Optional[CheckResult] = None
    download_uri: Optional[str] = None
    form_uri: Optional[str] = None
    redirect_uri: Optional[str] = None
    results_uri: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    applicant_id: Optional[str] = None
    applicant_provides_data: bool = False
    sandbox: Optional[bool] = None
    paused: Optional[bool] = None


class CheckRetrieved(_CheckFields):
    """A check as returned by GET /checks/{id}: reports are ids only."""

    report_ids: List[str] = Field(default_factory=list)


class Check(_CheckFields):
    """A check with its reports expanded into full Report records."""

    report_ids: List[str] = Field(default_factory=list)
    reports: List[Report] = Field(default_factory=list)

    @classmethod
    def from_retrieved(cls, retrieved: CheckRetrieved, reports: List[Report]) -> "Check":
        """Build an expanded check from a summary and its fetched reports."""
        return cls(**retrieved.model_dump(), reports=reports)
