"""
Onfido REST API client.

Async accessors for checks, reports, applicants, documents and live videos.
Each accessor is a thin composition of Transport (one round trip) and the
envelope decoder; list accessors return a lazily paging ResourceIter.

No accessor retries. Every failure reaches the caller as an OnfidoError
subclass (TransportError, ApiError or MalformedResponseError).
"""

import logging
from typing import Optional, Type, TypeVar
from urllib.parse import quote, urlencode

from pydantic import BaseModel

from onfido_client.common.exceptions import InvalidRequestError
from onfido_client.common.logging import LoggedClass, logged_operation
from onfido_client.config import ClientConfig
from onfido_client.envelope import decode_empty, decode_json, decode_raw
from onfido_client.iterator import ResourceIter, collection_decoder
from onfido_client.schemas.applicants import Applicant, ApplicantRequest
from onfido_client.schemas.checks import Check, CheckRequest, CheckRetrieved
from onfido_client.schemas.documents import Document, DocumentDownload
from onfido_client.schemas.live_videos import LiveVideo, LiveVideoDownload
from onfido_client.schemas.reports import Report
from onfido_client.transport import Request, Response, Transport

M = TypeVar("M", bound=BaseModel)

# Page decoders, one per collection envelope
_CHECK_PAGES = collection_decoder(Check, "checks")
_REPORT_PAGES = collection_decoder(Report, "reports")
_APPLICANT_PAGES = collection_decoder(Applicant, "applicants")
_DOCUMENT_PAGES = collection_decoder(Document, "documents")
_LIVE_VIDEO_PAGES = collection_decoder(LiveVideo, "live_videos")


def _require_id(kind: str, value: str) -> None:
    if not value or not value.strip():
        raise InvalidRequestError(f"{kind} id must not be empty")


def _resource_path(collection: str, resource_id: str, *suffix: str) -> str:
    """Build ``/collection/<id>[/suffix...]`` with the id URL-quoted."""
    _require_id(collection, resource_id)
    parts = [collection, quote(resource_id, safe="")] + list(suffix)
    return "/" + "/".join(parts)


def _with_query(path: str, **params: object) -> str:
    query = {k: v for k, v in params.items() if v is not None}
    if not query:
        return path
    return f"{path}?{urlencode(query)}"


class OnfidoApiClient(LoggedClass):
    """
    Async client for the Onfido identity verification API.

    Usage:
        config = ClientConfig(api_token="api_sandbox.xxx")
        async with OnfidoApiClient(config) as client:
            check = await client.get_check_expanded(check_id)
            async for video in client.list_live_videos(applicant_id):
                ...

    Configuration:
        config: Endpoint, token, timeout and concurrency (ClientConfig)
        transport: Optional pre-built Transport (tests, shared sessions).
                   A supplied transport is not closed by close().
    """

    log_component = "api"

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[Transport] = None,
    ):
        self.config = config
        self.base_url = config.endpoint
        self._owns_transport = transport is None
        self._transport = transport or Transport(config)

        super().__init__()

    async def __aenter__(self) -> "OnfidoApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP session if this client created the transport."""
        if self._owns_transport:
            await self._transport.close()

    @property
    def transport(self) -> Transport:
        return self._transport

    async def _send(
        self,
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
        accept: Optional[str] = None,
    ) -> Response:
        payload = None
        if body is not None:
            payload = body.model_dump_json(exclude_none=True).encode("utf-8")
        return await self._transport.send(
            Request(method, path, body=payload, accept=accept)
        )

    async def _fetch(
        self,
        method: str,
        path: str,
        model: Type[M],
        body: Optional[BaseModel] = None,
    ) -> M:
        return decode_json(await self._send(method, path, body), model)

    def _iterate(self, path: str, decoder) -> ResourceIter:
        return ResourceIter(self._transport, path, decoder)

    # =========================================================================
    # Check Endpoints
    # =========================================================================

    @logged_operation(level=logging.DEBUG)
    async def create_check(self, request: CheckRequest) -> Check:
        """
        Create a check for an applicant.

        Args:
            request: Applicant id, report names and options

        Returns:
            The created Check
        """
        return await self._fetch("POST", "/checks", Check, body=request)

    @logged_operation(level=logging.DEBUG)
    async def get_check(self, check_id: str) -> CheckRetrieved:
        """
        Retrieve a check. Reports are referenced by id only.

        Raises:
            NotFoundError: If the check doesn't exist
        """
        return await self._fetch("GET", _resource_path("checks", check_id), CheckRetrieved)

    @logged_operation(level=logging.DEBUG)
    async def get_check_expanded(self, check_id: str) -> Check:
        """
        Retrieve a check with every report fetched and embedded.

        Reports are fetched one at a time in report_ids order. If any fetch
        fails the error is raised and nothing already fetched is returned.

        Args:
            check_id: Check ID

        Returns:
            Check whose ``reports`` holds full Report records
        """
        retrieved = await self.get_check(check_id)

        reports = []
        for report_id in retrieved.report_ids:
            reports.append(await self.get_report(report_id))

        return Check.from_retrieved(retrieved, reports)

    @logged_operation(level=logging.DEBUG)
    async def resume_check(self, check_id: str) -> None:
        """Resume a paused check."""
        decode_empty(await self._send("POST", _resource_path("checks", check_id, "resume")))

    @logged_operation(level=logging.DEBUG)
    def list_checks(self, applicant_id: str) -> ResourceIter[Check]:
        """
        Lazily list the checks of an applicant.

        No request is made until the iterator is advanced.
        """
        _require_id("applicant", applicant_id)
        return self._iterate(_with_query("/checks", applicant_id=applicant_id), _CHECK_PAGES)

    @logged_operation(level=logging.DEBUG)
    async def get_check_from_href(self, href: str) -> Check:
        """Fetch a check from an href returned by the API (path or absolute URL)."""
        return await self._fetch("GET", href, Check)

    # =========================================================================
    # Report Endpoints
    # =========================================================================

    @logged_operation(level=logging.DEBUG)
    async def get_report(self, report_id: str) -> Report:
        return await self._fetch("GET", _resource_path("reports", report_id), Report)

    @logged_operation(level=logging.DEBUG)
    def list_reports(self, check_id: str) -> ResourceIter[Report]:
        """Lazily list the reports of a check."""
        _require_id("check", check_id)
        return self._iterate(_with_query("/reports", check_id=check_id), _REPORT_PAGES)

    @logged_operation(level=logging.DEBUG)
    async def resume_report(self, report_id: str) -> None:
        """Resume a paused report."""
        decode_empty(await self._send("POST", _resource_path("reports", report_id, "resume")))

    @logged_operation(level=logging.DEBUG)
    async def cancel_report(self, report_id: str) -> None:
        """Cancel a paused report."""
        decode_empty(await self._send("POST", _resource_path("reports", report_id, "cancel")))

    @logged_operation(level=logging.DEBUG)
    async def get_report_from_href(self, href: str) -> Report:
        return await self._fetch("GET", href, Report)

    # =========================================================================
    # Applicant Endpoints
    # =========================================================================

    @logged_operation(level=logging.DEBUG)
    async def create_applicant(self, request: ApplicantRequest) -> Applicant:
        return await self._fetch("POST", "/applicants", Applicant, body=request)

    @logged_operation(level=logging.DEBUG)
    async def get_applicant(self, applicant_id: str) -> Applicant:
        return await self._fetch(
            "GET", _resource_path("applicants", applicant_id), Applicant
        )

    @logged_operation(level=logging.DEBUG)
    async def update_applicant(
        self, applicant_id: str, request: ApplicantRequest
    ) -> Applicant:
        """Update an applicant; only fields set on request are sent."""
        return await self._fetch(
            "PUT", _resource_path("applicants", applicant_id), Applicant, body=request
        )

    @logged_operation(level=logging.DEBUG)
    async def delete_applicant(self, applicant_id: str) -> None:
        """Schedule an applicant for deletion (restorable until deleted)."""
        decode_empty(await self._send("DELETE", _resource_path("applicants", applicant_id)))

    @logged_operation(level=logging.DEBUG)
    async def restore_applicant(self, applicant_id: str) -> None:
        """Restore an applicant scheduled for deletion."""
        decode_empty(
            await self._send("POST", _resource_path("applicants", applicant_id, "restore"))
        )

    @logged_operation(level=logging.DEBUG)
    def list_applicants(
        self,
        include_deleted: bool = False,
        per_page: Optional[int] = None,
    ) -> ResourceIter[Applicant]:
        """
        Lazily list all applicants.

        Args:
            include_deleted: Also list applicants scheduled for deletion
            per_page: Page size requested from the server
        """
        path = _with_query(
            "/applicants",
            include_deleted="true" if include_deleted else None,
            per_page=per_page,
        )
        return self._iterate(path, _APPLICANT_PAGES)

    # =========================================================================
    # Document Endpoints
    # =========================================================================

    @logged_operation(level=logging.DEBUG)
    async def get_document(self, document_id: str) -> Document:
        return await self._fetch("GET", _resource_path("documents", document_id), Document)

    @logged_operation(level=logging.DEBUG)
    def list_documents(self, applicant_id: str) -> ResourceIter[Document]:
        """Lazily list the documents of an applicant."""
        _require_id("applicant", applicant_id)
        return self._iterate(
            _with_query("/documents", applicant_id=applicant_id), _DOCUMENT_PAGES
        )

    @logged_operation(level=logging.DEBUG)
    async def download_document(self, document_id: str) -> DocumentDownload:
        """Download the binary content of a document, unmodified."""
        response = await self._send(
            "GET", _resource_path("documents", document_id, "download"), accept="*/*"
        )
        return DocumentDownload(
            data=decode_raw(response),
            content_type=response.header("Content-Type"),
        )

    @logged_operation(level=logging.DEBUG)
    async def get_document_from_href(self, href: str) -> Document:
        return await self._fetch("GET", href, Document)

    # =========================================================================
    # Live Video Endpoints
    # =========================================================================

    @logged_operation(level=logging.DEBUG)
    async def get_live_video(self, live_video_id: str) -> LiveVideo:
        return await self._fetch(
            "GET", _resource_path("live_videos", live_video_id), LiveVideo
        )

    @logged_operation(level=logging.DEBUG)
    def list_live_videos(self, applicant_id: str) -> ResourceIter[LiveVideo]:
        """Lazily list the live videos of an applicant."""
        _require_id("applicant", applicant_id)
        return self._iterate(
            _with_query("/live_videos", applicant_id=applicant_id), _LIVE_VIDEO_PAGES
        )

    @logged_operation(level=logging.DEBUG)
    async def download_live_video(self, live_video_id: str) -> LiveVideoDownload:
        """
        Download the recording of a live video.

        The body is returned byte for byte; no JSON parsing is attempted on
        a success response.
        """
        response = await self._send(
            "GET", _resource_path("live_videos", live_video_id, "download"), accept="*/*"
        )
        return LiveVideoDownload(
            data=decode_raw(response),
            content_type=response.header("Content-Type"),
        )
