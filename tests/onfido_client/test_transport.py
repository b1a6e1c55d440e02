"""
Tests for Transport with a mocked aiohttp session.

Test coverage:
- Relative path vs absolute URL resolution
- Auth, accept and content-type headers
- Response capture (status, body, headers, Link relations)
- Timeout, connection error, invalid URL and cancellation handling
- Session ownership
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from onfido_client.common.exceptions import (
    InvalidRequestError,
    RequestTimeoutError,
    TransportError,
)
from onfido_client.config import ClientConfig
from onfido_client.transport import Request, Transport, is_absolute_url
from tests.onfido_client.fakes import API_TOKEN, ENDPOINT


def make_session(status=200, body=b"{}", headers=None, links=None):
    """Mock aiohttp session whose request() yields one canned response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.read = AsyncMock(return_value=body)
    mock_response.headers = headers or {"Content-Type": "application/json"}
    mock_response.links = links or {}

    mock_session = MagicMock(spec=aiohttp.ClientSession)
    mock_session.closed = False
    mock_session.close = AsyncMock()
    mock_session.request.return_value.__aenter__.return_value = mock_response
    mock_session.request.return_value.__aexit__.return_value = False
    return mock_session


@pytest.fixture
def config():
    return ClientConfig(api_token=API_TOKEN, endpoint=ENDPOINT + "/", timeout_seconds=5)


class TestUrlResolution:
    """Test relative and absolute request targets."""

    def test_relative_path_joined_to_endpoint(self, config):
        transport = Transport(config, session=make_session())

        assert transport.resolve_url("/checks/abc") == f"{ENDPOINT}/checks/abc"
        assert transport.resolve_url("checks/abc") == f"{ENDPOINT}/checks/abc"

    def test_absolute_url_used_verbatim(self, config):
        transport = Transport(config, session=make_session())
        href = "https://files.onfido.test/v3.6/documents/doc-1/download?sig=abc"

        assert transport.resolve_url(href) == href

    def test_empty_path_rejected(self, config):
        transport = Transport(config, session=make_session())

        with pytest.raises(InvalidRequestError):
            transport.resolve_url("")

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("https://api.onfido.com/v3.6/checks", True),
            ("http://localhost:8080/checks", True),
            ("/checks?applicant_id=1", False),
            ("checks", False),
        ],
    )
    def test_is_absolute_url(self, path, expected):
        assert is_absolute_url(path) is expected


class TestSend:
    """Test request construction and response capture."""

    @pytest.mark.asyncio
    async def test_get_sends_auth_and_no_content_type(self, config):
        session = make_session(body=b'{"id": "chk-1"}')
        transport = Transport(config, session=session)

        response = await transport.send(Request("GET", "/checks/chk-1"))

        args, kwargs = session.request.call_args
        assert args == ("GET", f"{ENDPOINT}/checks/chk-1")
        assert kwargs["headers"]["Authorization"] == f"Bearer {API_TOKEN}"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert "Content-Type" not in kwargs["headers"]
        assert kwargs["data"] is None
        assert kwargs["timeout"].total == 5

        assert response.status == 200
        assert response.ok is True
        assert response.body == b'{"id": "chk-1"}'
        assert response.url == f"{ENDPOINT}/checks/chk-1"

    @pytest.mark.asyncio
    async def test_body_gets_json_content_type(self, config):
        session = make_session(status=201)
        transport = Transport(config, session=session)

        await transport.send(Request("POST", "/applicants", body=b'{"first_name": "Jane"}'))

        _, kwargs = session.request.call_args
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["data"] == b'{"first_name": "Jane"}'

    @pytest.mark.asyncio
    async def test_content_type_and_accept_overrides(self, config):
        session = make_session()
        transport = Transport(config, session=session)

        await transport.send(Request(
            "POST", "/uploads", body=b"raw", content_type="application/octet-stream",
            accept="*/*",
        ))

        _, kwargs = session.request.call_args
        assert kwargs["headers"]["Content-Type"] == "application/octet-stream"
        assert kwargs["headers"]["Accept"] == "*/*"

    @pytest.mark.asyncio
    async def test_error_status_returned_not_raised(self, config):
        """Status classification belongs to the envelope decoder."""
        session = make_session(status=403, body=b'{"error": "things went bad"}')
        transport = Transport(config, session=session)

        response = await transport.send(Request("GET", "/checks/x"))

        assert response.status == 403
        assert response.ok is False

    @pytest.mark.asyncio
    async def test_link_relations_captured(self, config):
        next_url = f"{ENDPOINT}/applicants?page=2"
        session = make_session(links={"next": {"url": next_url}})
        transport = Transport(config, session=session)

        response = await transport.send(Request("GET", "/applicants"))

        assert response.next_link == next_url

    @pytest.mark.asyncio
    async def test_case_insensitive_header_lookup(self, config):
        session = make_session(headers={"content-type": "video/mp4"})
        transport = Transport(config, session=session)

        response = await transport.send(Request("GET", "/live_videos/v/download"))

        assert response.header("Content-Type") == "video/mp4"
        assert response.header("Retry-After") is None

    @pytest.mark.asyncio
    async def test_one_round_trip_per_call(self, config):
        session = make_session()
        transport = Transport(config, session=session)

        await transport.send(Request("GET", "/checks/a"))
        await transport.send(Request("GET", "/checks/b"))

        assert session.request.call_count == 2


class TestSendFailures:
    """Test network failure classification. Nothing is retried."""

    @pytest.mark.asyncio
    async def test_timeout(self, config):
        session = make_session()
        session.request.side_effect = asyncio.TimeoutError()
        transport = Transport(config, session=session)

        with pytest.raises(RequestTimeoutError) as exc_info:
            await transport.send(Request("GET", "/checks/x"))

        assert exc_info.value.is_retryable is True
        assert session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_connection_error(self, config):
        session = make_session()
        session.request.side_effect = aiohttp.ClientConnectionError("connection refused")
        transport = Transport(config, session=session)

        with pytest.raises(TransportError) as exc_info:
            await transport.send(Request("GET", "/checks/x"))

        assert isinstance(exc_info.value.cause, aiohttp.ClientConnectionError)
        assert session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_unparseable_url_rejected_before_sending(self, config):
        session = make_session()
        transport = Transport(config, session=session)

        with pytest.raises(InvalidRequestError):
            await transport.send(Request("GET", "http://[bad"))

        assert session.request.call_count == 0

    @pytest.mark.asyncio
    async def test_invalid_url_from_aiohttp(self, config):
        session = make_session()
        session.request.side_effect = aiohttp.InvalidURL("https://bad host")
        transport = Transport(config, session=session)

        with pytest.raises(InvalidRequestError):
            await transport.send(Request("GET", "/checks/x"))

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, config):
        session = make_session()
        session.request.return_value.__aenter__.side_effect = asyncio.CancelledError()
        transport = Transport(config, session=session)

        with pytest.raises(asyncio.CancelledError):
            await transport.send(Request("GET", "/checks/x"))


class TestSessionLifecycle:
    """Test session creation and ownership."""

    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self, config):
        session = make_session()
        transport = Transport(config, session=session)

        await transport.close()

        session.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_owned_session_created_and_closed(self, config):
        async with Transport(config) as transport:
            session = transport._session
            assert isinstance(session, aiohttp.ClientSession)
            assert not session.closed

        assert session.closed
        assert transport._session is None

