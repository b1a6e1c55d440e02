"""Tests for structured logging helpers."""

import logging

import pytest

from onfido_client.common.exceptions import ForbiddenError, TransportError
from onfido_client.common.logging import (
    LoggedClass,
    log_exception,
    log_with_context,
    logged_operation,
)


class _Component(LoggedClass):
    log_component = "widget"

    def __init__(self):
        self.base_url = "https://api.onfido.test/v3.6"
        super().__init__()

    @logged_operation(level=logging.INFO)
    async def fetch(self, fail=False):
        if fail:
            raise ForbiddenError("HTTP 403: things went bad", status_code=403)
        return "ok"

    @logged_operation(level=logging.INFO, operation_name="build_list")
    def listing(self):
        return [1, 2]


class TestLogHelpers:
    def test_log_with_context_sets_extra(self, caplog):
        logger = logging.getLogger("onfido_client.test")

        with caplog.at_level(logging.DEBUG):
            log_with_context(logger, logging.INFO, "Fetched", api_method="GET", http_status=200)

        record = caplog.records[-1]
        assert record.api_method == "GET"
        assert record.http_status == 200

    def test_log_exception_adds_category_and_status(self, caplog):
        logger = logging.getLogger("onfido_client.test")
        error = ForbiddenError("HTTP 403: token=abc123 rejected", status_code=403)

        with caplog.at_level(logging.DEBUG):
            log_exception(logger, error, "Failed", include_traceback=False)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_category == "permanent"
        assert record.http_status == 403
        assert "abc123" not in record.error_message
        assert record.exc_info is None

    def test_log_exception_with_traceback(self, caplog):
        logger = logging.getLogger("onfido_client.test")

        with caplog.at_level(logging.DEBUG):
            log_exception(logger, TransportError("down"), "Failed", level=logging.WARNING)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.exc_info is not None
        assert record.error_category == "transient"


class TestLoggedClass:
    def test_logger_name_uses_component(self):
        component = _Component()

        assert component._logger.name == f"{__name__}.widget"

    def test_instance_context_attached(self, caplog):
        component = _Component()

        with caplog.at_level(logging.DEBUG):
            component._log(logging.INFO, "hello", extra_field=1)

        record = caplog.records[-1]
        assert record.base_url == "https://api.onfido.test/v3.6"
        assert record.extra_field == 1


class TestLoggedOperation:
    @pytest.mark.asyncio
    async def test_async_success_logged(self, caplog):
        with caplog.at_level(logging.DEBUG):
            assert await _Component().fetch() == "ok"

        assert any(r.getMessage() == "_Component.fetch completed" for r in caplog.records)

    @pytest.mark.asyncio
    async def test_async_failure_logged_and_reraised(self, caplog):
        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ForbiddenError):
                await _Component().fetch(fail=True)

        failed = [r for r in caplog.records if r.getMessage() == "_Component.fetch failed"]
        assert len(failed) == 1
        assert failed[0].http_status == 403

    def test_sync_operation_name_override(self, caplog):
        with caplog.at_level(logging.DEBUG):
            assert _Component().listing() == [1, 2]

        assert any(
            r.getMessage() == "_Component.build_list completed" for r in caplog.records
        )
