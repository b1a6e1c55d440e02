"""Tests for URL and error message sanitization."""

from onfido_client.common.security import sanitize_error_message, sanitize_url


class TestSanitizeUrl:
    def test_sensitive_params_redacted(self):
        url = "https://files.onfido.test/video.mp4?X-Amz-Signature=abc123&page=2"

        assert sanitize_url(url) == (
            "https://files.onfido.test/video.mp4?X-Amz-Signature=[REDACTED]&page=2"
        )

    def test_url_without_query_unchanged(self):
        url = "https://api.onfido.test/v3.6/checks/abc"

        assert sanitize_url(url) == url

    def test_relative_path(self):
        assert sanitize_url("/applicants?sdk_token=xyz") == "/applicants?sdk_token=[REDACTED]"

    def test_empty(self):
        assert sanitize_url("") == ""

    def test_unparseable_url_returned_as_is(self):
        assert sanitize_url("http://[bad") == "http://[bad"


class TestSanitizeErrorMessage:
    def test_bearer_token_redacted(self):
        msg = "401 for request with Authorization: Bearer api_live.abcdef123"

        result = sanitize_error_message(msg)

        assert "abcdef123" not in result
        assert "[REDACTED]" in result

    def test_embedded_url_sanitized(self):
        msg = "Timeout fetching https://files.onfido.test/d?signature=s3cret&x=1"

        result = sanitize_error_message(msg)

        assert "s3cret" not in result
        assert "x=1" in result

    def test_truncated(self):
        result = sanitize_error_message("x" * 1000, max_length=100)

        assert len(result) == 100
        assert result.endswith("...")

    def test_plain_message_unchanged(self):
        assert sanitize_error_message("things went bad") == "things went bad"

    def test_empty(self):
        assert sanitize_error_message("") == ""
