"""Unit tests for retry logic and error classification."""
import pytest
from unittest.mock import MagicMock

from program_ingestor_api.ai.retry import is_retryable_error, retry_sync_call


class StatusError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


class TestIsRetryableError:

    @pytest.mark.parametrize(
        "error_message",
        [
            "Rate limit exceeded",
            "Error code: 429",
            "Server error: 500",
            "Error code: 503 - Service temporarily unavailable",
            "Anthropic API is overloaded",
            "Request timed out",
            "Connection reset by peer",
            "Temporary failure in name resolution",
        ],
    )
    def test_transient_messages_are_retryable(self, error_message):
        assert is_retryable_error(Exception(error_message)) is True

    @pytest.mark.parametrize(
        "error_message",
        [
            "Error 401: Unauthorized",
            "Error code: 400 - Invalid request",
            "Invalid API key provided",
            "Quota exceeded for this month",
            "Something completely unexpected happened",
        ],
    )
    def test_permanent_messages_are_not_retryable(self, error_message):
        assert is_retryable_error(Exception(error_message)) is False

    @pytest.mark.parametrize("status_code,expected", [(429, True), (503, True), (400, False), (401, False)])
    def test_status_code_attribute_wins(self, status_code, expected):
        assert is_retryable_error(StatusError("provider error", status_code)) is expected

    def test_timeout_exception_type(self, timeout_error):
        assert is_retryable_error(timeout_error) is True

    def test_fixture_errors(self, rate_limit_error, auth_error):
        assert is_retryable_error(rate_limit_error) is True
        assert is_retryable_error(auth_error) is False


class TestRetrySyncCall:

    def test_successful_call_returns_immediately(self):
        mock_func = MagicMock(return_value="success")

        assert retry_sync_call(mock_func, max_attempts=3) == "success"
        assert mock_func.call_count == 1

    def test_retryable_error_retries_up_to_max_attempts(self):
        mock_func = MagicMock(side_effect=Exception("Error 503: Service Unavailable"))

        with pytest.raises(Exception, match="503"):
            retry_sync_call(mock_func, max_attempts=3, min_wait_seconds=0, max_wait_seconds=0)

        assert mock_func.call_count == 3

    def test_non_retryable_error_fails_immediately(self):
        mock_func = MagicMock(side_effect=Exception("Error 401: Unauthorized"))

        with pytest.raises(Exception, match="401"):
            retry_sync_call(mock_func, max_attempts=3, min_wait_seconds=0, max_wait_seconds=0)

        assert mock_func.call_count == 1

    def test_recovers_after_transient_error(self):
        mock_func = MagicMock(side_effect=[Exception("Rate limit exceeded"), "ok"])

        assert retry_sync_call(mock_func, "arg", min_wait_seconds=0, max_wait_seconds=0) == "ok"
        mock_func.assert_called_with("arg")
