"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Logfire initialization with various configurations
- Instrumentation failures and graceful degradation
- The structured events (API requests, archive runs, LLM calls)
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from trackprofit.core import monitoring


@pytest.fixture
def mock_logfire():
    """Provide a fake logfire module for the lazy import."""
    fake = MagicMock()
    with patch.dict(sys.modules, {"logfire": fake}):
        yield fake


@pytest.fixture(autouse=True)
def reset_initialized():
    with patch.object(monitoring, "_initialized", False):
        yield


class TestInitializeLogfire:
    """Test initialize_logfire with different configurations."""

    def test_disabled(self, mock_logfire):
        with patch.object(monitoring, "LOGFIRE_ENABLED", False):
            assert monitoring.initialize_logfire() is False

        mock_logfire.configure.assert_not_called()

    def test_enabled_without_token(self, mock_logfire):
        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(monitoring, "LOGFIRE_TOKEN", ""):
            assert monitoring.initialize_logfire() is False

        mock_logfire.configure.assert_not_called()

    def test_configures_and_instruments(self, mock_logfire):
        app = MagicMock()

        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(monitoring, "LOGFIRE_TOKEN", "tok"):
            assert monitoring.initialize_logfire(app) is True
            assert monitoring._initialized is True

        kwargs = mock_logfire.configure.call_args[1]
        assert kwargs["token"] == "tok"
        assert kwargs["service_name"] == monitoring.LOGFIRE_SERVICE_NAME
        mock_logfire.instrument_pydantic_ai.assert_called_once()
        mock_logfire.instrument_sqlalchemy.assert_called_once()
        mock_logfire.instrument_httpx.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_instrumentation_failure_is_not_fatal(self, mock_logfire):
        mock_logfire.instrument_sqlalchemy.side_effect = RuntimeError("not installed")

        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(monitoring, "LOGFIRE_TOKEN", "tok"):
            assert monitoring.initialize_logfire() is True

        mock_logfire.instrument_httpx.assert_called_once()
        mock_logfire.instrument_fastapi.assert_not_called()

    def test_configure_failure(self, mock_logfire):
        mock_logfire.configure.side_effect = RuntimeError("bad token")

        with patch.object(monitoring, "LOGFIRE_ENABLED", True), patch.object(monitoring, "LOGFIRE_TOKEN", "tok"):
            assert monitoring.initialize_logfire() is False


class TestEvents:
    """Test the structured event helpers."""

    def test_not_sent_when_not_initialized(self, mock_logfire):
        monitoring.log_api_request("GET", "/health", 200, 1.5)

        mock_logfire.info.assert_not_called()

    def test_api_request(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_api_request("GET", "/api/v1/kpis/monthly", 200, 12.5)

        mock_logfire.info.assert_called_once_with(
            "API request completed", method="GET", path="/api/v1/kpis/monthly", status_code=200, duration_ms=12.5
        )

    def test_archive_run_with_errors_is_a_warning(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_archive_run("2024-02", 4, 5, ["sales_data: disk full"])

        mock_logfire.warn.assert_called_once()
        assert mock_logfire.warn.call_args[1]["errors"] == ["sales_data: disk full"]

    def test_archive_run_success(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_archive_run("2024-02", 5, 5, [])

        mock_logfire.info.assert_called_once()

    def test_llm_call(self, mock_logfire):
        with patch.object(monitoring, "_initialized", True):
            monitoring.log_llm_call("insights", "openai:gpt-4o-mini", 850.0, user_id="user-1")

        kwargs = mock_logfire.info.call_args[1]
        assert kwargs["purpose"] == "insights"
        assert kwargs["user_id"] == "user-1"

    def test_send_failure_is_swallowed(self, mock_logfire):
        mock_logfire.info.side_effect = RuntimeError("exporter down")

        with patch.object(monitoring, "_initialized", True):
            monitoring.log_llm_call("chat", "openai:gpt-4o-mini", 10.0)
