"""Unit tests for the Logfire monitoring module.

Logfire itself is replaced with a mock module so no network calls or real
configuration happen.
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from sparxstar_gluon.core import monitoring

MODULE = "sparxstar_gluon.core.monitoring"


@pytest.fixture
def fake_logfire():
    fake = MagicMock()
    with patch.dict(sys.modules, {"logfire": fake}):
        yield fake


class TestInitializeLogfire:
    """Test initialize_logfire under different configurations."""

    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_disabled(self, mock_logger):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False):
            assert monitoring.initialize_logfire() is False
        mock_logger.info.assert_called_once()

    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_no_token(self, mock_logger):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", ""):
            assert monitoring.initialize_logfire() is False
        mock_logger.warning.assert_called_once()

    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_configures_and_instruments(self, mock_logger, fake_logfire):
        app = MagicMock()
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "token"):
            assert monitoring.initialize_logfire(app) is True

        fake_logfire.configure.assert_called_once()
        assert fake_logfire.configure.call_args.kwargs["token"] == "token"
        fake_logfire.instrument_pydantic_ai.assert_called_once()
        fake_logfire.instrument_httpx.assert_called_once()
        fake_logfire.instrument_fastapi.assert_called_once_with(app=app)

    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_skips_fastapi_without_app(self, mock_logger, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "token"):
            monitoring.initialize_logfire()

        fake_logfire.instrument_fastapi.assert_not_called()

    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_survives_instrumentation_failure(self, mock_logger, fake_logfire):
        fake_logfire.instrument_httpx.side_effect = RuntimeError("boom")
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "token"):
            assert monitoring.initialize_logfire() is True
        mock_logger.warning.assert_called()

    @patch(f"{MODULE}.logger")
    def test_initialize_logfire_handles_configure_error(self, mock_logger, fake_logfire):
        fake_logfire.configure.side_effect = RuntimeError("bad config")
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True), patch(f"{MODULE}.LOGFIRE_TOKEN", "token"):
            assert monitoring.initialize_logfire() is False
        mock_logger.error.assert_called_once()


class TestEventHelpers:
    """The log_* helpers forward to Logfire only when it is enabled."""

    def test_helpers_are_silent_when_disabled(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False):
            monitoring.log_api_request("GET", "/health", 200, 1.0)
            monitoring.log_capability_invocation("a/b", True, 2.0)
        fake_logfire.info.assert_not_called()

    def test_log_capability_invocation(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_capability_invocation("a/b", False, 2.0, "not_found")

        fake_logfire.info.assert_called_once()
        kwargs = fake_logfire.info.call_args.kwargs
        assert kwargs["capability"] == "a/b"
        assert kwargs["ok"] is False
        assert kwargs["error_kind"] == "not_found"

    def test_log_session_issued_never_includes_token(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_session_issued("__Host-SparxstarGluon-TOKEN", "functional")

        kwargs = fake_logfire.info.call_args.kwargs
        assert set(kwargs) == {"cookie_name", "consent_category"}

    def test_log_error_uses_error_level(self, fake_logfire):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_error("ValueError", "bad", {"path": "/x"})

        fake_logfire.error.assert_called_once_with("ValueError: bad", path="/x")

    def test_emit_swallows_logfire_failures(self, fake_logfire):
        fake_logfire.info.side_effect = RuntimeError("down")
        with patch(f"{MODULE}.LOGFIRE_ENABLED", True):
            monitoring.log_api_request("GET", "/health", 200, 1.0)
