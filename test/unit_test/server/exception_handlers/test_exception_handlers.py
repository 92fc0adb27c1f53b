"""
Unit tests for server exception handlers.

Tests cover the JSON body of the global handler, the logged request context
and handler registration.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sparxstar_gluon.server.exception_handlers import (
    request_validation_exception_handler,
    setup_exception_handlers,
)
from sparxstar_gluon.server.exception_handlers.global_handler import (
    global_exception_handler,
)

MODULE = "sparxstar_gluon.server.exception_handlers.global_handler"


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.fixture
    def mock_request(self):
        """Create a mock request object."""
        request = Mock(spec=Request)
        request.method = "POST"
        request.url.path = "/wp-abilities/v1/abilities/sparxstar-gluon/summarize-content/run"
        request.query_params = {}
        request.client = Mock()
        request.client.host = "127.0.0.1"
        return request

    @pytest.mark.asyncio
    async def test_exception_handler_returns_json_500(self, mock_request):
        exc = RuntimeError("Test error")

        with patch(f"{MODULE}.logger"), patch(f"{MODULE}.log_error"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = json.loads(response.body.decode())
        assert body["detail"] == "Internal server error"
        assert body["error_type"] == "RuntimeError"
        assert isinstance(body["error_id"], int)

    @pytest.mark.asyncio
    async def test_exception_handler_logs_request_context(self, mock_request):
        """Test that the logged record carries the request context."""
        exc = ValueError("Test error")

        with patch(f"{MODULE}.logger") as mock_logger, patch(f"{MODULE}.log_error"):
            await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert "Test error" in call_args[0][0]
        assert call_args[1]["exc_info"] is True
        extra = call_args[1]["extra"]
        assert extra["method"] == "POST"
        assert extra["path"] == mock_request.url.path
        assert extra["client"] == "127.0.0.1"
        assert extra["error_type"] == "ValueError"
        assert isinstance(extra["traceback"], str)

    @pytest.mark.asyncio
    async def test_exception_handler_handles_missing_client(self, mock_request):
        mock_request.client = None

        with patch(f"{MODULE}.logger") as mock_logger, patch(f"{MODULE}.log_error"):
            await global_exception_handler(mock_request, RuntimeError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"

    @pytest.mark.asyncio
    async def test_exception_handler_reports_to_monitoring(self, mock_request):
        exc = KeyError("missing_key")

        with patch(f"{MODULE}.logger"), patch(f"{MODULE}.log_error") as mock_log_error:
            await global_exception_handler(mock_request, exc)

        args = mock_log_error.call_args[0]
        assert args[0] == "KeyError"
        assert args[2]["error_id"] == id(exc)

    @pytest.mark.asyncio
    async def test_exception_handler_error_id_is_unique(self, mock_request):
        """Each exception gets its own error ID."""
        with patch(f"{MODULE}.logger"), patch(f"{MODULE}.log_error"):
            response1 = await global_exception_handler(mock_request, RuntimeError("Error 1"))
            response2 = await global_exception_handler(mock_request, RuntimeError("Error 2"))

        body1 = json.loads(response1.body.decode())
        body2 = json.loads(response2.body.decode())
        assert body1["error_id"] != body2["error_id"]


class TestRequestValidationHandler:
    @pytest.fixture
    def mock_request(self):
        request = Mock(spec=Request)
        request.method = "POST"
        request.url.path = "/wp-abilities/v1/abilities/sparxstar-gluon/summarize-content/run"
        return request

    @pytest.mark.asyncio
    async def test_returns_invalid_input_envelope(self, mock_request):
        exc = RequestValidationError(
            [
                {"type": "missing", "loc": ("body",), "msg": "Field required", "input": None},
                {"type": "int_parsing", "loc": ("query", "page"), "msg": "Input should be a valid integer"},
            ]
        )

        with patch("sparxstar_gluon.server.exception_handlers.validation_handler.logger"):
            response = await request_validation_exception_handler(mock_request, exc)

        assert response.status_code == 400
        body = json.loads(response.body.decode())
        assert body == {
            "error": {
                "kind": "invalid_input",
                "message": "Invalid request",
                "details": {
                    "violations": [
                        {"field": "", "message": "Field required"},
                        {"field": "query.page", "message": "Input should be a valid integer"},
                    ]
                },
            }
        }


class TestSetupExceptionHandlers:
    """Test suite for setup_exception_handlers function."""

    def test_setup_exception_handlers_registers_handler(self):
        app = FastAPI()

        with patch(f"{MODULE}.logger") as mock_logger:
            setup_exception_handlers(app)

        assert Exception in app.exception_handlers
        assert RequestValidationError in app.exception_handlers
        assert "Exception handlers registered" in mock_logger.debug.call_args[0][0]

    def test_setup_exception_handlers_with_existing_handlers(self):
        """Test that setup_exception_handlers keeps existing handlers."""
        app = FastAPI()

        @app.exception_handler(ValueError)
        async def value_error_handler(request, exc):
            return JSONResponse(status_code=400, content={"error": "value error"})

        with patch(f"{MODULE}.logger"):
            setup_exception_handlers(app)

        assert ValueError in app.exception_handlers
        assert Exception in app.exception_handlers
