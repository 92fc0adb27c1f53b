"""
Exception handlers for the SPARXSTAR Gluon server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .global_handler import global_exception_handler, setup_exception_handlers
from .validation_handler import request_validation_exception_handler

__all__ = [
    "global_exception_handler",
    "request_validation_exception_handler",
    "setup_exception_handlers",
]
