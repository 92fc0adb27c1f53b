"""
SPARXSTAR Gluon Server Package.

This package exposes the plugin over HTTP: capability discovery and
invocation, admin notices and the MCP server description. Every request
passes through the host lifecycle middleware, which fires ``init`` so the
session issuer can attach its cookie.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Application-wide exception handlers.
    middleware: Request lifecycle middleware.
    services: FastAPI dependencies.
"""
