"""
Middleware modules for the SPARXSTAR Gluon server.

This package contains the middleware that maps each HTTP request onto one
host request cycle.
"""

from .host_lifecycle import HostLifecycleMiddleware

__all__ = ["HostLifecycleMiddleware"]
