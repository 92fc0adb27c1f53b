"""
Core utilities and configuration for SPARXSTAR Gluon.

This package provides core functionality including logging configuration,
host hook dispatch, the settings store and environment probing.
"""

from sparxstar_gluon.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
