"""
Plugin Dependencies.

Provides the application's ``GluonPlugin`` and the resolved caller identity
for API endpoints.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from sparxstar_gluon.capabilities.base import CallerContext
from sparxstar_gluon.plugin import GluonPlugin


def get_plugin(request: Request) -> GluonPlugin:
    return request.app.state.plugin


def get_caller(
    x_gluon_user: Annotated[Optional[str], Header()] = None,
    x_gluon_capabilities: Annotated[Optional[str], Header()] = None,
) -> CallerContext:
    """Build the caller from the identity headers set by the host authentication layer.

    ``X-Gluon-Capabilities`` is a comma-separated list; no headers means an
    anonymous caller.
    """
    granted = frozenset(c.strip() for c in (x_gluon_capabilities or "").split(",") if c.strip())
    return CallerContext(user_id=x_gluon_user or None, capabilities=granted)


PluginDep = Annotated[GluonPlugin, Depends(get_plugin)]
CallerDep = Annotated[CallerContext, Depends(get_caller)]
