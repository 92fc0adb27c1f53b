"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter

from sparxstar_gluon.server.services.deps import PluginDep

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check(plugin: PluginDep):
    """
    Health check endpoint.

    Reports ``degraded`` when the plugin did not boot.
    """
    return {"status": "ok" if plugin.booted else "degraded"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version(plugin: PluginDep):
    return {"version": plugin.version, "schema_version": "v1"}
