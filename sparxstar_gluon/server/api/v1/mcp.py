"""
MCP Server API Endpoint.

Describes the MCP server an adapter should create to expose the plugin's
capabilities to external agents.
"""

from typing import List

from fastapi import APIRouter

from sparxstar_gluon.abilities.ai_manager import McpServerDescriptor
from sparxstar_gluon.server.services.deps import PluginDep

router = APIRouter()


@router.get(
    "/servers",
    response_model=List[McpServerDescriptor],
    summary="List MCP Servers",
    description="Describe the MCP servers this plugin provides. Empty when the abilities subsystem is unavailable.",
)
async def list_mcp_servers(plugin: PluginDep) -> List[McpServerDescriptor]:
    if not plugin.ai_manager.enabled:
        return []
    return [plugin.ai_manager.mcp_server()]
