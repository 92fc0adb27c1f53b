"""
Admin Notices API Endpoint.

Startup problems that disabled part of the plugin (unsupported runtime,
missing abilities subsystem, missing MCP adapter) are collected as admin
notices; this endpoint renders them for the host's admin screen.
"""

from fastapi import APIRouter

from sparxstar_gluon.server.schemas import NoticeList, NoticeRead
from sparxstar_gluon.server.services.deps import PluginDep

router = APIRouter()


@router.get(
    "/notices",
    response_model=NoticeList,
    summary="List Admin Notices",
    description="Retrieve the admin notices raised while the plugin started.",
)
async def list_notices(plugin: PluginDep) -> NoticeList:
    return NoticeList(
        notices=[NoticeRead(level=n.level.value, message=n.message, link=n.link) for n in plugin.notices.all()]
    )
