"""
Ability Categories API Endpoints.

This module provides read-only access to the registered capability categories.
"""

from typing import List

from fastapi import APIRouter

from sparxstar_gluon.server.schemas import CategoryRead
from sparxstar_gluon.server.services.deps import PluginDep

router = APIRouter()


@router.get(
    "",
    response_model=List[CategoryRead],
    summary="List Ability Categories",
    description="Retrieve every registered capability category in registration order.",
    response_description="A list of categories.",
)
async def list_categories(plugin: PluginDep) -> List[CategoryRead]:
    return [CategoryRead(**c.model_dump()) for c in plugin.registry.categories.list()]
