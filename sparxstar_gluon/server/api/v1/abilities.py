"""
Abilities API Endpoints.

This module exposes the capability registry over HTTP:

- discovery of capabilities marked ``show_in_rest``,
- invocation through ``CapabilityExecutor``, mapping each failure kind onto
  an HTTP status code.

The caller identity comes from the ``X-Gluon-User`` and
``X-Gluon-Capabilities`` headers set by the host authentication layer.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from sparxstar_gluon.capabilities.base import ErrorKind, InvocationResult
from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.server.schemas import CapabilityRead, CapabilityRun, CapabilityRunResult
from sparxstar_gluon.server.services.deps import CallerDep, PluginDep

logger = get_logger(__name__)

router = APIRouter()

ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.permission_denied: status.HTTP_403_FORBIDDEN,
    ErrorKind.invalid_input: status.HTTP_400_BAD_REQUEST,
    ErrorKind.execution_failed: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.get(
    "",
    response_model=List[CapabilityRead],
    summary="List Abilities",
    description="List the capabilities exposed over REST, optionally filtered by category, in registration order.",
    response_description="A list of capability descriptions.",
)
async def list_abilities(
    plugin: PluginDep,
    category: Optional[str] = Query(default=None, description="Only return capabilities in this category."),
) -> List[CapabilityRead]:
    descriptors = plugin.registry.list(category=category, visible_only=True)
    return [CapabilityRead(**d.to_public_dict()) for d in descriptors]


@router.get(
    "/{namespace}/{action}",
    response_model=CapabilityRead,
    summary="Get Ability",
    description="Retrieve the description of a single capability.",
    responses={404: {"description": "Capability not found or not exposed over REST"}},
)
async def get_ability(namespace: str, action: str, plugin: PluginDep) -> CapabilityRead:
    descriptor = plugin.registry.get(f"{namespace}/{action}")
    if descriptor is None or not descriptor.show_in_rest:
        raise HTTPException(status_code=404, detail=f"Capability not found: '{namespace}/{action}'")
    return CapabilityRead(**descriptor.to_public_dict())


@router.post(
    "/{namespace}/{action}/run",
    response_model=CapabilityRunResult,
    summary="Run Ability",
    description="Invoke a capability with the given input on behalf of the calling user.",
    response_description="The capability result.",
    responses={
        400: {"description": "Input does not match the capability's input schema"},
        403: {"description": "Caller is not permitted to invoke the capability"},
        404: {"description": "Capability not found or not exposed over REST"},
        500: {"description": "Capability failed, timed out or was cancelled"},
    },
)
async def run_ability(
    namespace: str,
    action: str,
    body: CapabilityRun,
    plugin: PluginDep,
    caller: CallerDep,
):
    """
    Run a capability.

    Failures come back as ``{"error": {"kind", "message", "details"}}`` with the
    status code matching ``kind``.
    """
    name = f"{namespace}/{action}"
    descriptor = plugin.registry.get(name)
    if descriptor is not None and not descriptor.show_in_rest:
        outcome = InvocationResult.failure(ErrorKind.not_found, f"Capability not found: '{name}'")
    else:
        outcome = await plugin.executor.invoke(name, body.input, caller)
    error = outcome.error
    if error is None:
        return outcome.to_response()

    logger.info(f"Ability run {name} failed for {caller.user_id!r}: {error.kind.value}")
    return JSONResponse(status_code=ERROR_STATUS[error.kind], content=outcome.to_response())
