"""
Request Validation Handler.

FastAPI rejects malformed request data (unparsable JSON, a missing body,
a bad query parameter) before any route runs. This handler reports those
rejections in the same ``{"error": {...}}`` envelope the abilities routes use,
as an ``invalid_input`` error with one violation per problem.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sparxstar_gluon.capabilities.base import CapabilityError, ErrorKind
from sparxstar_gluon.capabilities.schema import SchemaViolation, format_path
from sparxstar_gluon.core.logging_config import get_logger

logger = get_logger(__name__)


def _violation(error: dict) -> SchemaViolation:
    loc = list(error.get("loc", ()))
    if loc and loc[0] == "body":
        loc = loc[1:]
    return SchemaViolation(field=format_path(loc), message=error.get("msg", "Invalid value"))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Convert a request validation failure into a 400 ``invalid_input`` error.

    Args:
        request: The HTTP request that failed validation
        exc: The validation error raised by FastAPI

    Returns:
        JSONResponse with the error envelope
    """
    violations = [_violation(err) for err in exc.errors()]
    logger.info(f"Rejected {request.method} {request.url.path}: " + "; ".join(str(v) for v in violations))

    error = CapabilityError(
        kind=ErrorKind.invalid_input,
        message="Invalid request",
        details={"violations": [v.model_dump() for v in violations]},
    )
    return JSONResponse(status_code=400, content={"error": error.model_dump(mode="json")})
