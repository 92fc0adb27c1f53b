"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
These schemas define the interface contract between the client and the server.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sparxstar_gluon.capabilities.base import CapabilityError


class CapabilityRead(BaseModel):
    """Public description of a registered capability."""

    name: str = Field(..., description="Capability name in <namespace>/<action> form.")
    label: str
    description: str
    category: str
    input_schema: Optional[Dict[str, Any]] = Field(default=None, description="JSON-schema subset for the input.")
    output_schema: Optional[Dict[str, Any]] = Field(default=None, description="JSON-schema subset for the output.")
    show_in_rest: bool = False


class CategoryRead(BaseModel):
    name: str
    label: str
    description: str = ""


class CapabilityRun(BaseModel):
    """
    Schema for invoking a capability.

    ``input`` is passed through untouched; the executor checks permission
    before validating it against the capability's input schema.
    """

    input: Any = Field(
        default=None,
        description="Capability input payload.",
        examples=[{"post_id": 123}],
    )

    model_config = ConfigDict(json_schema_extra={"example": {"input": {"post_id": 123}}})


class CapabilityRunResult(BaseModel):
    result: Any = None


class CapabilityRunError(BaseModel):
    error: CapabilityError


class NoticeRead(BaseModel):
    level: str
    message: str
    link: Optional[str] = None


class NoticeList(BaseModel):
    notices: List[NoticeRead] = Field(default_factory=list)
