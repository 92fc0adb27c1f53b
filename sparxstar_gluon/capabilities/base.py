from __future__ import annotations

"""Capability descriptors and invocation data models.

A capability is a named, externally discoverable operation with declared
input and output contracts and a permission gate.

- ``CapabilityDescriptor`` is what gets registered. Its callbacks are internal
  and never serialized; ``to_public_dict`` is the discovery shape.
- ``CallerContext`` carries the caller identity resolved by the host's
  authentication layer.
- ``CancellationToken`` is threaded into execute callbacks; honouring it is
  best-effort.
- ``InvocationResult`` is the only thing ``CapabilityExecutor.invoke`` returns.
"""

import asyncio
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Mapping, Optional, Union

from pydantic import Field, field_validator, model_validator

from sparxstar_gluon.errors import CancelledByCaller, InvalidCapabilityName
from sparxstar_gluon.schemas.base import BaseSchema

from .schema import parse_schema

_NAME_RE = re.compile(r"^[a-z0-9-]+/[a-z0-9-]+$")
_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class CallerContext:
    """Identity of the party invoking a capability.

    Attributes
    ----------
    user_id:
        Host user identifier, ``None`` for anonymous callers.
    capabilities:
        Host permissions granted to the caller (e.g. ``edit_posts``).
    """

    user_id: Optional[str] = None
    capabilities: FrozenSet[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities

    @classmethod
    def anonymous(cls) -> "CallerContext":
        return cls()


class CancellationToken:
    """Best-effort cancellation signal shared by the caller and the callback."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledByCaller()

    async def wait(self) -> None:
        await self._event.wait()


PermissionCallback = Callable[[CallerContext], Union[bool, Awaitable[bool]]]
ExecuteCallback = Callable[[Dict[str, Any], CancellationToken], Any]


class CategoryDescriptor(BaseSchema):
    """A group of capabilities shown together to callers."""

    name: str = Field(description="Unique slug, e.g. 'ai-content-tools'.")
    label: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def _slug(cls, v: str) -> str:
        if not _SLUG_RE.match(v):
            raise ValueError(f"category name must be a lowercase slug: {v!r}")
        return v


def _allow_all(_: CallerContext) -> bool:
    return True


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Registration record for one capability.

    ``input_schema`` and ``output_schema`` may be given as JSON-Schema
    mappings; they are checked and wrapped in ``JsonSchema`` on construction.
    ``execute_callback`` receives the validated input and a
    ``CancellationToken`` and may be a plain or an async function. It signals a
    domain failure by raising or returning ``CapabilityFailure``.
    """

    name: str
    label: str
    description: str
    category: str
    execute_callback: ExecuteCallback
    permission_callback: PermissionCallback = _allow_all
    input_schema: Optional[Any] = None
    output_schema: Optional[Any] = None
    show_in_rest: bool = False
    timeout: Optional[float] = None
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not _NAME_RE.match(self.name):
            raise InvalidCapabilityName(self.name)
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        object.__setattr__(self, "input_schema", parse_schema(self.input_schema))
        object.__setattr__(self, "output_schema", parse_schema(self.output_schema))

    @property
    def namespace(self) -> str:
        return self.name.split("/", 1)[0]

    def to_public_dict(self) -> Dict[str, Any]:
        """Discovery shape; callbacks are never included."""
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "category": self.category,
            "input_schema": self.input_schema.to_json_schema() if self.input_schema is not None else None,
            "output_schema": self.output_schema.to_json_schema() if self.output_schema is not None else None,
            "show_in_rest": self.show_in_rest,
        }


class ErrorKind(str, Enum):
    not_found = "not_found"
    permission_denied = "permission_denied"
    invalid_input = "invalid_input"
    execution_failed = "execution_failed"


class CapabilityError(BaseSchema):
    kind: ErrorKind
    message: str
    details: Optional[Dict[str, Any]] = None


class InvocationResult(BaseSchema):
    """Structured outcome of ``CapabilityExecutor.invoke``."""

    ok: bool
    result: Any = None
    error: Optional[CapabilityError] = None

    @model_validator(mode="after")
    def _error_matches_ok(self) -> "InvocationResult":
        if self.ok == (self.error is not None):
            raise ValueError("a failed result carries an error and a successful one does not")
        return self

    @classmethod
    def success(cls, result: Any) -> "InvocationResult":
        return cls(ok=True, result=result)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, details: Optional[Dict[str, Any]] = None) -> "InvocationResult":
        return cls(ok=False, error=CapabilityError(kind=kind, message=message, details=details))

    def to_response(self) -> Dict[str, Any]:
        """Wire shape: ``{"result": ...}`` or ``{"error": {kind, message, details?}}``."""
        if self.error is None:
            return {"result": self.result}
        return {"error": self.error.model_dump(mode="json", exclude_none=True)}
