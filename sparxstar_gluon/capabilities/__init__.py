"""Capability registry and capability execution pipeline.

 A *capability* is a named operation that external callers (REST clients, AI
 agents behind an MCP adapter) can discover and invoke.

 - Components register ``CategoryDescriptor`` and ``CapabilityDescriptor``
   records with a ``CapabilityRegistry`` during startup.
 - Discovery lists descriptors in registration order and serializes them
   without their callbacks.
 - ``CapabilityExecutor`` resolves a name, checks permission, validates input
   against its JSON-Schema and runs the execute callback.

 This package exports:

 - ``CapabilityDescriptor``/``CategoryDescriptor``: registration records.
 - ``CapabilityRegistry``/``CategoryRegistry``: name → descriptor mappings.
 - ``CapabilityExecutor``: async invocation with typed failures.
 - ``CallerContext``/``CancellationToken``/``InvocationResult``: invocation models.
 """

from .base import (
    CallerContext,
    CancellationToken,
    CapabilityDescriptor,
    CapabilityError,
    CategoryDescriptor,
    ErrorKind,
    InvocationResult,
)
from .executor import CapabilityExecutor
from .registry import CapabilityRegistry, CategoryRegistry
from .schema import JsonSchema, SchemaViolation, parse_schema, validate

__all__ = [
    "CallerContext",
    "CancellationToken",
    "CapabilityDescriptor",
    "CapabilityError",
    "CapabilityExecutor",
    "CapabilityRegistry",
    "CategoryDescriptor",
    "CategoryRegistry",
    "ErrorKind",
    "InvocationResult",
    "JsonSchema",
    "SchemaViolation",
    "parse_schema",
    "validate",
]
