from __future__ import annotations

"""Capability execution pipeline.

``CapabilityExecutor.invoke`` resolves a capability by name and runs it
through four gates, in this order:

1. lookup (``not_found``),
2. permission check (``permission_denied``), evaluated before the payload is
   looked at so unauthorized callers learn nothing about the input schema,
3. structural input validation (``invalid_input``),
4. execution (``execution_failed``, including timeouts and cancellation).

A successful output is checked against the output schema; mismatches are only
logged because the output schema documents the contract for agents rather
than enforcing it. The executor never retries.
"""

import asyncio
import inspect
import time
from typing import Any, Dict, Optional

from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.core.monitoring import log_capability_invocation
from sparxstar_gluon.errors import CancelledByCaller, CapabilityFailure

from .base import (
    CallerContext,
    CancellationToken,
    CapabilityDescriptor,
    ErrorKind,
    InvocationResult,
)
from .registry import CapabilityRegistry
from .schema import validate

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class CapabilityExecutor:
    """Runs registered capabilities and returns structured results.

    Args:
        registry: Registry used for name lookups.
        default_timeout: Seconds allowed per invocation when the descriptor
            does not set its own ``timeout``.
        validate_output: Check successful outputs against ``output_schema``.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        *,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        validate_output: bool = True,
    ) -> None:
        self._registry = registry
        self._default_timeout = default_timeout
        self._validate_output = validate_output

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry

    async def invoke(
        self,
        name: str,
        input: Any,
        caller: CallerContext,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> InvocationResult:
        """Invoke capability ``name`` with ``input`` on behalf of ``caller``."""
        start = time.perf_counter()
        result = await self._invoke(name, input, caller, cancel_token)
        duration_ms = (time.perf_counter() - start) * 1000
        error_kind = result.error.kind.value if result.error is not None else None
        log_capability_invocation(name, result.ok, duration_ms, error_kind)
        logger.debug(f"Capability '{name}' finished ok={result.ok} in {duration_ms:.1f}ms")
        return result

    async def _invoke(
        self,
        name: str,
        input: Any,
        caller: CallerContext,
        cancel_token: Optional[CancellationToken],
    ) -> InvocationResult:
        descriptor = self._registry.get(name)
        if descriptor is None:
            return InvocationResult.failure(ErrorKind.not_found, f"Capability not found: '{name}'")

        if not await self._is_permitted(descriptor, caller):
            return InvocationResult.failure(
                ErrorKind.permission_denied, f"Caller is not permitted to invoke '{name}'"
            )

        payload = {} if input is None else input
        violations = validate(descriptor.input_schema, payload)
        if violations:
            return InvocationResult.failure(
                ErrorKind.invalid_input,
                "Invalid input: " + "; ".join(str(v) for v in violations),
                {"violations": [v.model_dump() for v in violations]},
            )

        token = cancel_token if cancel_token is not None else CancellationToken()
        if token.cancelled:
            return self._cancelled(name)

        timeout = descriptor.timeout or self._default_timeout
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        try:
            output = await asyncio.wait_for(self._run(descriptor, payload, token), timeout=timeout)
        except asyncio.TimeoutError as e:
            # A TimeoutError raised by the callback itself arrives before the deadline.
            if loop.time() < deadline:
                return self._unexpected_failure(name, e)
            logger.warning(f"Capability '{name}' timed out after {timeout}s")
            return InvocationResult.failure(
                ErrorKind.execution_failed,
                f"Capability '{name}' timed out after {timeout}s",
                {"reason": "timeout", "timeout": timeout},
            )
        except CancelledByCaller:
            return self._cancelled(name)
        except CapabilityFailure as e:
            return self._domain_failure(name, e)
        except Exception as e:
            return self._unexpected_failure(name, e)

        if isinstance(output, CapabilityFailure):
            return self._domain_failure(name, output)

        if self._validate_output:
            mismatches = validate(descriptor.output_schema, output)
            if mismatches:
                logger.warning(
                    f"Capability '{name}' output does not match its output schema: "
                    + "; ".join(str(v) for v in mismatches)
                )

        return InvocationResult.success(output)

    async def _is_permitted(self, descriptor: CapabilityDescriptor, caller: CallerContext) -> bool:
        try:
            allowed = descriptor.permission_callback(caller)
            if inspect.isawaitable(allowed):
                allowed = await allowed
        except Exception as e:
            logger.warning(f"Permission check for '{descriptor.name}' raised; denying: {e}")
            return False
        return bool(allowed)

    async def _run(self, descriptor: CapabilityDescriptor, payload: Dict[str, Any], token: CancellationToken) -> Any:
        callback = descriptor.execute_callback
        if inspect.iscoroutinefunction(callback):
            pending = callback(payload, token)
        else:
            pending = await asyncio.to_thread(callback, payload, token)
            if not inspect.isawaitable(pending):
                return pending

        task = asyncio.ensure_future(pending)
        waiter = asyncio.ensure_future(token.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
            if task in done:
                return task.result()
            raise CancelledByCaller()
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

    @staticmethod
    def _cancelled(name: str) -> InvocationResult:
        return InvocationResult.failure(
            ErrorKind.execution_failed,
            f"Capability '{name}' was cancelled",
            {"reason": "cancelled"},
        )

    @staticmethod
    def _domain_failure(name: str, failure: CapabilityFailure) -> InvocationResult:
        logger.info(f"Capability '{name}' failed with '{failure.code}': {failure.message}")
        details: Dict[str, Any] = {"cause": failure.code}
        if failure.data:
            details["data"] = failure.data
        return InvocationResult.failure(ErrorKind.execution_failed, failure.message, details)

    @staticmethod
    def _unexpected_failure(name: str, exc: BaseException) -> InvocationResult:
        logger.error(f"Capability '{name}' raised {type(exc).__name__}: {exc}", exc_info=exc)
        return InvocationResult.failure(
            ErrorKind.execution_failed,
            f"Capability '{name}' failed: {exc}",
            {"cause": type(exc).__name__},
        )
