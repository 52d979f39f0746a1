"""Queue execution.

`run` drives an `OperationQueue` strictly in order, one operation at a time,
and yields each operation's `Success`/`Failure` as soon as it is known. The
stream always ends with exactly one `RunCompleted`. A failed operation does
not stop the queue; later operations still run.

Keeping side effects (printing, exit codes) out of this module lets the CLI,
tests and any other entry point consume the same stream.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

import httpx

from adapters.http_client import build_async_client, execute
from core.config import AppSettings
from core.domain.context import RunContext
from core.domain.results import Failure, ResolvedRequest, Result, RunCompleted, RunEvent, Success
from core.errors import HeavercError, OperationCancelledError
from core.interfaces.operation import Operation
from core.services.queue import OperationQueue

logger = logging.getLogger(__name__)


async def _resolve(operation: Operation, context: RunContext) -> ResolvedRequest:
    # Create may read a key file; keep that off the event loop.
    request = await asyncio.to_thread(operation.resolve, context)
    logger.debug("%s: %s %s", operation.kind, request.method, request.url)
    return request


async def simulate_operation(operation: Operation, context: RunContext) -> Result:
    """Resolve one operation and describe it without sending anything."""

    try:
        request = await _resolve(operation, context)
        return Success(operation.describe(request))
    except HeavercError as exc:
        logger.warning("%s failed: %s", operation.kind, exc.message)
        return Failure(exc)


async def run_operation(
    operation: Operation,
    context: RunContext,
    client: httpx.AsyncClient,
) -> Result:
    """Resolve, execute and decode one operation."""

    try:
        request = await _resolve(operation, context)
        response = await execute(client, request)
        return Success(operation.decode(response, context))
    except HeavercError as exc:
        logger.warning("%s failed: %s", operation.kind, exc.message)
        return Failure(exc)


async def run(
    queue: OperationQueue,
    context: RunContext,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
    cancel: asyncio.Event | None = None,
) -> AsyncIterator[RunEvent]:
    """Yield one result per queued operation, then `RunCompleted`.

    Args:
        queue: operations to run, consumed in order.
        context: identifiers, endpoint and dry-run flag for the whole run.
        settings: used to build a client when `client` is not given.
        client: reused as-is and left open; otherwise a client is built
            for the run and closed at the end. Dry runs never build one.
        cancel: once set, remaining operations are not executed and each
            yields `Failure(OperationCancelledError)`.
    """

    owns_client = client is None and not context.dry_run
    if owns_client:
        client = build_async_client(settings)

    total = 0
    failed = 0
    cancelled = False
    try:
        for operation in queue:
            total += 1
            if cancel is not None and cancel.is_set():
                cancelled = True
                result: Result = Failure(OperationCancelledError(operation.kind))
            elif context.dry_run or client is None:
                result = await simulate_operation(operation, context)
            else:
                result = await run_operation(operation, context, client)
            if not result.ok:
                failed += 1
            yield result
    finally:
        if owns_client and client is not None:
            await client.aclose()

    logger.debug("run finished: %d operations, %d failed", total, failed)
    yield RunCompleted(total=total, failed=failed, cancelled=cancelled)


async def collect(
    queue: OperationQueue,
    context: RunContext,
    **kwargs,
) -> tuple[list[Result], RunCompleted]:
    """Drain `run` into a list of results plus its completion marker."""

    results: list[Result] = []
    async for event in run(queue, context, **kwargs):
        if isinstance(event, RunCompleted):
            return results, event
        results.append(event)
    raise RuntimeError("result stream ended without RunCompleted")
