"""Fail-soft fan-out: await every branch, settle each one individually.

Results come back in the order the branches were given, not completion
order. A branch that raises contributes its default; the failure is logged
and recorded on the current span but never propagated. Cancellation is not
a failure and is re-raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TypeVar

from mrcars_admin.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def settle(branches: Sequence[tuple[str, Awaitable[T]]], default: T) -> list[T]:
    """Run all (name, awaitable) branches concurrently; failed ones yield default."""
    results = await asyncio.gather(*(aw for _, aw in branches), return_exceptions=True)
    settled: list[T] = []
    for (name, _), result in zip(branches, results):
        if isinstance(result, Exception):
            logger.warning("Query %s failed, using default: %s", name, result)
            add_span_event("query_failed", {"query": name, "reason": str(result)})
            settled.append(default)
        elif isinstance(result, BaseException):
            raise result
        else:
            settled.append(result)
    return settled
