"""Deadline helper for storage-bound operations."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from quire.domain.shared.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def within_deadline(
    operation: Awaitable[T],
    seconds: float | None,
    name: str,
) -> T:
    """Await ``operation``, turning a missed deadline into ServiceUnavailableError.

    The caller's transaction is left uncommitted; the session owner rolls
    it back, so a timed-out operation never changes lifecycle state.
    """
    if seconds is None:
        return await operation
    try:
        return await asyncio.wait_for(operation, timeout=seconds)
    except asyncio.TimeoutError as e:
        logger.warning("%s exceeded its %.1fs deadline", name, seconds)
        raise ServiceUnavailableError(
            details={"operation": name, "timeout_seconds": seconds},
        ) from e
