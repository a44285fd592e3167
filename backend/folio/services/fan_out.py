"""Fan-Out Retriever — concurrent, order-preserving expansion of IDs into entity bodies.

Invariants:
    - Output has exactly one slot per requested ID, in request order
    - A failed fetch (not found, store error) leaves MISSING in its slot; the batch never fails
    - Concurrency bounded by min(len(ids), max_workers)
    - Cancellation propagates: cancelling the caller cancels every in-flight fetch

Design Decisions:
    - Pre-sized slots over completion-order collection: ordering is deterministic
      irrespective of which fetch finishes first
    - Semaphore + asyncio.gather over a thread pool: fetches are async DB reads,
      each opening its own session
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for a slot whose fetch failed."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class FanOutRetriever(Generic[T]):
    """Fetch many entities concurrently, one independent fetch per ID."""

    def __init__(self, fetch: Callable[[str], Awaitable[T]], max_workers: int = 32):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._fetch = fetch
        self._max_workers = max_workers

    async def fetch_all(self, ids: Sequence[str]) -> list[T | _Missing]:
        if not ids:
            return []
        slots: list[T | _Missing] = [MISSING] * len(ids)
        gate = asyncio.Semaphore(min(len(ids), self._max_workers))

        async def load(position: int, entity_id: str) -> None:
            async with gate:
                try:
                    slots[position] = await self._fetch(entity_id)
                except Exception as e:
                    logger.warning(
                        f"Fan-out fetch of {entity_id} failed: {e}",
                        extra={"entity_id": entity_id},
                    )

        await asyncio.gather(*(load(i, entity_id) for i, entity_id in enumerate(ids)))
        return slots


def present(slots: Sequence[T | _Missing]) -> list[T]:
    """Drop MISSING slots, keeping the order of the rest."""
    return [s for s in slots if s is not MISSING]
