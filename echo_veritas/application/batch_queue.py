"""
Batch Queue - Reviews Waiting for Group Submission
==================================================

RETRY CONTRACT:
- submit() hands a snapshot of the queue to the dispatcher.
- On success exactly the submitted candidates leave the queue; anything
  added while the call was in flight stays queued.
- On failure the queue is left exactly as it was, so the user can retry or
  edit it.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..domain import EmptyQueueError, ReviewCandidate, ReviewResult
from .dispatcher import ClassificationDispatcher

logger = logging.getLogger(__name__)


class BatchQueue:
    """
    Ordered holding area for review candidates.

    Usage:
        queue = BatchQueue()
        queue.add(ingestor.split(pasted_text))
        queue.remove_at(0)
        results = await queue.submit(dispatcher)
    """

    def __init__(self):
        self._items: List[ReviewCandidate] = []

    def add(self, candidates: Iterable[ReviewCandidate]) -> int:
        """Append candidates at the tail, keeping their order."""
        added = list(candidates)
        self._items.extend(added)
        if added:
            logger.info(f"Queued {len(added)} reviews ({len(self._items)} pending)")
        return len(added)

    def remove_at(self, index: int) -> Optional[ReviewCandidate]:
        """Remove one entry. Out-of-range indexes are ignored."""
        if not 0 <= index < len(self._items):
            logger.debug(f"Ignoring removal of missing queue index {index}")
            return None
        return self._items.pop(index)

    def items(self) -> Tuple[ReviewCandidate, ...]:
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    async def submit(self, dispatcher: ClassificationDispatcher) -> List[ReviewResult]:
        """
        Submit the whole queue as one batch.

        Raises:
            EmptyQueueError: the queue is empty; the dispatcher is not called.
            DispatcherBusyError, ClassificationFailedError: queue unchanged.
        """
        snapshot = list(self._items)
        if not snapshot:
            raise EmptyQueueError()

        results = await dispatcher.submit_batch(snapshot)

        submitted = {id(c) for c in snapshot}
        self._items = [c for c in self._items if id(c) not in submitted]
        logger.info(f"Batch of {len(snapshot)} submitted, {len(self._items)} still queued")
        return results
