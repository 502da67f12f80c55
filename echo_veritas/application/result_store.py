"""
Result Store - Session Ledger of Classification Outcomes
========================================================

Newest-first. Each successful dispatch is prepended as one contiguous block
that keeps its submission order. Entries are never edited or removed.
"""

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Set, Tuple, Union

from ..domain import Prediction, ReviewResult

logger = logging.getLogger(__name__)


class ResultStore:
    """
    Append-only, newest-first collection of ReviewResults.

    Usage:
        store = ResultStore()
        store.append(results)
        fakes = store.by_prediction(Prediction.FAKE)
    """

    def __init__(self):
        self._results: List[ReviewResult] = []
        self._ids: Set[str] = set()

    def append(self, results: Iterable[ReviewResult]) -> None:
        block = list(results)
        if not block:
            return

        block_ids = [r.id for r in block]
        duplicates = self._ids.intersection(block_ids)
        if duplicates or len(set(block_ids)) != len(block_ids):
            raise ValueError(f"Duplicate result ids: {sorted(duplicates) or block_ids}")

        self._results[0:0] = block
        self._ids.update(block_ids)
        logger.info(f"Stored {len(block)} results ({len(self._results)} in session)")

    def all(self) -> Tuple[ReviewResult, ...]:
        return tuple(self._results)

    def filter(self, predicate: Callable[[ReviewResult], bool]) -> List[ReviewResult]:
        return [r for r in self._results if predicate(r)]

    def by_prediction(self, prediction: Optional[Union[Prediction, str]] = None) -> List[ReviewResult]:
        """Filter by prediction tag; None or "all" returns everything."""
        if prediction is None or prediction == "all":
            return list(self._results)
        wanted = Prediction(prediction)
        return self.filter(lambda r: r.prediction is wanted)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[ReviewResult]:
        return iter(tuple(self._results))
