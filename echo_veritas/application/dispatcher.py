"""
Classification Dispatcher - Gated Access to the Classifier
==========================================================

Only one classification call (single or batch) may be in flight at a time.
The gate is an explicit two-state machine:

    IDLE --submit--> BUSY --(success | failure)--> IDLE

A submission that arrives while BUSY is rejected immediately with
DispatcherBusyError; it is never queued.

The dispatcher turns classifier verdicts into ReviewResult entities but does
not store them. The caller appends the returned results to its ResultStore.

TIMEOUTS:
    With timeout=None (default) a hung classifier keeps the gate BUSY until
    it returns. Pass a timeout in seconds to turn a hang into a
    ClassificationFailedError.
"""

import asyncio
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from ..domain import (
    ClassificationFailedError,
    DispatcherBusyError,
    EmptyQueueError,
    Prediction,
    ReviewCandidate,
    ReviewResult,
    ReviewTooShortError,
)
from ..infrastructure.classifier import (
    ClassifierClient,
    ClassifierResponse,
    parse_batch_response,
    parse_response,
)

logger = logging.getLogger(__name__)

Submittable = Union[ReviewCandidate, str]


class DispatchState(Enum):
    IDLE = "idle"
    BUSY = "busy"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class ClassificationDispatcher:
    """
    Serializes classifier calls and builds ReviewResults from verdicts.

    Usage:
        dispatcher = ClassificationDispatcher(HeuristicClassifier())
        result = await dispatcher.submit_single(candidate)
        results = await dispatcher.submit_batch(candidates)
    """

    def __init__(
        self,
        client: ClassifierClient,
        timeout: Optional[float] = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._client = client
        self._timeout = timeout
        self._clock = clock
        self._id_factory = id_factory
        self._state = DispatchState.IDLE

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is DispatchState.BUSY

    @contextmanager
    def _gate(self):
        """Hold the BUSY state for the duration of one call, on every exit path."""
        if self._state is not DispatchState.IDLE:
            raise DispatcherBusyError()
        self._state = DispatchState.BUSY
        try:
            yield
        finally:
            self._state = DispatchState.IDLE

    async def submit_single(self, candidate: Submittable) -> ReviewResult:
        """
        Classify one review.

        Raises:
            ReviewTooShortError: a plain string under 10 characters.
            DispatcherBusyError: another call is in flight.
            ClassificationFailedError: the classifier failed or misbehaved.
        """
        text = self._text_of(candidate)

        with self._gate():
            logger.info("Dispatching single review for classification")
            try:
                raw = await self._await(self._client.classify(text))
                response = raw if isinstance(raw, ClassifierResponse) else parse_response(raw)
            except Exception as e:
                logger.warning(f"Single classification failed: {e!r}")
                raise ClassificationFailedError() from e

            result = self._build_result(text, response, self._clock())

        logger.info(f"Review classified as {result.prediction.value} ({result.confidence:.2f})")
        return result

    async def submit_batch(self, candidates: Sequence[Submittable]) -> List[ReviewResult]:
        """
        Classify many reviews in one classifier call.

        Returns results in input order, all sharing one completion timestamp.

        Raises:
            EmptyQueueError: nothing to submit.
            DispatcherBusyError: another call is in flight.
            ClassificationFailedError: the classifier failed, misbehaved or
                returned a different number of verdicts.
        """
        texts = [self._text_of(c) for c in candidates]
        if not texts:
            raise EmptyQueueError()

        with self._gate():
            logger.info(f"Dispatching batch of {len(texts)} reviews for classification")
            try:
                raw = await self._await(self._client.classify_batch(texts))
                if isinstance(raw, list) and all(isinstance(r, ClassifierResponse) for r in raw):
                    responses = raw
                    if len(responses) != len(texts):
                        raise ValueError(
                            f"Classifier returned {len(responses)} verdicts for {len(texts)} reviews"
                        )
                else:
                    responses = parse_batch_response(raw, expected=len(texts))
            except Exception as e:
                logger.warning(f"Batch classification failed: {e!r}")
                raise ClassificationFailedError() from e

            completed_at = self._clock()
            results = [
                self._build_result(text, response, completed_at)
                for text, response in zip(texts, responses)
            ]

        logger.info(f"Batch of {len(results)} reviews classified")
        return results

    async def _await(self, call):
        if self._timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self._timeout)

    def _build_result(self, text: str, response: ClassifierResponse, completed_at: datetime) -> ReviewResult:
        return ReviewResult(
            id=self._id_factory(),
            text=text,
            prediction=Prediction(response.prediction),
            confidence=response.confidence,
            timestamp=completed_at,
            explanation=tuple(response.explanation or ()),
        )

    @staticmethod
    def _text_of(candidate: Submittable) -> str:
        if isinstance(candidate, ReviewCandidate):
            return candidate.text
        try:
            return ReviewCandidate(candidate).text
        except ValueError as e:
            raise ReviewTooShortError() from e
