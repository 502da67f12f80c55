from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from echo_veritas.domain import ClassifierError, Prediction, ReviewResult
from echo_veritas.infrastructure.classifier import ClassifierClient, ClassifierResponse


def verdict(prediction: str = "real", confidence: float = 0.9, explanation=None) -> ClassifierResponse:
    return ClassifierResponse(prediction=prediction, confidence=confidence, explanation=explanation)


def make_result(
    id: str,
    prediction: str = "real",
    confidence: float = 0.9,
    text: str = "A perfectly ordinary review text",
) -> ReviewResult:
    return ReviewResult(
        id=id,
        text=text,
        prediction=Prediction(prediction),
        confidence=confidence,
        timestamp=datetime(2026, 10, 19, 9, 15, 2, 417000, tzinfo=timezone.utc),
    )


class FakeClassifier(ClassifierClient):
    """Alternates real/fake verdicts; can be told to fail or return junk."""

    def __init__(self, fail: bool = False, batch_payload=None):
        self.fail = fail
        self.batch_payload = batch_payload
        self.single_calls: List[str] = []
        self.batch_calls: List[List[str]] = []

    def _verdict(self, i: int) -> ClassifierResponse:
        return verdict("fake" if i % 2 else "real", 0.7 if i % 2 else 0.9, ["fake reason"])

    async def classify(self, text: str) -> ClassifierResponse:
        self.single_calls.append(text)
        if self.fail:
            raise ClassifierError("classifier down")
        return self._verdict(len(self.single_calls) - 1)

    async def classify_batch(self, texts: Sequence[str]):
        self.batch_calls.append(list(texts))
        if self.fail:
            raise ClassifierError("classifier down")
        if self.batch_payload is not None:
            return self.batch_payload
        return [self._verdict(i) for i in range(len(texts))]


class BlockingClassifier(ClassifierClient):
    """Holds every call until release is set."""

    def __init__(self, outcome: Optional[Exception] = None):
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.outcome = outcome

    async def _wait(self):
        self.started.set()
        await self.release.wait()
        if self.outcome is not None:
            raise self.outcome

    async def classify(self, text: str) -> ClassifierResponse:
        await self._wait()
        return verdict("real", 0.95)

    async def classify_batch(self, texts: Sequence[str]):
        await self._wait()
        return [verdict("fake", 0.6) for _ in texts]
