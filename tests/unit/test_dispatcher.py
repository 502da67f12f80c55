from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from echo_veritas.application import ClassificationDispatcher, DispatchState
from echo_veritas.domain import (
    ClassificationFailedError,
    ClassifierError,
    DispatcherBusyError,
    EmptyQueueError,
    Prediction,
    ReviewCandidate,
    ReviewTooShortError,
)
from tests.fakes import BlockingClassifier, FakeClassifier

FIXED_TIME = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def counter_ids():
    n = iter(range(1000))
    return lambda: f"id-{next(n)}"


@pytest.mark.asyncio
async def test_submit_single_builds_result():
    dispatcher = ClassificationDispatcher(
        FakeClassifier(), clock=lambda: FIXED_TIME, id_factory=counter_ids()
    )
    result = await dispatcher.submit_single(ReviewCandidate("A sufficiently long review text"))

    assert result.id == "id-0"
    assert result.text == "A sufficiently long review text"
    assert result.prediction is Prediction.REAL
    assert result.confidence == 0.9
    assert result.timestamp == FIXED_TIME
    assert result.explanation == ("fake reason",)
    assert dispatcher.state is DispatchState.IDLE


@pytest.mark.asyncio
async def test_second_submission_while_busy_is_rejected():
    classifier = BlockingClassifier()
    dispatcher = ClassificationDispatcher(classifier)

    first = asyncio.create_task(dispatcher.submit_single("a sufficiently long review text"))
    await classifier.started.wait()
    assert dispatcher.state is DispatchState.BUSY

    with pytest.raises(DispatcherBusyError):
        await dispatcher.submit_single("another sufficiently long review")
    with pytest.raises(DispatcherBusyError):
        await dispatcher.submit_batch(["another sufficiently long review"])

    classifier.release.set()
    result = await first
    assert result.prediction is Prediction.REAL
    assert dispatcher.state is DispatchState.IDLE


@pytest.mark.asyncio
async def test_classifier_failure_returns_to_idle():
    dispatcher = ClassificationDispatcher(FakeClassifier(fail=True))

    with pytest.raises(ClassificationFailedError) as exc_info:
        await dispatcher.submit_single("a sufficiently long review text")

    assert isinstance(exc_info.value.__cause__, ClassifierError)
    assert dispatcher.state is DispatchState.IDLE

    with pytest.raises(ClassificationFailedError):
        await dispatcher.submit_batch(["a sufficiently long review text"])
    assert dispatcher.state is DispatchState.IDLE


@pytest.mark.asyncio
async def test_submit_batch_preserves_order_and_shares_timestamp():
    dispatcher = ClassificationDispatcher(
        FakeClassifier(), clock=lambda: FIXED_TIME, id_factory=counter_ids()
    )
    texts = ["First review text here", "Second review text here", "Third review text here"]

    results = await dispatcher.submit_batch([ReviewCandidate(t) for t in texts])

    assert [r.text for r in results] == texts
    assert [r.prediction for r in results] == [Prediction.REAL, Prediction.FAKE, Prediction.REAL]
    assert len({r.id for r in results}) == 3
    assert {r.timestamp for r in results} == {FIXED_TIME}


@pytest.mark.asyncio
async def test_batch_length_mismatch_fails_without_results():
    classifier = FakeClassifier(batch_payload=[{"prediction": "real", "confidence": 0.5}])
    dispatcher = ClassificationDispatcher(classifier)

    with pytest.raises(ClassificationFailedError):
        await dispatcher.submit_batch(["First review text here", "Second review text here"])
    assert dispatcher.state is DispatchState.IDLE


@pytest.mark.asyncio
async def test_batch_malformed_payload_fails():
    classifier = FakeClassifier(batch_payload=[{"prediction": "maybe", "confidence": 1.4}])
    dispatcher = ClassificationDispatcher(classifier)

    with pytest.raises(ClassificationFailedError):
        await dispatcher.submit_batch(["First review text here"])


@pytest.mark.asyncio
async def test_raw_dict_payload_is_accepted():
    classifier = FakeClassifier(batch_payload=[{"prediction": "fake", "confidence": 0.66}])
    results = await ClassificationDispatcher(classifier).submit_batch(["First review text here"])

    assert results[0].prediction is Prediction.FAKE
    assert results[0].explanation == ()


@pytest.mark.asyncio
async def test_empty_batch_is_rejected_before_classifier():
    classifier = FakeClassifier()
    with pytest.raises(EmptyQueueError):
        await ClassificationDispatcher(classifier).submit_batch([])
    assert classifier.batch_calls == []


@pytest.mark.asyncio
async def test_timeout_turns_hang_into_failure():
    dispatcher = ClassificationDispatcher(BlockingClassifier(), timeout=0.01)

    with pytest.raises(ClassificationFailedError):
        await dispatcher.submit_single("a sufficiently long review text")
    assert dispatcher.state is DispatchState.IDLE


@pytest.mark.asyncio
async def test_short_plain_string_is_a_validation_error():
    classifier = FakeClassifier()
    dispatcher = ClassificationDispatcher(classifier)

    with pytest.raises(ReviewTooShortError):
        await dispatcher.submit_single("too short")
    with pytest.raises(ReviewTooShortError):
        await dispatcher.submit_batch(["A sufficiently long review text", "tiny"])

    assert classifier.single_calls == []
    assert classifier.batch_calls == []
    assert dispatcher.state is DispatchState.IDLE
