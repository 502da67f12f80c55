from __future__ import annotations

import json

import pytest
import requests

import echo_veritas.infrastructure.classifier.openrouter_classifier as openrouter_mod
from echo_veritas.domain import ClassifierError
from echo_veritas.infrastructure.classifier import (
    HeuristicClassifier,
    OpenRouterClassifier,
    build_classifier,
    parse_batch_response,
    parse_response,
)
from echo_veritas.infrastructure.config import ClassifierSettings, Settings


class FakeResponse:
    def __init__(self, content: str, status: int = 200):
        self.status_code = status
        self._content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return {"choices": [{"message": {"content": self._content}}]}


def openrouter(**overrides) -> OpenRouterClassifier:
    return OpenRouterClassifier(ClassifierSettings(api_key="test-key", **overrides))


def patch_post(monkeypatch, response=None, exc=None):
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(openrouter_mod.requests, "post", fake_post)
    return calls


# ── Response contract ──────────────────────────────────────────

def test_parse_response_accepts_valid_verdict():
    verdict = parse_response({"prediction": "fake", "confidence": 0.8, "explanation": ["x"]})
    assert verdict.prediction == "fake"
    assert verdict.explanation == ["x"]


@pytest.mark.parametrize("payload", [
    {"prediction": "unsure", "confidence": 0.5},
    {"prediction": "real", "confidence": 1.5},
    {"prediction": "real", "confidence": -0.1},
    {"confidence": 0.5},
    "real",
])
def test_parse_response_rejects_malformed(payload):
    with pytest.raises(ClassifierError):
        parse_response(payload)


def test_parse_batch_response_checks_length():
    with pytest.raises(ClassifierError):
        parse_batch_response([{"prediction": "real", "confidence": 0.5}], expected=2)
    with pytest.raises(ClassifierError):
        parse_batch_response({"prediction": "real", "confidence": 0.5}, expected=1)


# ── OpenRouter ─────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_openrouter_classify(monkeypatch):
    content = json.dumps({"prediction": "fake", "confidence": 0.83, "explanation": ["Generic praise"]})
    calls = patch_post(monkeypatch, FakeResponse(content))

    verdict = await openrouter(timeout_seconds=7).classify("Amazing!!! Best ever!!!")

    assert verdict.prediction == "fake"
    assert verdict.confidence == 0.83
    assert calls[0]["timeout"] == 7
    assert calls[0]["headers"]["Authorization"] == "Bearer test-key"
    assert "Amazing!!! Best ever!!!" in calls[0]["json"]["messages"][0]["content"]


@pytest.mark.asyncio
async def test_openrouter_batch_with_code_fence(monkeypatch):
    verdicts = [
        {"prediction": "real", "confidence": 0.7},
        {"prediction": "fake", "confidence": 0.9, "explanation": []},
    ]
    patch_post(monkeypatch, FakeResponse("```json\n" + json.dumps(verdicts) + "\n```"))

    out = await openrouter().classify_batch(["First review text", "Second review text"])

    assert [v.prediction for v in out] == ["real", "fake"]


@pytest.mark.asyncio
async def test_openrouter_batch_length_mismatch(monkeypatch):
    patch_post(monkeypatch, FakeResponse(json.dumps([{"prediction": "real", "confidence": 0.7}])))

    with pytest.raises(ClassifierError):
        await openrouter().classify_batch(["First review text", "Second review text"])


@pytest.mark.asyncio
@pytest.mark.parametrize("exc", [requests.Timeout("slow"), requests.ConnectionError("down")])
async def test_openrouter_transport_errors(monkeypatch, exc):
    patch_post(monkeypatch, exc=exc)
    with pytest.raises(ClassifierError):
        await openrouter().classify("A sufficiently long review text")


@pytest.mark.asyncio
async def test_openrouter_http_error(monkeypatch):
    patch_post(monkeypatch, FakeResponse("", status=502))
    with pytest.raises(ClassifierError):
        await openrouter().classify("A sufficiently long review text")


@pytest.mark.asyncio
async def test_openrouter_prose_answer(monkeypatch):
    patch_post(monkeypatch, FakeResponse("I think this review is fake."))
    with pytest.raises(ClassifierError):
        await openrouter().classify("A sufficiently long review text")


def test_openrouter_requires_key():
    with pytest.raises(ClassifierError):
        OpenRouterClassifier(ClassifierSettings(api_key=""))


# ── Heuristics ─────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_heuristic_flags_hype():
    verdict = await HeuristicClassifier().classify("BEST PRODUCT EVER!!! MUST BUY!!! Five stars!!!")
    assert verdict.prediction == "fake"
    assert 0.5 <= verdict.confidence <= 1.0
    assert verdict.explanation


@pytest.mark.asyncio
async def test_heuristic_trusts_specific_reviews():
    verdict = await HeuristicClassifier().classify(
        "The blender worked fine for two weeks but the lid cracked after a month."
    )
    assert verdict.prediction == "real"
    assert verdict.explanation


@pytest.mark.asyncio
async def test_heuristic_batch_is_deterministic():
    texts = ["Incredible!!! Changed my life!!!", "Delivery was slow but the price was fair."]
    classifier = HeuristicClassifier()
    first = await classifier.classify_batch(texts)
    second = await classifier.classify_batch(texts)
    assert first == second
    assert len(first) == 2


# ── Factory ────────────────────────────────────────────────────

def test_build_classifier_picks_backend():
    assert isinstance(build_classifier(Settings(classifier=ClassifierSettings(api_key=""))), HeuristicClassifier)
    assert isinstance(build_classifier(Settings(classifier=ClassifierSettings(api_key="k"))), OpenRouterClassifier)
