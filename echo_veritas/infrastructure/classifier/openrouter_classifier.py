"""
OpenRouter Classifier - LLM-Based Fake Review Detection
=======================================================

ARCHITECTURAL DECISION:
- Uses OpenRouter API (OpenAI-compatible chat completions)
- The model must answer with JSON only: prediction, confidence, explanation
- Blocking HTTP runs in a worker thread so the event loop stays free
- Any transport or format problem raises ClassifierError (no silent fallback:
  the caller decides what a failed analysis means)

EXTENSIBILITY:
- To use a different model: set VERITAS_MODEL
- To use OpenAI or a local gateway: set VERITAS_CLASSIFIER_URL
"""

import asyncio
import json
import logging
from typing import Any, List, Sequence

import requests

from ...domain import ClassifierError
from ..config import ClassifierSettings
from .client import (
    ClassifierClient,
    ClassifierResponse,
    parse_batch_response,
    parse_response,
)

logger = logging.getLogger(__name__)


class OpenRouterClassifier(ClassifierClient):
    """
    Authenticity classifier backed by an LLM on OpenRouter.

    USAGE:
        classifier = OpenRouterClassifier(get_settings().classifier)
        verdict = await classifier.classify("Absolutely perfect, five stars!!!")
    """

    SINGLE_PROMPT = (
        "You detect fake product and service reviews. "
        "Decide whether the review below was written by a genuine customer "
        "(real) or is fabricated, paid or generated (fake). "
        "Reply with JSON only, no prose, in exactly this shape: "
        '{{"prediction": "real" or "fake", "confidence": number between 0 and 1, '
        '"explanation": [short reasons]}}\n\n'
        "Review: '''{review}'''"
    )

    BATCH_PROMPT = (
        "You detect fake product and service reviews. "
        "For each numbered review below decide whether it was written by a "
        "genuine customer (real) or is fabricated, paid or generated (fake). "
        "Reply with a JSON array only, one object per review, in the same order, "
        'each shaped like {{"prediction": "real" or "fake", '
        '"confidence": number between 0 and 1, "explanation": [short reasons]}}. '
        "The array must contain exactly {count} objects.\n\n"
        "{reviews}"
    )

    def __init__(self, settings: ClassifierSettings):
        self._api_key = settings.api_key
        self._api_url = settings.api_url
        self._model = settings.model
        self._temperature = settings.temperature
        self._timeout = settings.timeout_seconds

        if not self._api_key:
            raise ClassifierError("OpenRouterClassifier requires an API key")

    async def classify(self, text: str) -> ClassifierResponse:
        content = await asyncio.to_thread(
            self._complete, self.SINGLE_PROMPT.format(review=text)
        )
        return parse_response(self._decode_json(content))

    async def classify_batch(self, texts: Sequence[str]) -> List[ClassifierResponse]:
        numbered = "\n".join(f"{i}. '''{t}'''" for i, t in enumerate(texts, start=1))
        prompt = self.BATCH_PROMPT.format(count=len(texts), reviews=numbered)

        content = await asyncio.to_thread(self._complete, prompt)
        return parse_batch_response(self._decode_json(content), expected=len(texts))

    def _complete(self, prompt: str) -> str:
        """POST one chat completion and return the assistant message text."""
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": "https://github.com/echo-veritas",  # Required by OpenRouter
        }

        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._temperature,
        }

        try:
            response = requests.post(
                self._api_url,
                headers=headers,
                json=payload,
                timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.Timeout as e:
            logger.warning(f"Classifier API timeout after {self._timeout}s")
            raise ClassifierError("Classifier request timed out") from e

        except requests.RequestException as e:
            logger.warning(f"Classifier API error: {e}")
            raise ClassifierError(f"Classifier request failed: {e}") from e

        except ValueError as e:
            raise ClassifierError("Classifier returned a non-JSON body") from e

        content = self._extract_response_content(data)
        if not content:
            raise ClassifierError("Classifier returned an empty completion")
        return content

    def _extract_response_content(self, data: dict) -> str:
        """Extract text content from API response."""
        try:
            choices = data.get("choices", [])
            if choices:
                message = choices[0].get("message", {})
                return (message.get("content") or "").strip()
        except (AttributeError, KeyError, IndexError, TypeError):
            pass
        return ""

    def _decode_json(self, content: str) -> Any:
        """Decode the model's JSON answer, tolerating a markdown code fence."""
        text = content.strip()
        if text.startswith("```"):
            text = text.strip("`")
            if text.lower().startswith("json"):
                text = text[4:]

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Unparseable classifier output: {content[:80]!r}")
            raise ClassifierError("Classifier output is not valid JSON") from e
