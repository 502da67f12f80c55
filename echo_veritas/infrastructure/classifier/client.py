"""
Classifier Client - Abstraction Layer for Authenticity Classification
=====================================================================

Provides a unified async interface to whatever decides if a review is real
or fake. The dispatcher only ever talks to this interface, so the OpenRouter
client, the keyword heuristic and test doubles are interchangeable.

USAGE:
    client = build_classifier(get_settings())
    response = await client.classify("Best purchase ever!!! Must buy!!!")
    print(response.prediction, response.confidence)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Literal, Optional, Sequence

import pydantic
from pydantic import BaseModel, Field

from ...domain import ClassifierError

logger = logging.getLogger(__name__)


class ClassifierResponse(BaseModel):
    """One classifier verdict, validated at the call boundary."""

    prediction: Literal["real", "fake"]
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: Optional[List[str]] = None


def parse_response(data: Any) -> ClassifierResponse:
    """Validate a raw verdict dict, raising ClassifierError when malformed."""
    try:
        return ClassifierResponse.model_validate(data)
    except pydantic.ValidationError as e:
        raise ClassifierError(f"Malformed classifier response: {e}") from e


def parse_batch_response(data: Any, expected: int) -> List[ClassifierResponse]:
    """Validate a batch of verdicts; the batch fails as a unit."""
    if not isinstance(data, list):
        raise ClassifierError(f"Expected a list of verdicts, got {type(data).__name__}")

    if len(data) != expected:
        raise ClassifierError(
            f"Classifier returned {len(data)} verdicts for {expected} reviews"
        )

    return [parse_response(item) for item in data]


class ClassifierClient(ABC):
    """
    Abstract base class for authenticity classifiers.
    Implement this interface to add new classification backends.
    """

    @abstractmethod
    async def classify(self, text: str) -> ClassifierResponse:
        """Classify one review. Raises ClassifierError on failure."""
        ...

    @abstractmethod
    async def classify_batch(self, texts: Sequence[str]) -> List[ClassifierResponse]:
        """
        Classify many reviews in one call.
        Returns verdicts in input order; raises ClassifierError on any failure.
        """
        ...
