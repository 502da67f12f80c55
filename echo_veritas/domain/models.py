"""
Review Entities
===============

ReviewCandidate: trimmed text waiting for classification.
ReviewResult:    immutable outcome of one classification.

DESIGN: Enums keep prediction/provenance values closed sets, so a third
prediction state can never sneak into the result store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple

MIN_REVIEW_CHARS = 10


class Prediction(Enum):
    """Authenticity verdict returned by the classifier."""
    REAL = "real"
    FAKE = "fake"


class Provenance(Enum):
    """Where a review candidate came from."""
    MANUAL = "manual"
    CSV = "csv"


class ConfidenceLevel(Enum):
    """Display band for a confidence score."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ReviewCandidate:
    """A validated review text awaiting dispatch."""
    text: str
    provenance: Provenance = Provenance.MANUAL

    def __post_init__(self):
        # Normalise here so every producer yields the same trimmed text
        object.__setattr__(self, "text", self.text.strip())
        if len(self.text) < MIN_REVIEW_CHARS:
            raise ValueError(
                f"Review candidate must have at least {MIN_REVIEW_CHARS} characters"
            )


@dataclass(frozen=True)
class ReviewResult:
    """Classification outcome for one review."""
    id: str
    text: str
    prediction: Prediction
    confidence: float
    timestamp: datetime
    explanation: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.prediction, Prediction):
            raise ValueError(f"Unknown prediction: {self.prediction!r}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence out of range: {self.confidence}")
        object.__setattr__(self, "explanation", tuple(self.explanation or ()))

    @property
    def is_fake(self) -> bool:
        return self.prediction is Prediction.FAKE

    @property
    def has_explanation(self) -> bool:
        return bool(self.explanation)

    @property
    def confidence_level(self) -> ConfidenceLevel:
        if self.confidence >= 0.8:
            return ConfidenceLevel.HIGH
        if self.confidence >= 0.6:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "prediction": self.prediction.value,
            "confidence": self.confidence,
            "confidence_level": self.confidence_level.value,
            "timestamp": self.timestamp.isoformat(),
            "explanation": list(self.explanation),
        }
