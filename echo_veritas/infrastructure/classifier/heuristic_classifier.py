"""
Heuristic Classifier - Keyword-Based Fake Review Scoring
========================================================

Offline fallback used when no OpenRouter API key is configured.
Scores a review on common markers of fabricated reviews (hype words,
shouting, exclamation runs, missing specifics). Deterministic, so the same
text always gets the same verdict.
"""

import logging
import re
from typing import List, Sequence, Tuple

from .client import ClassifierClient, ClassifierResponse

logger = logging.getLogger(__name__)


class HeuristicClassifier(ClassifierClient):
    """
    Fake review classifier using simple text signals.

    USAGE:
        classifier = HeuristicClassifier()
        verdict = await classifier.classify("BEST PRODUCT EVER!!! MUST BUY!!!")
        print(verdict.prediction)  # "fake"
    """

    HYPE_KEYWORDS = [
        "best ever", "must buy", "must have", "life changing", "life-changing",
        "100%", "five stars", "5 stars", "highly recommend", "amazing product",
        "perfect product", "changed my life", "buy it now", "don't hesitate",
        "incredible", "unbelievable", "miracle", "best purchase",
    ]

    SPECIFIC_KEYWORDS = [
        "after", "week", "weeks", "month", "months", "days", "but", "however",
        "although", "battery", "size", "delivery", "shipping", "price",
        "returned", "customer service", "instructions", "compared",
    ]

    # Score above this is reported as fake
    FAKE_THRESHOLD = 0.5

    async def classify(self, text: str) -> ClassifierResponse:
        return self._score(text)

    async def classify_batch(self, texts: Sequence[str]) -> List[ClassifierResponse]:
        return [self._score(text) for text in texts]

    def _score(self, text: str) -> ClassifierResponse:
        score, reasons = self._signals(text)

        prediction = "fake" if score > self.FAKE_THRESHOLD else "real"
        # Distance from the threshold maps onto the 0.5-1.0 confidence range
        confidence = round(min(1.0, 0.5 + abs(score - self.FAKE_THRESHOLD)), 4)

        if not reasons:
            reasons = ["No suspicious patterns detected"]

        logger.debug(f"Heuristic: {prediction} (score={score:.2f})")
        return ClassifierResponse(
            prediction=prediction,
            confidence=confidence,
            explanation=reasons,
        )

    def _signals(self, text: str) -> Tuple[float, List[str]]:
        lower_text = text.lower()
        words = re.findall(r"[A-Za-z']+", text)
        reasons = []
        score = 0.3

        hype = [kw for kw in self.HYPE_KEYWORDS if kw in lower_text]
        if hype:
            score += min(0.3, 0.1 * len(hype))
            reasons.append(f"Promotional phrasing: {', '.join(hype[:3])}")

        if re.search(r"[!?]{2,}", text):
            score += 0.15
            reasons.append("Repeated exclamation marks")

        caps = [w for w in words if len(w) > 2 and w.isupper()]
        if words and len(caps) / len(words) > 0.3:
            score += 0.15
            reasons.append("Excessive capitalisation")

        tokens = set(re.findall(r"[a-z']+", lower_text))
        has_specifics = any(
            (kw in lower_text) if " " in kw else (kw in tokens)
            for kw in self.SPECIFIC_KEYWORDS
        )

        if has_specifics:
            score -= 0.2
            reasons.append("Mentions concrete usage details")
        elif len(words) < 8:
            score += 0.1
            reasons.append("Very short with no specifics")

        return max(0.0, min(1.0, score)), reasons
