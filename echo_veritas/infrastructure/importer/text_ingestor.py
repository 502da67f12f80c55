"""
Text Ingestor - Pasted Review Text
==================================

Turns free text typed or pasted by the user into review candidates.

- split():  one review per line, for the batch queue
- single(): one whole review, for immediate analysis
"""

import logging
from typing import List

from ...domain import (
    EmptyReviewError,
    NoCandidatesError,
    Provenance,
    ReviewCandidate,
    ReviewTooLongError,
    ReviewTooShortError,
)
from ...domain.models import MIN_REVIEW_CHARS

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 2000


class TextIngestor:
    """
    Splits pasted text into validated review candidates.

    Usage:
        ingestor = TextIngestor()
        candidates = ingestor.split("Great product, works well\\nok")
        # -> [ReviewCandidate(text="Great product, works well", ...)]
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CHARS):
        self.max_chars = max_chars

    def split(self, raw_text: str) -> List[ReviewCandidate]:
        """
        Split raw text on line breaks and keep lines long enough to review.

        Raises:
            NoCandidatesError: if no line survives trimming and filtering.
        """
        candidates = [
            ReviewCandidate(line.strip(), Provenance.MANUAL)
            for line in (raw_text or "").split("\n")
            if len(line.strip()) >= MIN_REVIEW_CHARS
        ]

        if not candidates:
            raise NoCandidatesError(
                "Please enter reviews separated by new lines "
                f"(minimum {MIN_REVIEW_CHARS} characters each)."
            )

        logger.info(f"Split pasted text into {len(candidates)} review candidates")
        return candidates

    def single(self, raw_text: str) -> ReviewCandidate:
        """Validate one review for the single-review path."""
        raw_text = raw_text or ""
        text = raw_text.strip()

        if not text:
            raise EmptyReviewError()

        if len(text) < MIN_REVIEW_CHARS:
            raise ReviewTooShortError()

        if len(raw_text) > self.max_chars:
            raise ReviewTooLongError(
                f"Review is too long ({len(raw_text)}/{self.max_chars} characters)."
            )

        return ReviewCandidate(text, Provenance.MANUAL)
