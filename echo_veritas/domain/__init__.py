# Domain Layer
# ============
# Plain review entities and the error taxonomy. No I/O, no framework imports.

from .models import (
    ConfidenceLevel,
    Prediction,
    Provenance,
    ReviewCandidate,
    ReviewResult,
)
from .errors import (
    ClassificationFailedError,
    ClassifierError,
    DispatchError,
    DispatcherBusyError,
    EmptyQueueError,
    EmptyReviewError,
    NoCandidatesError,
    ReviewAnalysisError,
    ReviewTooLongError,
    ReviewTooShortError,
    UnsupportedFileError,
    ValidationError,
)

__all__ = [
    "ConfidenceLevel",
    "Prediction",
    "Provenance",
    "ReviewCandidate",
    "ReviewResult",
    "ClassificationFailedError",
    "ClassifierError",
    "DispatchError",
    "DispatcherBusyError",
    "EmptyQueueError",
    "EmptyReviewError",
    "NoCandidatesError",
    "ReviewAnalysisError",
    "ReviewTooLongError",
    "ReviewTooShortError",
    "UnsupportedFileError",
    "ValidationError",
]
