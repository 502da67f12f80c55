"""
Error Taxonomy
==============

Every failure the core can report is a ReviewAnalysisError subclass, so the
web layer can turn any of them into a user-visible notice at one boundary.

- ValidationError: input rejected before anything was dispatched
- DispatchError:   submission rejected or failed at the classifier gate
- ClassifierError: raised by classifier clients, wrapped by the dispatcher
"""


class ReviewAnalysisError(Exception):
    """Base exception for review analysis errors."""

    notice = "Review analysis failed."

    def __init__(self, message: str = ""):
        super().__init__(message or self.notice)


class ValidationError(ReviewAnalysisError):
    """Input did not produce anything usable."""
    notice = "Invalid input."


class NoCandidatesError(ValidationError):
    notice = "No valid reviews found (minimum 10 characters each)."


class EmptyQueueError(ValidationError):
    notice = "No reviews to process. Add some reviews first."


class EmptyReviewError(ValidationError):
    notice = "Please enter a review to analyze."


class ReviewTooShortError(ValidationError):
    notice = "Please enter a review with at least 10 characters."


class ReviewTooLongError(ValidationError):
    notice = "Review is too long."


class UnsupportedFileError(ValidationError):
    notice = "Unsupported file type. Use .csv, .xlsx or .xls"


class DispatchError(ReviewAnalysisError):
    """Submission was not accepted or did not complete."""
    notice = "Dispatch failed."


class DispatcherBusyError(DispatchError):
    notice = "An analysis is already in progress. Wait for it to finish."


class ClassificationFailedError(DispatchError):
    notice = "Failed to analyze the reviews. Please try again."


class ClassifierError(Exception):
    """Raised by classifier clients on transport or contract failures."""
    pass
