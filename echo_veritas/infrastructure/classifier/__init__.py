import logging

from ..config import Settings
from .client import (
    ClassifierClient,
    ClassifierResponse,
    parse_batch_response,
    parse_response,
)
from .heuristic_classifier import HeuristicClassifier
from .openrouter_classifier import OpenRouterClassifier

logger = logging.getLogger(__name__)


def build_classifier(settings: Settings) -> ClassifierClient:
    """Pick the OpenRouter classifier when an API key is set, else heuristics."""
    if settings.classifier.api_key:
        logger.info(f"Using OpenRouter classifier ({settings.classifier.model})")
        return OpenRouterClassifier(settings.classifier)

    logger.warning(
        "No OPENROUTER_API_KEY set. "
        "Reviews will be scored with keyword heuristics."
    )
    return HeuristicClassifier()


__all__ = [
    "ClassifierClient",
    "ClassifierResponse",
    "HeuristicClassifier",
    "OpenRouterClassifier",
    "build_classifier",
    "parse_batch_response",
    "parse_response",
]
