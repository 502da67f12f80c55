"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclasses
- Single source of truth for all configurable values

EXTENSIBILITY:
- To switch classifier provider: change api_url/model or add a new client
- To change the single review length limit: set VERITAS_MAX_CHARS
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file if present (development convenience)
load_dotenv()


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key, "").strip()
    return int(value) if value else default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key, "").strip()
    return float(value) if value else default


@dataclass(frozen=True)
class ClassifierSettings:
    """OpenRouter LLM settings for authenticity classification."""

    api_key: str = field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""))
    api_url: str = field(
        default_factory=lambda: os.getenv(
            "VERITAS_CLASSIFIER_URL", "https://openrouter.ai/api/v1/chat/completions"
        )
    )

    model: str = field(
        default_factory=lambda: os.getenv(
            "VERITAS_MODEL", "meta-llama/llama-3.2-3b-instruct:free"
        )
    )

    # Deterministic output
    temperature: float = 0.0

    # A hung request turns into a classifier error after this many seconds
    timeout_seconds: float = field(
        default_factory=lambda: _env_float("VERITAS_CLASSIFIER_TIMEOUT", 15.0)
    )


@dataclass(frozen=True)
class IngestionSettings:
    """Review validation limits."""

    max_review_chars: int = field(default_factory=lambda: _env_int("VERITAS_MAX_CHARS", 2000))


@dataclass(frozen=True)
class ExportSettings:
    """CSV export settings."""

    filename_prefix: str = "review-analysis"


@dataclass(frozen=True)
class Settings:
    """
    Root settings container.

    Usage:
        from echo_veritas.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.classifier.model)
    """

    classifier: ClassifierSettings = field(default_factory=ClassifierSettings)
    ingestion: IngestionSettings = field(default_factory=IngestionSettings)
    export: ExportSettings = field(default_factory=ExportSettings)

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings.
        Returns empty list if all settings are valid.
        """
        issues = []

        if not self.classifier.api_key:
            issues.append(
                "WARNING: OPENROUTER_API_KEY not set. "
                "Reviews will be scored by the keyword heuristic classifier."
            )

        if self.classifier.timeout_seconds <= 0:
            issues.append(
                "WARNING: VERITAS_CLASSIFIER_TIMEOUT must be positive."
            )

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
