"""Session statistics, recomputed from scratch on every call."""

from dataclasses import asdict, dataclass
from typing import Iterable

from ..domain import ReviewResult


@dataclass(frozen=True)
class SessionStats:
    total: int = 0
    fake_count: int = 0
    real_count: int = 0
    fake_pct: float = 0.0
    real_pct: float = 0.0
    avg_confidence: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def compute_stats(results: Iterable[ReviewResult]) -> SessionStats:
    results = list(results)
    total = len(results)
    if total == 0:
        return SessionStats()

    fake_count = sum(1 for r in results if r.is_fake)
    real_count = total - fake_count

    return SessionStats(
        total=total,
        fake_count=fake_count,
        real_count=real_count,
        fake_pct=fake_count / total * 100,
        real_pct=real_count / total * 100,
        avg_confidence=sum(r.confidence for r in results) / total,
    )
