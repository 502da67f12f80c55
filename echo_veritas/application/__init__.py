# Application Layer
# =================
# Session-scoped orchestration: batch queue, dispatcher gate, result store
# and statistics. Depends on the domain and on infrastructure interfaces.

from .batch_queue import BatchQueue
from .dispatcher import ClassificationDispatcher, DispatchState
from .result_store import ResultStore
from .session import AnalysisSession, SessionRegistry
from .stats import SessionStats, compute_stats

__all__ = [
    "AnalysisSession",
    "BatchQueue",
    "ClassificationDispatcher",
    "DispatchState",
    "ResultStore",
    "SessionRegistry",
    "SessionStats",
    "compute_stats",
]
