"""
Analysis Session - Owner of Queue, Results and Dispatcher
=========================================================

One AnalysisSession per user session. It is the only writer to its
BatchQueue and ResultStore, and every successful dispatch ends in exactly
one ResultStore.append().

SessionRegistry keeps sessions in memory, keyed by an opaque id the web
layer stores in a cookie. Nothing survives a process restart.
"""

import logging
import secrets
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..domain import Prediction, ReviewResult
from ..infrastructure.classifier import ClassifierClient
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.export import CsvExporter
from ..infrastructure.importer import CsvIngestor, TextIngestor
from .batch_queue import BatchQueue
from .dispatcher import ClassificationDispatcher
from .result_store import ResultStore
from .stats import SessionStats, compute_stats

logger = logging.getLogger(__name__)

PredictionFilter = Optional[Union[Prediction, str]]


class AnalysisSession:
    """
    Usage:
        session = AnalysisSession(HeuristicClassifier())
        await session.analyze_single("The blender broke after two weeks of use.")
        session.queue_text(pasted_text)
        await session.submit_batch()
        print(session.stats())
    """

    def __init__(
        self,
        classifier: ClassifierClient,
        settings: Optional[Settings] = None,
        dispatch_timeout: Optional[float] = None,
    ):
        settings = settings or get_settings()

        self.queue = BatchQueue()
        self.store = ResultStore()
        self.dispatcher = ClassificationDispatcher(classifier, timeout=dispatch_timeout)

        self._text_ingestor = TextIngestor(max_chars=settings.ingestion.max_review_chars)
        self._csv_ingestor = CsvIngestor()
        self._exporter = CsvExporter(filename_prefix=settings.export.filename_prefix)

    @property
    def is_busy(self) -> bool:
        return self.dispatcher.is_busy

    # ── Single review ──────────────────────────────────────────

    async def analyze_single(self, text: str) -> ReviewResult:
        candidate = self._text_ingestor.single(text)
        result = await self.dispatcher.submit_single(candidate)
        self.store.append([result])
        return result

    # ── Batch queue ────────────────────────────────────────────

    def queue_text(self, raw_text: str) -> int:
        return self.queue.add(self._text_ingestor.split(raw_text))

    def queue_csv(self, csv_text: str) -> int:
        return self.queue.add(self._csv_ingestor.parse(csv_text))

    def queue_upload(self, filename: str, content: bytes) -> int:
        return self.queue.add(self._csv_ingestor.parse_upload(filename, content))

    def remove_queued(self, index: int) -> bool:
        return self.queue.remove_at(index) is not None

    async def submit_batch(self) -> List[ReviewResult]:
        results = await self.queue.submit(self.dispatcher)
        self.store.append(results)
        return results

    # ── Reading results ────────────────────────────────────────

    def results(self, prediction: PredictionFilter = None) -> List[ReviewResult]:
        return self.store.by_prediction(prediction)

    def stats(self) -> SessionStats:
        return compute_stats(self.store.all())

    def export_csv(self, prediction: PredictionFilter = None) -> str:
        return self._exporter.serialize(self.results(prediction))

    def export_filename(self, day: Optional[date] = None) -> str:
        return self._exporter.filename(day or date.today())


class SessionRegistry:
    """In-memory map of session id -> AnalysisSession."""

    def __init__(self, factory: Callable[[], AnalysisSession]):
        self._factory = factory
        self._sessions: Dict[str, AnalysisSession] = {}

    def get(self, session_id: Optional[str]) -> Optional[AnalysisSession]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, AnalysisSession]:
        session = self.get(session_id)
        if session is not None:
            return session_id, session

        new_id = secrets.token_urlsafe(16)
        self._sessions[new_id] = self._factory()
        logger.info(f"Started analysis session {new_id[:6]}... ({len(self._sessions)} active)")
        return new_id, self._sessions[new_id]

    def __len__(self) -> int:
        return len(self._sessions)
