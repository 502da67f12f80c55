"""
CSV Exporter - Session Results Download
=======================================

Serializes review results to CSV text. Output is deterministic for a given
list of results; delivering the file is up to the caller.

FORMAT:
    Timestamp,Prediction,Confidence,Review Text
    2026-10-19T09:15:02.417Z,fake,87.5%,"Best ""deal"" ever"
"""

from datetime import date, datetime, timezone
from typing import Iterable

from ...domain import ReviewResult

HEADER = ["Timestamp", "Prediction", "Confidence", "Review Text"]
DEFAULT_PREFIX = "review-analysis"


def format_timestamp(ts: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix; sorts lexically."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    utc = ts.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_confidence(confidence: float) -> str:
    return f"{confidence * 100:.1f}%"


def quote_text(text: str) -> str:
    """Double every quote and wrap the whole field in quotes."""
    return '"' + text.replace('"', '""') + '"'


class CsvExporter:
    """
    Writes review results as CSV, in the order given.

    Usage:
        exporter = CsvExporter()
        csv_text = exporter.serialize(store.all())
        filename = exporter.filename(date.today())
    """

    def __init__(self, filename_prefix: str = DEFAULT_PREFIX):
        self.filename_prefix = filename_prefix

    def serialize(self, results: Iterable[ReviewResult]) -> str:
        rows = [",".join(HEADER)]
        for result in results:
            rows.append(",".join([
                format_timestamp(result.timestamp),
                result.prediction.value,
                format_confidence(result.confidence),
                quote_text(result.text),
            ]))
        return "\n".join(rows)

    def filename(self, day: date) -> str:
        return f"{self.filename_prefix}-{day.strftime('%Y-%m-%d')}.csv"
