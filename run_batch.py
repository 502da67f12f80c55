"""
Batch Runner - Classify a Review File from the Command Line
===========================================================

Loads reviews from a .csv/.xlsx/.xls file (first row is the header) or a
.txt file (one review per line), submits them as one batch and writes the
results as CSV.

    python run_batch.py reviews.csv
    python run_batch.py reviews.txt --output results.csv
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from echo_veritas.application import AnalysisSession
from echo_veritas.domain import ReviewAnalysisError
from echo_veritas.infrastructure.classifier import build_classifier
from echo_veritas.infrastructure.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_reviews(session: AnalysisSession, path: Path) -> int:
    """Queue the reviews in a file and return how many were added."""
    if path.suffix.lower() == ".txt":
        return session.queue_text(path.read_text(encoding="utf-8"))
    return session.queue_upload(path.name, path.read_bytes())


async def run_batch(input_path: Path, output_path: Optional[Path] = None) -> int:
    """Run one batch. Returns a process exit code."""

    print("\n" + "=" * 60)
    print("   Echo Veritas - Batch Runner")
    print("=" * 60 + "\n")

    settings = get_settings()
    for issue in settings.validate():
        print(f"   {issue}")

    session = AnalysisSession(
        build_classifier(settings),
        settings=settings,
        dispatch_timeout=settings.classifier.timeout_seconds * 2,
    )

    if not input_path.exists():
        print(f"File not found: {input_path}")
        return 1

    try:
        queued = load_reviews(session, input_path)
        print(f"Queued {queued} reviews from {input_path.name}")

        results = await session.submit_batch()
    except ReviewAnalysisError as e:
        print(f"Batch failed: {e}")
        return 1

    stats = session.stats()
    output_path = output_path or Path(session.export_filename())
    output_path.write_text(session.export_csv(), encoding="utf-8")

    print("\n" + "=" * 60)
    print(f"Analyzed {len(results)} reviews")
    print(f"   Fake: {stats.fake_count} ({stats.fake_pct:.1f}%) | "
          f"Real: {stats.real_count} ({stats.real_pct:.1f}%) | "
          f"Avg. confidence: {stats.avg_confidence * 100:.1f}%")
    print(f"   Results written to {output_path}")
    print("=" * 60 + "\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Classify a file of reviews as real or fake.")
    parser.add_argument("input", type=Path, help="Reviews file (.csv, .xlsx, .xls or .txt)")
    parser.add_argument("--output", "-o", type=Path, default=None, help="CSV file for the results")
    args = parser.parse_args(argv)

    return asyncio.run(run_batch(args.input, args.output))


if __name__ == "__main__":
    sys.exit(main())
