"""
CSV Ingestor - Tabular Review Import
====================================

Extracts review candidates from CSV text and Excel workbooks.

PARSING RULES (deliberately simple, not RFC 4180):
- The first line is always treated as a header and dropped, even when the
  file has no header row.
- If a line contains a double-quoted substring, the first one is the review.
- Otherwise the review is the text before the first comma.
- Reviews shorter than 10 characters after trimming are skipped.

Excel files (.xlsx, .xls) are read with pandas. Row 1 is the header and the
review is the first column of each data row, taken cell by cell.
"""

import io
import logging
import re
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ...domain import (
    NoCandidatesError,
    Provenance,
    ReviewCandidate,
    UnsupportedFileError,
)
from ...domain.models import MIN_REVIEW_CHARS

logger = logging.getLogger(__name__)

QUOTED_FIELD = re.compile(r'"([^"]+)"')

CSV_EXTENSIONS = ['.csv']
EXCEL_EXTENSIONS = ['.xlsx', '.xls']
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + EXCEL_EXTENSIONS


class CsvIngestor:
    """
    Review importer for CSV and Excel uploads.

    Usage:
        ingestor = CsvIngestor()
        candidates = ingestor.parse('review,rating\\n"Excellent service overall",5')
        # -> [ReviewCandidate(text="Excellent service overall", provenance=CSV)]
    """

    def parse(self, csv_text: str) -> List[ReviewCandidate]:
        """
        Parse CSV text into review candidates.

        Raises:
            NoCandidatesError: if no data row yields a usable review.
        """
        lines = (csv_text or "").split("\n")[1:]

        candidates = []
        for line in lines:
            review = self._extract_review(line)
            if len(review) >= MIN_REVIEW_CHARS:
                candidates.append(ReviewCandidate(review, Provenance.CSV))

        if not candidates:
            raise NoCandidatesError("The CSV file doesn't contain valid reviews.")

        logger.info(f"Parsed {len(candidates)} reviews from {len(lines)} CSV data rows")
        return candidates

    def parse_spreadsheet(self, content: bytes, sheet_name: Optional[str] = None) -> List[ReviewCandidate]:
        """Parse the first (or named) sheet of an Excel workbook."""
        try:
            df = pd.read_excel(io.BytesIO(content), sheet_name=sheet_name or 0)
        except Exception as e:
            logger.error(f"Failed to read workbook: {e}")
            raise UnsupportedFileError(f"Could not read Excel file: {e}") from e

        if df.shape[1] == 0:
            raise NoCandidatesError("The Excel file doesn't contain valid reviews.")

        candidates = []
        for cell in df.iloc[:, 0].dropna():
            review = str(cell).strip()
            if len(review) >= MIN_REVIEW_CHARS:
                candidates.append(ReviewCandidate(review, Provenance.CSV))

        if not candidates:
            raise NoCandidatesError("The Excel file doesn't contain valid reviews.")

        logger.info(f"Parsed {len(candidates)} reviews from {len(df)} spreadsheet rows")
        return candidates

    def parse_upload(self, filename: str, content: bytes) -> List[ReviewCandidate]:
        """
        Parse an uploaded file, choosing the reader by extension.

        Raises:
            UnsupportedFileError: for anything other than .csv, .xlsx or .xls
        """
        ext = Path(filename or "").suffix.lower()

        if ext in CSV_EXTENSIONS:
            return self.parse(content.decode("utf-8-sig", errors="replace"))
        if ext in EXCEL_EXTENSIONS:
            return self.parse_spreadsheet(content)

        raise UnsupportedFileError(
            f"Unsupported file format: {ext or 'none'}. Use .csv, .xlsx or .xls"
        )

    def _extract_review(self, line: str) -> str:
        match = QUOTED_FIELD.search(line)
        field = match.group(1) if match else line.split(',')[0]
        return field.strip()
