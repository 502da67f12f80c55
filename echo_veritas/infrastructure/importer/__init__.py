from .text_ingestor import TextIngestor
from .csv_ingestor import CsvIngestor, SUPPORTED_EXTENSIONS

__all__ = ["TextIngestor", "CsvIngestor", "SUPPORTED_EXTENSIONS"]
