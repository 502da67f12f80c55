from .csv_exporter import CsvExporter, format_confidence, format_timestamp, quote_text

__all__ = ["CsvExporter", "format_confidence", "format_timestamp", "quote_text"]
