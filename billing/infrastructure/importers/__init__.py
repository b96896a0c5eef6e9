"""File importers."""

from billing.infrastructure.importers.csv_product_reader import (
    CsvProductReader,
    CsvReadResult,
    ParsedRow,
    SkippedRow,
)

__all__ = ["CsvProductReader", "CsvReadResult", "ParsedRow", "SkippedRow"]
