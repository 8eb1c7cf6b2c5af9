"""
Series parser for historical COT exports.

Handles the "weekly history" shape: one row per asset, one column per
report week, with dates as column headers. Exports often append summary
columns (High, Low, Range, Average, Change %, Open Interest, ...) next
to the weeks; those are recognised by keyword and left out.

Input structure (loose):
  - Optional title rows above the header
  - Header row: commodity column + date columns + summary columns
  - Data rows: asset name + one raw value per column
  - Optional footer rows (e.g., "Downloaded from Barchart.com")

Date columns are discovered once per file from the header row, not per
data row, so every record carries the same week labels in the same
left-to-right order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cot_ingest.parsers.base import (
    BaseParser,
    cell_or_zero,
    find_header_row_index,
    is_footer_or_noise,
    normalize_header,
    split_line,
    split_lines,
)
from cot_ingest.parsers.columns import find_column
from cot_ingest.transforms.numbers import parse_value

logger = logging.getLogger(__name__)

# Single keyword group used to locate the header row
HEADER_KEYWORDS: tuple[str, ...] = ("commodity", "asset", "market")

# Wider alias list used to pick the commodity column on that row
COMMODITY_ALIASES: tuple[str, ...] = ("commodity", "asset", "market", "instrument", "name")

# Header substrings marking summary columns rather than weeks
METADATA_KEYWORDS: tuple[str, ...] = (
    "high",
    "low",
    "range",
    "average",
    "change",
    "%",
    "chg",
    "volatility",
    "openinterest",
    "open interest",
)

_MIN_DATE_LABEL_LENGTH = 3


@dataclass(frozen=True)
class WeekEntry:
    """One report week for one asset."""

    date: str
    value: str
    num_value: float


@dataclass(frozen=True)
class SeriesRecord:
    """Weekly history for one asset, in source column order."""

    commodity: str
    weeks: tuple[WeekEntry, ...]


def discover_date_columns(raw_headers: Sequence[str], commodity_idx: int) -> list[int]:
    """Return the indices of week/date columns, left to right.

    A column qualifies when it is not the commodity column, its
    lower-cased header contains none of ``METADATA_KEYWORDS``, and the
    header is longer than two characters.
    """
    date_indices: list[int] = []
    for i, header in enumerate(raw_headers):
        if i == commodity_idx:
            continue
        lowered = header.lower()
        if any(keyword in lowered for keyword in METADATA_KEYWORDS):
            continue
        if len(header) >= _MIN_DATE_LABEL_LENGTH:
            date_indices.append(i)
    return date_indices


class SeriesParser(BaseParser[SeriesRecord]):
    """Parser for historical (weekly) COT exports."""

    def parse(self, text: str) -> list[SeriesRecord]:
        lines = split_lines(text)
        if len(lines) < 2:
            return []

        # Step 1: header row, commodity column, date columns
        header_idx = find_header_row_index(lines, [HEADER_KEYWORDS])
        raw_headers = split_line(lines[header_idx])
        headers = [normalize_header(h) for h in raw_headers]
        found = find_column(headers, COMMODITY_ALIASES)
        commodity_idx = 0 if found is None else found
        date_indices = discover_date_columns(raw_headers, commodity_idx)
        labels = [raw_headers[i].replace('"', "") for i in date_indices]
        logger.debug(
            "Series: commodity column %d, %d date columns", commodity_idx, len(date_indices)
        )

        # Step 2: one record per qualifying data row
        records: list[SeriesRecord] = []
        for line in lines[header_idx + 1:]:
            cells = split_line(line)
            if len(cells) <= commodity_idx:
                continue
            commodity = cells[commodity_idx].replace('"', "")
            if is_footer_or_noise(commodity):
                continue
            weeks = []
            for label, idx in zip(labels, date_indices):
                if not label.strip():
                    continue
                raw = cell_or_zero(cells, idx)
                weeks.append(WeekEntry(date=label, value=raw, num_value=parse_value(raw)))
            records.append(SeriesRecord(commodity=commodity, weeks=tuple(weeks)))

        logger.debug("Series: %d records", len(records))
        return records


def parse_historical_csv(text: str) -> list[SeriesRecord]:
    """Parse a historical COT CSV into ``SeriesRecord`` objects."""
    return SeriesParser().parse(text)
