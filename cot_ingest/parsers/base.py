"""
Shared parsing helpers and the parser protocol for cot-ingest.

Both COT shapes (current snapshot and historical series) go through
the same three leaf steps before they diverge:

1. ``split_lines()`` breaks the raw text into non-empty lines.
2. ``split_line()`` turns one line into trimmed fields, honouring
   double-quoted spans that contain commas.
3. ``find_header_row_index()`` scores the first few lines against
   keyword groups and picks the most header-like one.

Why score instead of assuming row 0:
- Real exports (Barchart, broker platforms, hand-edited sheets) often
  carry a title row, a "Last updated" row, or blank padding above the
  real header.
- Scoring against the concepts we expect (commodity, long, short, ...)
  survives all of those without any per-source configuration.

Nothing in this module raises for string input.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

# Only the first N lines are considered when looking for the header row
HEADER_SCAN_LIMIT = 15

# Commodity cells containing any of these are footer/attribution text
FOOTER_MARKERS = ("downloaded", "barchart")

# Shortest commodity name that still counts as a data row
MIN_COMMODITY_LENGTH = 2

_LINE_BREAK_RE = re.compile(r"\r?\n")
_HEADER_NOISE_RE = re.compile(r"[\"\s._-]")

RecordT = TypeVar("RecordT")


def split_lines(text: str) -> list[str]:
    """Split raw CSV text into lines, dropping blank ones.

    Handles both LF and CRLF endings. No BOM or encoding handling --
    the text is expected to be decoded already.
    """
    if not text:
        return []
    return [line for line in _LINE_BREAK_RE.split(text) if line.strip()]


def split_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields.

    A double quote toggles "quoted" mode and is dropped from the output;
    commas inside a quoted span are kept as content. There is no escape
    syntax for embedded quotes.

    Example::

        >>> split_line('A,"B, C",D')
        ['A', 'B, C', 'D']
    """
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    parts.append("".join(current).strip())
    return parts


def normalize_header(cell: str) -> str:
    """Lower-case a header cell and remove quotes, whitespace, ``.``, ``_`` and ``-``."""
    return _HEADER_NOISE_RE.sub("", cell.lower())


def score_header_row(cells: Sequence[str], keyword_groups: Sequence[Sequence[str]]) -> int:
    """Count the keyword groups that hit at least one normalised cell."""
    normalized = [normalize_header(c) for c in cells]
    return sum(
        1
        for group in keyword_groups
        if any(keyword in cell for keyword in group for cell in normalized)
    )


def find_header_row_index(
    lines: Sequence[str],
    keyword_groups: Sequence[Sequence[str]],
) -> int:
    """Locate the most header-like line among the first few lines.

    Each of the first ``min(HEADER_SCAN_LIMIT, len(lines))`` lines is
    scored with ``score_header_row()``. The highest score wins; on a tie
    the earlier line is kept, because only a strictly greater score
    replaces the current best.

    Args:
        lines: Non-empty raw lines of the file.
        keyword_groups: One group of alias substrings per concept.

    Returns:
        Zero-based index of the chosen line (0 for an empty input).
    """
    best_score = -1
    best_index = 0
    for i in range(min(len(lines), HEADER_SCAN_LIMIT)):
        score = score_header_row(split_line(lines[i]), keyword_groups)
        if score > best_score:
            best_score = score
            best_index = i
    logger.debug("Header row: line %d (score %d)", best_index, best_score)
    return best_index


def is_footer_or_noise(commodity: str) -> bool:
    """True when a commodity cell is attribution/footer text or too short."""
    lowered = commodity.lower()
    if any(marker in lowered for marker in FOOTER_MARKERS):
        return True
    return len(commodity) < MIN_COMMODITY_LENGTH


def cell_or_zero(cells: Sequence[str], index: int | None) -> str:
    """Return the raw cell at *index*, or ``"0"`` if unresolved, missing or empty."""
    if index is None or index >= len(cells):
        return "0"
    return cells[index] or "0"


class BaseParser(ABC, Generic[RecordT]):
    """Abstract base class for COT CSV parsers.

    Subclasses implement ``parse()``. Parsers are stateless: the same
    instance can be reused for any number of independent calls, and the
    same text always produces the same records.
    """

    @abstractmethod
    def parse(self, text: str) -> list[RecordT]:
        """Parse raw CSV text into records.

        Args:
            text: The complete, already-decoded CSV text.

        Returns:
            Records in source row order. Empty for empty or
            single-line input. Never raises.
        """
