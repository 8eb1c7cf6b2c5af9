"""
Shape detection for COT CSV exports.

A dropped-in file is either a current-positions snapshot or a weekly
history; the two have different parsers. Detection reuses the header
scoring from the parsers: the most header-like line among the first
``HEADER_SCAN_LIMIT`` lines is scored against the seven snapshot alias
groups.

- Score >= ``SNAPSHOT_MIN_SCORE`` -> ``"positions"``: the header names
  several positioning concepts (commodity, net, long, short, ...).
- Otherwise -> ``"history"``: typically only the commodity group hits,
  the remaining columns being dates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Literal

from cot_ingest.parsers.base import (
    HEADER_SCAN_LIMIT,
    score_header_row,
    split_line,
    split_lines,
)
from cot_ingest.parsers.columns import DEFAULT_ALIASES, ColumnRole

logger = logging.getLogger(__name__)

Shape = Literal["positions", "history"]

SNAPSHOT_MIN_SCORE = 3


def detect_shape(
    text: str,
    aliases: Mapping[ColumnRole, Sequence[str]] | None = None,
) -> Shape:
    """Classify CSV text as a positions snapshot or a weekly history.

    Args:
        text: Raw CSV text.
        aliases: Optional snapshot alias override.

    Returns:
        ``"positions"`` or ``"history"``. Empty text is ``"history"``.
    """
    table = dict(DEFAULT_ALIASES)
    if aliases:
        table.update(aliases)
    groups = list(table.values())

    lines = split_lines(text)
    best = max(
        (score_header_row(split_line(line), groups) for line in lines[:HEADER_SCAN_LIMIT]),
        default=0,
    )
    shape: Shape = "positions" if best >= SNAPSHOT_MIN_SCORE else "history"
    logger.info("Detected shape '%s' (best header score %d)", shape, best)
    return shape

