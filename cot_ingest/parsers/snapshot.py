"""
Snapshot parser for COT "current positions" exports.

Input structure (loose):
  - Lines 0..k-1: optional title / metadata rows (ignored)
  - Line k: header row, located by scoring (see parsers.base)
  - Lines k+1..: one row per asset, possibly followed by footer text
    such as "Downloaded from Barchart.com"

Columns are matched by role rather than position (see parsers.columns),
so the same parser reads "Commodity, Net Position, Net Chg, Long, Chg,
Short, Chg" and "Market, Longs, Shorts, Net Pos" alike.

Output:
  One ``SnapshotRecord`` per retained row, in source order. Every numeric
  field is kept twice: the original text (for display) and the parsed
  float (for sorting, charting and statistics).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
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
from cot_ingest.parsers.columns import (
    DEFAULT_ALIASES,
    ColumnRole,
    ColumnRoleMap,
    resolve_columns,
)
from cot_ingest.transforms.numbers import parse_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotRecord:
    """Current positioning for one asset.

    The ``num_*`` fields are ``parse_value()`` of the matching raw field.
    """

    commodity: str
    net_positions: str
    net_change: str
    long_positions: str
    long_change: str
    short_positions: str
    short_change: str
    num_net_pos: float
    num_net_change: float
    num_long: float
    num_long_change: float
    num_short: float
    num_short_change: float


def _build_record(commodity: str, cells: Sequence[str], roles: ColumnRoleMap) -> SnapshotRecord:
    net = cell_or_zero(cells, roles.net_position)
    net_chg = cell_or_zero(cells, roles.net_change)
    long_ = cell_or_zero(cells, roles.long_position)
    long_chg = cell_or_zero(cells, roles.long_change)
    short = cell_or_zero(cells, roles.short_position)
    short_chg = cell_or_zero(cells, roles.short_change)
    return SnapshotRecord(
        commodity=commodity,
        net_positions=net,
        net_change=net_chg,
        long_positions=long_,
        long_change=long_chg,
        short_positions=short,
        short_change=short_chg,
        num_net_pos=parse_value(net),
        num_net_change=parse_value(net_chg),
        num_long=parse_value(long_),
        num_long_change=parse_value(long_chg),
        num_short=parse_value(short),
        num_short_change=parse_value(short_chg),
    )


class SnapshotParser(BaseParser[SnapshotRecord]):
    """Parser for current-positions COT exports.

    Args:
        aliases: Optional role -> alias override (see ``IngestConfig.aliases``).
    """

    def __init__(self, aliases: Mapping[ColumnRole, Sequence[str]] | None = None) -> None:
        self.aliases = dict(DEFAULT_ALIASES)
        if aliases:
            self.aliases.update(aliases)

    def parse(self, text: str) -> list[SnapshotRecord]:
        lines = split_lines(text)
        if len(lines) < 2:
            return []

        # Step 1: find the header row and resolve column roles on it
        header_idx = find_header_row_index(lines, list(self.aliases.values()))
        headers = [normalize_header(h) for h in split_line(lines[header_idx])]
        roles = resolve_columns(headers, self.aliases)

        # Step 2: one record per qualifying data row
        records: list[SnapshotRecord] = []
        skipped = 0
        for line in lines[header_idx + 1:]:
            cells = split_line(line)
            if len(cells) <= roles.commodity:
                skipped += 1
                continue
            commodity = cells[roles.commodity].replace('"', "")
            if is_footer_or_noise(commodity):
                skipped += 1
                continue
            records.append(_build_record(commodity, cells, roles))

        logger.debug("Snapshot: %d records, %d rows skipped", len(records), skipped)
        return records


def parse_positions_csv(
    text: str,
    aliases: Mapping[ColumnRole, Sequence[str]] | None = None,
) -> list[SnapshotRecord]:
    """Parse a current-positions CSV into ``SnapshotRecord`` objects."""
    return SnapshotParser(aliases).parse(text)
