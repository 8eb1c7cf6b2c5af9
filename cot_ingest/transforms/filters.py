"""
Record filters for cot-ingest.

Parsed exports usually contain far more markets than anyone wants to
watch. These helpers narrow a record list down without touching the
records themselves:

- ``filter_focus()``: keep only a configured watch list. Names are
  compared after normalisation and in both directions, so "Gold" matches
  "GOLD - COMMODITY EXCHANGE INC." and "E-Mini S&P 500" matches
  "S&P 500 E-Mini"-style variants that share a normalised core.
- ``select_asset()``: exact pick of one asset (or all of them).
- ``search_assets()``: case-insensitive substring search.

Works for both ``SnapshotRecord`` and ``SeriesRecord``; anything with a
``commodity`` attribute will do.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

ALL_ASSETS = "All Assets"

_SYMBOL_NOISE_RE = re.compile(r"[\"\s_-]")


class _HasCommodity(Protocol):
    commodity: str


RecordT = TypeVar("RecordT", bound=_HasCommodity)


def normalize_symbol(name: str) -> str:
    """Lower-case and strip quotes, whitespace, ``_`` and ``-``."""
    return _SYMBOL_NOISE_RE.sub("", name.lower())


def filter_focus(records: Iterable[RecordT], symbols: Sequence[str]) -> list[RecordT]:
    """Keep records whose commodity matches any focus symbol.

    A record matches when its normalised name contains the normalised
    symbol or the other way round. An empty *symbols* list keeps every
    record.
    """
    records = list(records)
    if not symbols:
        return records
    wanted = [normalize_symbol(s) for s in symbols]
    kept = []
    for record in records:
        name = normalize_symbol(record.commodity)
        if any(w in name or name in w for w in wanted):
            kept.append(record)
    if records and not kept:
        logger.warning("Focus list %s matched none of %d records", list(symbols), len(records))
    return kept


def select_asset(records: Iterable[RecordT], name: str | None) -> list[RecordT]:
    """Records for exactly one commodity; ``None`` or ``ALL_ASSETS`` returns all."""
    if name is None or name == ALL_ASSETS:
        return list(records)
    return [r for r in records if r.commodity == name]


def search_assets(records: Iterable[RecordT], query: str) -> list[RecordT]:
    """Case-insensitive substring search on the commodity name."""
    needle = query.strip().lower()
    if not needle:
        return list(records)
    return [r for r in records if needle in r.commodity.lower()]


def available_commodities(records: Iterable[_HasCommodity]) -> list[str]:
    """Sorted commodity names, as offered in an asset picker."""
    return sorted(r.commodity for r in records)
