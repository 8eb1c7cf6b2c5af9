"""
Summary statistics and trend metrics for parsed COT records.

- ``summarize_positions()``: headline numbers over a snapshot, i.e. how
  many assets are tracked, how many are net long vs net short, and which
  asset moved the most this week.
- ``trend_frame()``: per-asset weekly trend over the most recent weeks,
  with week-over-week velocity and a short simple moving average.

History exports list the newest week first; ``trend_frame()`` reverses
the selected window so the result reads oldest -> newest, which is the
order rolling windows and charts expect.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from cot_ingest.parsers.snapshot import SnapshotRecord
from cot_ingest.parsers.timeseries import SeriesRecord

TREND_COLUMNS = ["date", "position", "velocity", "sma", "original"]


@dataclass(frozen=True)
class PositionSummary:
    """Headline statistics over a list of snapshot records.

    Attributes:
        total: Number of records.
        bullish: Records with a positive net position.
        bearish: Records with a negative net position.
        most_active: Commodity with the largest absolute net change,
            or ``"N/A"`` when there are no records.
        most_active_change: Raw net change text of that commodity.
    """

    total: int
    bullish: int
    bearish: int
    most_active: str
    most_active_change: str


def summarize_positions(records: Sequence[SnapshotRecord]) -> PositionSummary:
    """Compute ``PositionSummary`` for a snapshot. Ties keep the earlier record."""
    most_active = "N/A"
    most_active_change = "0"
    if records:
        top = max(records, key=lambda r: abs(r.num_net_change))
        most_active = top.commodity
        most_active_change = top.net_change
    return PositionSummary(
        total=len(records),
        bullish=sum(1 for r in records if r.num_net_pos > 0),
        bearish=sum(1 for r in records if r.num_net_pos < 0),
        most_active=most_active,
        most_active_change=most_active_change,
    )


def trend_frame(record: SeriesRecord, window: int = 12, sma_period: int = 4) -> pd.DataFrame:
    """Weekly trend for one asset, oldest week first.

    Args:
        record: The asset's history.
        window: How many of the most recent weeks to keep.
        sma_period: Weeks per simple moving average; ``sma`` is NaN until
            that many weeks are available.

    Returns:
        DataFrame with columns ``date``, ``position``, ``velocity``,
        ``sma`` and ``original`` (the raw cell text).
    """
    recent = list(record.weeks[:window])
    recent.reverse()
    df = pd.DataFrame(
        {
            "date": [w.date for w in recent],
            "position": [w.num_value for w in recent],
            "original": [w.value for w in recent],
        }
    )
    df["position"] = df["position"].astype("float64")
    # First week has no predecessor: velocity 0
    df["velocity"] = df["position"].diff().fillna(0.0)
    df["sma"] = df["position"].rolling(sma_period, min_periods=sma_period).mean()
    return df[TREND_COLUMNS]
