"""
Record -> DataFrame conversion for cot-ingest.

The parsers return plain frozen dataclasses so the core stays free of
heavy imports. Anything downstream (export, statistics, notebooks)
works on pandas DataFrames built here.

- Positions: one row per asset, columns named after the record fields.
- History: long form, one row per (asset, week), with ``week_index``
  recording the source column order (the newest week is usually first).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, fields

import pandas as pd

from cot_ingest.parsers.snapshot import SnapshotRecord
from cot_ingest.parsers.timeseries import SeriesRecord

POSITION_COLUMNS: list[str] = [f.name for f in fields(SnapshotRecord)]
HISTORY_COLUMNS: list[str] = ["commodity", "week_index", "date", "value", "num_value"]


def positions_to_frame(records: Iterable[SnapshotRecord]) -> pd.DataFrame:
    """One row per snapshot record, in record order."""
    rows = [asdict(r) for r in records]
    return pd.DataFrame(rows, columns=POSITION_COLUMNS)


def history_to_frame(records: Iterable[SeriesRecord]) -> pd.DataFrame:
    """Long-form history: one row per (commodity, week)."""
    rows = [
        {
            "commodity": record.commodity,
            "week_index": i,
            "date": week.date,
            "value": week.value,
            "num_value": week.num_value,
        }
        for record in records
        for i, week in enumerate(record.weeks)
    ]
    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    return df.astype({"week_index": "int64", "num_value": "float64"})
