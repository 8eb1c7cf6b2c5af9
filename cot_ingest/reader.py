"""
Data reading logic for cot-ingest.

Two kinds of reads live here:

- **Source text**: the raw CSV export handed to the parsers. Files are
  decoded as UTF-8 with ``utf-8-sig`` so a BOM written by Excel does not
  end up glued to the first header cell.
- **Exported tables**: ``positions`` / ``history`` tables previously
  written by ``export.export_tables()``, read back as DataFrames.

This module is the read-side counterpart to ``export.py``. It works
purely with paths and format strings and has no dependency on the
``Dataset`` class.

Filtering strategy for exported tables:
- **Parquet**: PyArrow column pruning (``columns``) and predicate
  pushdown (``filters``) on ``commodity``.
- **CSV**: full read, then pandas-level filtering. Raw text columns are
  read as strings so values like ``"0"`` or ``"+50"`` survive intact.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pyarrow.parquet as pq

from cot_ingest.export import OUTPUT_FORMATS, table_path

logger = logging.getLogger(__name__)

# Columns that hold text in each exported table
_TEXT_COLUMNS: dict[str, list[str]] = {
    "positions": [
        "commodity",
        "net_positions",
        "net_change",
        "long_positions",
        "long_change",
        "short_positions",
        "short_change",
    ],
    "history": ["commodity", "date", "value"],
}


def read_source_text(path: str | Path) -> str:
    """Read a raw CSV export as text.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    text = path.read_text(encoding="utf-8-sig")
    logger.info("Read %s (%d chars)", path, len(text))
    return text


def read_table(
    output_dir: str | Path,
    table_name: str,
    output_format: str,
    *,
    commodities: list[str] | None = None,
    columns: list[str] | None = None,
) -> pd.DataFrame:
    """Read an exported table with optional filtering.

    Args:
        output_dir: Directory containing the output files.
        table_name: ``"positions"`` or ``"history"``.
        output_format: ``"parquet"`` or ``"csv"``.
        commodities: Optional commodity names to keep (exact match).
        columns: Optional columns to select. ``commodity`` is always kept.

    Returns:
        Filtered ``pandas.DataFrame``.

    Raises:
        FileNotFoundError: If the table file does not exist.
        ValueError: If *output_format* is unsupported.
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {list(OUTPUT_FORMATS)}"
        )
    file_path = table_path(output_dir, table_name, output_format)
    if not file_path.exists():
        raise FileNotFoundError(f"Table file not found: {file_path}")

    if columns is not None and "commodity" not in columns:
        columns = ["commodity", *columns]

    if output_format == "parquet":
        filters = [("commodity", "in", commodities)] if commodities else None
        df = pq.read_table(file_path, columns=columns, filters=filters).to_pandas()
    else:
        text_cols = [
            c for c in _TEXT_COLUMNS.get(table_name, ["commodity"])
            if columns is None or c in columns
        ]
        df = pd.read_csv(
            file_path,
            usecols=columns,
            dtype={c: str for c in text_cols},
            keep_default_na=False,
            encoding="utf-8-sig",
        )
        if commodities:
            df = df[df["commodity"].isin(commodities)].reset_index(drop=True)

    logger.debug("Read %s: %d rows x %d cols", file_path.name, len(df), len(df.columns))
    return df
