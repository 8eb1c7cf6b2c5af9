"""
Table writer for cot-ingest.

Two tables come out of a dataset, each one file under ``output_dir``:

- ``positions``: one row per snapshot record. Every figure appears twice,
  once as the raw cell text (``net_positions``, ``long_change``, ...) and
  once parsed (``num_net_pos``, ``num_long_change``, ...).
- ``history``: long form, one row per (commodity, week) with
  ``week_index``, ``date``, the raw ``value`` and the parsed ``num_value``.

File names are ``{table}.{format}``, e.g. ``positions.parquet`` or
``history.csv``. ``table_path()`` builds them for both this module and
``reader.read_table()`` so the two sides always agree.

Parquet (the default) keeps the raw columns as strings without any
dtype guessing on read-back. CSV is written with a BOM so spreadsheet
tools open it as UTF-8.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from cot_ingest.exceptions import ExportError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: tuple[str, ...] = ("csv", "parquet")


def table_path(output_dir: str | Path, table_name: str, output_format: str) -> Path:
    """Return where *table_name* lives for *output_format*."""
    return Path(output_dir) / f"{table_name}.{output_format}"


def _write_table(df: pd.DataFrame, path: Path, output_format: str) -> None:
    """Write one positions/history frame.

    Raises:
        ExportError: Wrapping whatever pandas or pyarrow raised.
    """
    try:
        if output_format == "parquet":
            df.to_parquet(path, index=False, engine="pyarrow")
        else:
            df.to_csv(path, index=False, encoding="utf-8-sig")
    except Exception as exc:
        raise ExportError(f"Failed to write {path.name} as {output_format}: {exc}") from exc


def export_tables(
    tables: dict[str, pd.DataFrame],
    output_dir: str | Path,
    output_format: Literal["csv", "parquet"] = "parquet",
) -> list[str]:
    """Write the positions and/or history frames to *output_dir*.

    Tables are written in the order given; a dataset with only a history
    source passes only ``{"history": ...}``. *output_dir* is created if
    missing.

    Args:
        tables: Table name -> frame, as built by ``transforms.frames``.
        output_dir: Target directory.
        output_format: ``"csv"`` or ``"parquet"``.

    Returns:
        Paths written, as strings.

    Raises:
        ExportError: Unsupported *output_format*, or a failed write.
    """
    if output_format not in OUTPUT_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {list(OUTPUT_FORMATS)}"
        )

    Path(output_dir).mkdir(parents=True, exist_ok=True)

    written: list[str] = []
    for table_name, df in tables.items():
        path = table_path(output_dir, table_name, output_format)
        _write_table(df, path, output_format)
        written.append(str(path))
        commodities = df["commodity"].nunique() if "commodity" in df.columns else 0
        logger.info(
            "Exported '%s' -> %s (%d rows, %d commodities)",
            table_name,
            path.name,
            len(df),
            commodities,
        )

    return written
