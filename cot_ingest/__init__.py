"""
cot-ingest: Python library for ingesting Commitment of Traders CSV exports.

Public API surface:

- ``parse_positions_csv(text)`` -- parse a current-positions export into
  ``SnapshotRecord`` objects. Never raises.

- ``parse_historical_csv(text)`` -- parse a weekly history export into
  ``SeriesRecord`` objects. Never raises.

- ``open(path, ...)`` -- **recommended entry point** for files.
  Polymorphic: accepts either a raw CSV export or an existing
  ``cotconfig.yaml`` and returns a ``Dataset`` handle.

- ``Dataset`` -- handle with ``positions()``, ``history()``,
  ``summary()``, ``trend()``, ``export()``, ``load()``, ``describe()``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cot_ingest.config import generate_default_config, load_config
from cot_ingest.dataset import Dataset
from cot_ingest.detect import detect_shape
from cot_ingest.parsers.snapshot import SnapshotRecord, parse_positions_csv
from cot_ingest.parsers.timeseries import SeriesRecord, WeekEntry, parse_historical_csv
from cot_ingest.reader import read_source_text
from cot_ingest.transforms.numbers import parse_value

__all__ = [
    "open",
    "Dataset",
    "parse_positions_csv",
    "parse_historical_csv",
    "parse_value",
    "SnapshotRecord",
    "SeriesRecord",
    "WeekEntry",
]

logger = logging.getLogger(__name__)


def open(path: str, output_dir: str | None = None) -> Dataset:
    """Single entry point: open a COT CSV export or an existing config.

    Polymorphic behaviour based on the file extension of *path*:

    - **YAML file** (``.yaml`` / ``.yml``): Loads the config and returns a
      ``Dataset`` handle over the sources it names.

    - **CSV export**: Detects whether the file is a positions snapshot or
      a weekly history (``detect.detect_shape``) and returns a ``Dataset``
      with an in-memory default config pointing at it. Call
      ``Dataset.save_config(path)`` to keep that config.

    Args:
        path: Path to a CSV export or a ``cotconfig.yaml``.
        output_dir: Where exports will be written. Ignored for YAML
            configs. Defaults to ``"outputs/"``.

    Returns:
        A ``Dataset`` handle.

    Examples::

        ds = cot_ingest.open("inputs/cot_positions.csv", output_dir="outputs/cot")
        for rec in ds.positions():
            print(rec.commodity, rec.num_net_pos)

        ds = cot_ingest.open("outputs/cot.yaml")
        ds.export()
    """
    p = Path(path)

    if p.suffix.lower() in (".yaml", ".yml"):
        logger.info("open() -- loading config from %s", path)
        return Dataset(load_config(p), p)

    shape = detect_shape(read_source_text(p))
    if output_dir is None:
        output_dir = "outputs/"
    if shape == "positions":
        config = generate_default_config(positions_path=str(p), output_dir=output_dir)
    else:
        config = generate_default_config(history_path=str(p), output_dir=output_dir)
    logger.info("open() -- %s treated as %s export", path, shape)
    return Dataset(config)
