"""
Dataset handle for cot-ingest.

The ``Dataset`` class is a **handle object** that bundles a config with
its raw-text sources. Once created (via ``cot_ingest.open()`` or
``Dataset.from_text()``), it remembers where the positions and history
exports live, so callers never repeat paths or alias settings.

It covers the whole record lifecycle:
- **Parse**: ``positions()`` / ``history()`` read the source text, run
  the matching parser, and apply the configured focus list.
- **Analyse**: ``summary()`` and ``trend()`` over the parsed records.
- **Persist**: ``export()`` writes the record tables; ``load()`` reads
  them back; ``describe()`` gives a quick overview.

Sources can be files named in the config or in-memory text (an upload,
a bundled default, or text persisted elsewhere). In-memory text wins
over a configured path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from cot_ingest.config import IngestConfig, save_config
from cot_ingest.export import export_tables
from cot_ingest.parsers.snapshot import SnapshotParser, SnapshotRecord
from cot_ingest.parsers.timeseries import SeriesParser, SeriesRecord
from cot_ingest.reader import read_source_text, read_table
from cot_ingest.transforms.filters import filter_focus
from cot_ingest.transforms.frames import history_to_frame, positions_to_frame
from cot_ingest.transforms.stats import PositionSummary, summarize_positions, trend_frame

logger = logging.getLogger(__name__)

TABLE_NAMES = ("positions", "history")


# ---------------------------------------------------------------------------
# DatasetInfo -- lightweight overview
# ---------------------------------------------------------------------------

@dataclass
class DatasetInfo:
    """Overview of a dataset, returned by ``Dataset.describe()``.

    Attributes:
        config_path: Path to the ``cotconfig.yaml``, or ``None`` for an
            in-memory dataset.
        positions_assets: Number of snapshot records after focus filtering.
        history_assets: Number of series records after focus filtering.
        weeks: Week labels of the history, in source column order.
        focus_symbols: The configured focus list.
        output_format: ``"parquet"`` or ``"csv"``.
        output_dir: Path to the output directory.
    """

    config_path: str | None
    positions_assets: int = 0
    history_assets: int = 0
    weeks: list[str] = field(default_factory=list)
    focus_symbols: list[str] = field(default_factory=list)
    output_format: str = "parquet"
    output_dir: str = ""


# ---------------------------------------------------------------------------
# Dataset -- the main handle class
# ---------------------------------------------------------------------------

class Dataset:
    """Handle object for a cot-ingest dataset.

    Attributes:
        config: The ``IngestConfig`` (always available).
        config_path: Path to the ``cotconfig.yaml`` on disk, if any.
    """

    def __init__(
        self,
        config: IngestConfig,
        config_path: str | Path | None = None,
        *,
        positions_text: str | None = None,
        history_text: str | None = None,
    ) -> None:
        self.config = config
        self.config_path = Path(config_path) if config_path is not None else None
        self._positions_text = positions_text
        self._history_text = history_text

    @classmethod
    def from_text(
        cls,
        positions_text: str | None = None,
        history_text: str | None = None,
        config: IngestConfig | None = None,
    ) -> Dataset:
        """Build a handle over in-memory CSV text."""
        return cls(
            config or IngestConfig(),
            positions_text=positions_text,
            history_text=history_text,
        )

    # -- Properties ---------------------------------------------------------

    @property
    def output_dir(self) -> Path:
        """Resolved output directory from the config."""
        return Path(self.config.output.output_dir)

    def __repr__(self) -> str:
        src = self.config.source
        return (
            f"Dataset(positions={src.positions_path!r}, history={src.history_path!r}, "
            f"config_path={str(self.config_path) if self.config_path else None!r})"
        )

    # -- Parse side ---------------------------------------------------------

    def positions(self) -> list[SnapshotRecord]:
        """Parse the positions source and apply the focus list.

        Returns an empty list when no positions source is configured.
        """
        text = self._read(self._positions_text, self.config.source.positions_path)
        if text is None:
            return []
        records = SnapshotParser(self.config.aliases.as_mapping()).parse(text)
        logger.info("Parsed %d position records", len(records))
        return filter_focus(records, self.config.focus_symbols)

    def history(self) -> list[SeriesRecord]:
        """Parse the history source and apply the focus list.

        Returns an empty list when no history source is configured.
        """
        text = self._read(self._history_text, self.config.source.history_path)
        if text is None:
            return []
        records = SeriesParser().parse(text)
        logger.info("Parsed %d history records", len(records))
        return filter_focus(records, self.config.focus_symbols)

    # -- Analysis -----------------------------------------------------------

    def summary(self) -> PositionSummary:
        """Headline statistics over ``positions()``."""
        return summarize_positions(self.positions())

    def trend(self, commodity: str, window: int = 12, sma_period: int = 4) -> pd.DataFrame:
        """Weekly trend frame for one commodity (see ``transforms.stats.trend_frame``).

        Raises:
            ValueError: If *commodity* is not in ``history()``.
        """
        for record in self.history():
            if record.commodity == commodity:
                return trend_frame(record, window=window, sma_period=sma_period)
        raise ValueError(f"Commodity '{commodity}' not found in history data.")

    # -- Write / read side --------------------------------------------------

    def export(self) -> list[str]:
        """Write ``positions`` and ``history`` tables to ``output_dir``.

        Only tables whose source is available are written.

        Returns:
            List of output file paths that were written.
        """
        tables: dict[str, pd.DataFrame] = {}
        if self._has_source(self._positions_text, self.config.source.positions_path):
            tables["positions"] = positions_to_frame(self.positions())
        if self._has_source(self._history_text, self.config.source.history_path):
            tables["history"] = history_to_frame(self.history())
        return export_tables(tables, self.output_dir, self.config.output.output_format)

    def load(self, table: str, commodities: list[str] | None = None) -> pd.DataFrame:
        """Read an exported table back.

        Raises:
            ValueError: If *table* is not ``"positions"`` or ``"history"``.
            FileNotFoundError: If the table has not been exported yet.
        """
        if table not in TABLE_NAMES:
            raise ValueError(
                f"Table '{table}' not found. Available tables: {list(TABLE_NAMES)}"
            )
        return read_table(
            self.output_dir, table, self.config.output.output_format,
            commodities=commodities,
        )

    def describe(self) -> DatasetInfo:
        """Parse both sources and summarise what they contain."""
        positions = self.positions()
        history = self.history()
        weeks = [w.date for w in history[0].weeks] if history else []
        return DatasetInfo(
            config_path=str(self.config_path) if self.config_path else None,
            positions_assets=len(positions),
            history_assets=len(history),
            weeks=weeks,
            focus_symbols=list(self.config.focus_symbols),
            output_format=self.config.output.output_format,
            output_dir=str(self.output_dir),
        )

    def save_config(self, path: str | Path | None = None) -> None:
        """Write ``self.config`` to *path* (default: ``self.config_path``).

        Raises:
            ValueError: If neither *path* nor ``config_path`` is set.
        """
        target = Path(path) if path is not None else self.config_path
        if target is None:
            raise ValueError("No config path set; pass one explicitly.")
        save_config(self.config, target)
        self.config_path = target

    # -- Private helpers ----------------------------------------------------

    @staticmethod
    def _has_source(text: str | None, path: str | None) -> bool:
        return text is not None or path is not None

    @staticmethod
    def _read(text: str | None, path: str | None) -> str | None:
        if text is not None:
            return text
        if path is not None:
            return read_source_text(path)
        return None
