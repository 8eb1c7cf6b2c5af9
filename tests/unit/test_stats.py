"""
Unit tests for summary statistics, trend frames and DataFrame conversion
(cot_ingest.transforms.stats, cot_ingest.transforms.frames).
"""

from __future__ import annotations

import math

import pandas as pd
import pytest

from cot_ingest.parsers.snapshot import parse_positions_csv
from cot_ingest.parsers.timeseries import SeriesRecord, WeekEntry, parse_historical_csv
from cot_ingest.transforms.frames import (
    HISTORY_COLUMNS,
    POSITION_COLUMNS,
    history_to_frame,
    positions_to_frame,
)
from cot_ingest.transforms.stats import PositionSummary, summarize_positions, trend_frame


def _series(*values: float) -> SeriesRecord:
    """Newest-first weeks W0, W1, ..."""
    return SeriesRecord(
        commodity="Gold",
        weeks=tuple(WeekEntry(date=f"W{i}", value=str(v), num_value=float(v)) for i, v in enumerate(values)),
    )


class TestSummarizePositions:
    """Tests for summarize_positions()."""

    def test_sample_export(self, positions_csv):
        summary = summarize_positions(parse_positions_csv(positions_csv))
        assert summary == PositionSummary(
            total=3, bullish=2, bearish=1, most_active="Silver", most_active_change="-100",
        )

    def test_empty(self):
        assert summarize_positions([]) == PositionSummary(
            total=0, bullish=0, bearish=0, most_active="N/A", most_active_change="0",
        )

    def test_tie_keeps_first(self):
        text = "Commodity,Net Position,Net Chg\nGold,1,+10\nCorn,-1,-10\nFlat,0,0\n"
        summary = summarize_positions(parse_positions_csv(text))
        assert summary.most_active == "Gold"
        assert (summary.bullish, summary.bearish) == (1, 1)


class TestTrendFrame:
    """Tests for trend_frame()."""

    def test_oldest_first_with_velocity_and_sma(self, history_csv):
        gold = parse_historical_csv(history_csv)[0]
        df = trend_frame(gold)
        assert list(df.columns) == ["date", "position", "velocity", "sma", "original"]
        assert list(df["date"]) == [
            "2023-12-15", "2023-12-22", "2023-12-29", "2024-01-05", "2024-01-12",
        ]
        assert list(df["position"]) == [800.0, 900.0, 1000.0, 1100.0, 1200.0]
        assert list(df["velocity"]) == [0.0, 100.0, 100.0, 100.0, 100.0]
        assert df["sma"].iloc[:3].isna().all()
        assert df["sma"].iloc[3] == pytest.approx(950.0)
        assert df["sma"].iloc[4] == pytest.approx(1050.0)
        assert df["original"].iloc[-1] == "1,200"

    def test_window_keeps_most_recent(self):
        df = trend_frame(_series(*range(20, 0, -1)), window=12)
        assert len(df) == 12
        assert df["date"].iloc[-1] == "W0"
        assert df["position"].iloc[-1] == 20.0
        assert df["date"].iloc[0] == "W11"

    def test_custom_sma_period(self):
        df = trend_frame(_series(4, 2), sma_period=2)
        assert math.isnan(df["sma"].iloc[0])
        assert df["sma"].iloc[1] == pytest.approx(3.0)

    def test_empty_history(self):
        df = trend_frame(SeriesRecord(commodity="Gold", weeks=()))
        assert len(df) == 0
        assert list(df.columns) == ["date", "position", "velocity", "sma", "original"]


class TestFrames:
    """Tests for positions_to_frame() and history_to_frame()."""

    def test_positions_frame(self, positions_csv):
        df = positions_to_frame(parse_positions_csv(positions_csv))
        assert list(df.columns) == POSITION_COLUMNS
        assert list(df["commodity"]) == ["Gold", "Silver", "Crude Oil"]
        assert df.loc[1, "num_net_pos"] == -2500.0
        assert df.loc[0, "net_positions"] == "+1,200"

    def test_history_frame_long_form(self, history_csv):
        df = history_to_frame(parse_historical_csv(history_csv))
        assert list(df.columns) == HISTORY_COLUMNS
        assert len(df) == 10
        gold = df[df["commodity"] == "Gold"]
        assert list(gold["week_index"]) == [0, 1, 2, 3, 4]
        assert gold["date"].iloc[0] == "2024-01-12"

    def test_empty_frames_keep_schema(self):
        assert list(positions_to_frame([]).columns) == POSITION_COLUMNS
        hist = history_to_frame([])
        assert list(hist.columns) == HISTORY_COLUMNS
        assert pd.api.types.is_float_dtype(hist["num_value"])
