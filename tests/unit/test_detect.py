"""
Unit tests for shape detection (cot_ingest.detect).
"""

import pytest

from cot_ingest.detect import detect_shape
from cot_ingest.parsers.columns import ColumnRole


class TestDetectShape:
    """Tests for detect_shape()."""

    def test_positions_sample(self, positions_csv):
        assert detect_shape(positions_csv) == "positions"

    def test_history_sample(self, history_csv):
        assert detect_shape(history_csv) == "history"

    def test_minimal_positions_header(self):
        assert detect_shape("Market,Longs,Shorts\nGold,1,2\n") == "positions"

    @pytest.mark.parametrize("text", ["", "\n\n"])
    def test_empty_is_history(self, text):
        assert detect_shape(text) == "history"

    def test_custom_aliases(self):
        text = "Ticker,Bulls,Bears\nES,1,2\n"
        assert detect_shape(text) == "history"
        aliases = {
            ColumnRole.COMMODITY: ["ticker"],
            ColumnRole.LONG_POSITION: ["bulls"],
            ColumnRole.SHORT_POSITION: ["bears"],
        }
        assert detect_shape(text, aliases) == "positions"

