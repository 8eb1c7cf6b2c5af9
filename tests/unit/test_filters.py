"""
Unit tests for record filters (cot_ingest.transforms.filters).
"""

from __future__ import annotations

import logging

from cot_ingest.parsers.timeseries import SeriesRecord
from cot_ingest.transforms.filters import (
    ALL_ASSETS,
    available_commodities,
    filter_focus,
    normalize_symbol,
    search_assets,
    select_asset,
)


def _records(*names: str) -> list[SeriesRecord]:
    return [SeriesRecord(commodity=n, weeks=()) for n in names]


class TestNormalizeSymbol:

    def test_strips_noise(self):
        assert normalize_symbol('"E-Mini S&P_500"') == "eminis&p500"


class TestFilterFocus:
    """Tests for filter_focus()."""

    def test_record_contains_symbol(self):
        records = _records("GOLD - COMMODITY EXCHANGE INC.", "Silver", "Corn")
        kept = filter_focus(records, ["Gold"])
        assert [r.commodity for r in kept] == ["GOLD - COMMODITY EXCHANGE INC."]

    def test_symbol_contains_record(self):
        kept = filter_focus(_records("Gold", "Corn"), ["Gold Futures"])
        assert [r.commodity for r in kept] == ["Gold"]

    def test_order_preserved(self):
        kept = filter_focus(_records("Silver", "Corn", "Gold"), ["gold", "silver"])
        assert [r.commodity for r in kept] == ["Silver", "Gold"]

    def test_empty_focus_keeps_all(self):
        records = _records("Silver", "Corn")
        assert filter_focus(records, []) == records

    def test_no_match_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cot_ingest.transforms.filters"):
            assert filter_focus(_records("Corn"), ["Bitcoin"]) == []
        assert "matched none" in caplog.text


class TestSelectAndSearch:
    """Tests for select_asset(), search_assets(), available_commodities()."""

    def test_select_exact(self):
        kept = select_asset(_records("Gold", "Gold Mini"), "Gold")
        assert [r.commodity for r in kept] == ["Gold"]

    def test_select_all(self):
        records = _records("Gold", "Corn")
        assert select_asset(records, ALL_ASSETS) == records
        assert select_asset(records, None) == records

    def test_search_substring_case_insensitive(self):
        kept = search_assets(_records("Crude Oil WTI", "Heating Oil", "Gold"), "OIL")
        assert [r.commodity for r in kept] == ["Crude Oil WTI", "Heating Oil"]

    def test_blank_search_keeps_all(self):
        records = _records("Gold", "Corn")
        assert search_assets(records, "  ") == records

    def test_available_commodities_sorted(self):
        assert available_commodities(_records("Silver", "Corn", "Gold")) == ["Corn", "Gold", "Silver"]
