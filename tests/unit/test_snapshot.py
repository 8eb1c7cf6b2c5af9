"""
Unit tests for the snapshot parser (cot_ingest.parsers.snapshot).

Covers the end-to-end scenario, title rows above the header, footer
and short-row skipping, unresolved-column defaults, and purity.
"""

from __future__ import annotations

import pytest

from cot_ingest.parsers.columns import ColumnRole
from cot_ingest.parsers.snapshot import SnapshotParser, SnapshotRecord, parse_positions_csv

BASIC = """\
Commodity,Net Position,Net Chg,Long,Chg,Short,Chg
Gold,"+1,200",+50,"3,000",+20,"1,800",-30
"""


class TestSnapshotScenario:
    """The canonical single-row example."""

    def test_single_record(self):
        records = parse_positions_csv(BASIC)
        assert records == [
            SnapshotRecord(
                commodity="Gold",
                net_positions="+1,200",
                net_change="+50",
                long_positions="3,000",
                long_change="+20",
                short_positions="1,800",
                short_change="-30",
                num_net_pos=1200.0,
                num_net_change=50.0,
                num_long=3000.0,
                num_long_change=20.0,
                num_short=1800.0,
                num_short_change=-30.0,
            )
        ]

    def test_crlf_line_endings(self):
        records = parse_positions_csv(BASIC.replace("\n", "\r\n"))
        assert len(records) == 1
        assert records[0].short_change == "-30"


class TestSnapshotMessyInput:
    """Title rows, footers, short rows."""

    def test_sample_export(self, positions_csv):
        records = parse_positions_csv(positions_csv)
        assert [r.commodity for r in records] == ["Gold", "Silver", "Crude Oil"]

    def test_accounting_and_currency(self, positions_csv):
        silver, crude = parse_positions_csv(positions_csv)[1:]
        assert silver.net_positions == "(2,500)"
        assert silver.num_net_pos == -2500.0
        assert crude.num_net_pos == 500.0
        assert crude.num_net_change == 5.0

    def test_footer_row_excluded(self):
        text = BASIC + "Downloaded from Barchart.com,1,2,3,4,5,6\n"
        records = parse_positions_csv(text)
        assert [r.commodity for r in records] == ["Gold"]

    def test_short_commodity_excluded(self):
        records = parse_positions_csv(BASIC + "X,1,1,1,1,1,1\n")
        assert len(records) == 1

    def test_row_shorter_than_commodity_column_skipped(self):
        text = "Net Position,Long,Short,Commodity\n100,200,100,Gold\n5,6\n"
        records = parse_positions_csv(text)
        assert [r.commodity for r in records] == ["Gold"]

    def test_short_row_fills_zero(self):
        records = parse_positions_csv(BASIC + "Copper,250\n")
        copper = records[1]
        assert copper.net_positions == "250"
        assert copper.short_positions == "0"
        assert copper.num_short == 0.0

    def test_empty_cell_reads_as_zero(self):
        records = parse_positions_csv(BASIC + "Copper,,+5,,,,\n")
        assert records[1].net_positions == "0"
        assert records[1].num_net_change == 5.0

    def test_unresolved_roles_default_to_zero(self):
        text = "Market,Longs\nWheat,\"12,000\"\n"
        (wheat,) = parse_positions_csv(text)
        assert wheat.num_long == 12000.0
        assert wheat.net_positions == "0"
        assert wheat.short_change == "0"
        assert wheat.num_short == 0.0

    def test_no_commodity_alias_uses_first_column(self):
        text = "Name,Net Position\nCorn,-300\n"
        (corn,) = parse_positions_csv(text)
        assert corn.commodity == "Corn"
        assert corn.num_net_pos == -300.0

    def test_rows_above_header_ignored(self):
        text = "Gold,1,2,3\n" + BASIC
        records = parse_positions_csv(text)
        assert [r.commodity for r in records] == ["Gold"]
        assert records[0].num_net_pos == 1200.0

    def test_custom_aliases(self):
        text = "Ticker,Bulls,Bears\nES,100,40\n"
        parser = SnapshotParser({
            ColumnRole.COMMODITY: ["ticker"],
            ColumnRole.LONG_POSITION: ["bulls"],
            ColumnRole.SHORT_POSITION: ["bears"],
        })
        (es,) = parser.parse(text)
        assert (es.commodity, es.num_long, es.num_short) == ("ES", 100.0, 40.0)


class TestSnapshotEdgeCases:
    """Empty input and purity."""

    @pytest.mark.parametrize("text", ["", "   \n\n", BASIC.splitlines()[0]])
    def test_too_short_input(self, text):
        assert parse_positions_csv(text) == []

    def test_parsing_is_pure(self, positions_csv):
        parser = SnapshotParser()
        assert parser.parse(positions_csv) == parser.parse(positions_csv)
        assert parse_positions_csv(positions_csv) == parse_positions_csv(positions_csv)
