"""
Shared test fixtures for cot-ingest tests.

Sample CSV texts are defined here as module-level constants and exposed
as fixtures. They imitate real exports: a title row above the header,
quoted thousands separators, accounting negatives, and a Barchart
attribution footer.
"""

import pytest

# ---------------------------------------------------------------------------
# Sample exports -- edit here if the fixtures need new cases
# ---------------------------------------------------------------------------
POSITIONS_CSV = """\
COT Report - Commercial Positions
"Last updated: Jan 12, 2024"
Commodity,Net Position,Net Chg,Long,Chg,Short,Chg
Gold,"+1,200",+50,"3,000",+20,"1,800",-30
Silver,"(2,500)",-100,"1,000",0,"3,500",+100
Crude Oil,$500,+5%,"4,000",+10,"3,500",-5
X,1,1,1,1,1,1
Downloaded from Barchart.com as of 01-12-2024
"""

HISTORY_CSV = """\
Weekly Net Positions
Commodity,2024-01-12,2024-01-05,2023-12-29,2023-12-22,2023-12-15,High,Low,Change %
Gold,"1,200","1,100","1,000",900,800,"1,200",800,9%
Silver,(500),(400),(300),(200),(100),(100),(500),-25%
Downloaded from Barchart.com
"""


@pytest.fixture()
def positions_csv() -> str:
    return POSITIONS_CSV


@pytest.fixture()
def history_csv() -> str:
    return HISTORY_CSV


@pytest.fixture()
def source_files(tmp_path):
    """Both sample exports written to disk; returns (positions_path, history_path)."""
    pos = tmp_path / "cot_positions.csv"
    hist = tmp_path / "cot_history.csv"
    pos.write_text(POSITIONS_CSV, encoding="utf-8")
    hist.write_text(HISTORY_CSV, encoding="utf-8")
    return pos, hist


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (full Dataset round trip on disk)",
    )
