"""
Demo script: parse COT exports via the public API and export the tables.

Usage:
    uv run python scripts/run_ingest.py                       # default inputs/
    uv run python scripts/run_ingest.py path/a.csv path/b.csv  # explicit files

Each input file is opened with ``cot_ingest.open()``, which detects
whether it is a positions snapshot or a weekly history. Outputs go to
outputs/<file stem>/.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

INPUT_FILES = [
    "inputs/cot_positions.csv",
    "inputs/cot_history.csv",
]

OUTPUT_ROOT = Path("outputs")

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_ingest")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import cot_ingest

    input_files = sys.argv[1:] or INPUT_FILES

    for input_path in input_files:
        if not Path(input_path).exists():
            log.warning("SKIP  %s  (file not found)", input_path)
            continue

        output_dir = str(OUTPUT_ROOT / Path(input_path).stem)
        log.info("=" * 70)
        log.info("Processing: %s -> %s", input_path, output_dir)
        log.info("=" * 70)

        ds = cot_ingest.open(input_path, output_dir=output_dir)
        info = ds.describe()
        if info.positions_assets:
            summary = ds.summary()
            log.info(
                "  Positions: %d assets (%d net long, %d net short), most active: %s (%s)",
                summary.total, summary.bullish, summary.bearish,
                summary.most_active, summary.most_active_change,
            )
        if info.history_assets:
            log.info(
                "  History: %d assets x %d weeks", info.history_assets, len(info.weeks)
            )

        for path in ds.export():
            log.info("  Wrote %s", path)

    log.info("All files processed.")


if __name__ == "__main__":
    main()
