"""
Transforms sub-package for cot-ingest.

Small, independently testable steps applied to raw cells or to parsed
records:
  - numbers.py: Turn formatted numeric text into floats.
  - filters.py: Focus-list filtering, asset selection, substring search.
  - frames.py: Record lists -> pandas DataFrames.
  - stats.py: Snapshot summary statistics and per-asset trend frames.
"""
