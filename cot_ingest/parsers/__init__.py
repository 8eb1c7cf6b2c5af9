"""
Parsers sub-package for cot-ingest.

Contains the two shape-specific parsers that turn raw COT CSV text into
record lists, plus the helpers they share.

Design: Strategy Pattern
- base.py defines the BaseParser ABC and the shared leaf steps (line
  splitting, header normalisation, header-row scoring).
- columns.py resolves snapshot column roles (alias table + adjacency pass).
- snapshot.py implements SnapshotParser for current-positions exports.
- timeseries.py implements SeriesParser for weekly history exports.

detect.py (in the parent package) picks the parser for a file whose
shape is not known up front.
"""
