"""
Number parsing for cot-ingest.

COT spreadsheets exported by hand or from web tools format the same
quantity in many ways:
- Thousands separators (e.g., "1,200", "257,149")
- Explicit plus signs on changes (e.g., "+50")
- Currency and percent decorations (e.g., "$1,234.50", "5%")
- Accounting-style negatives (e.g., "(500)")
- Stray quotes and padding left over from the CSV export

``parse_value()`` strips all of that and returns a plain float. It never
raises: anything that cannot be read as a number becomes ``0.0``.
"""

from __future__ import annotations

import math
import re

# Characters removed before parsing: quotes, plus, comma, dollar, percent, whitespace
_DECORATION_RE = re.compile(r"[\"+,\s$%]")

# Longest leading decimal literal; trailing junk after it is ignored.
# ASCII digits only: other scripts' digits are not numbers here.
_LEADING_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?", re.ASCII)


def parse_value(raw: str | None) -> float:
    """Convert a formatted numeric string into a float.

    Examples::

        >>> parse_value("$1,234.50")
        1234.5
        >>> parse_value("(500)")
        -500.0
        >>> parse_value("+2.5%")
        2.5
        >>> parse_value("abc")
        0.0

    Args:
        raw: The cell text as it appeared in the CSV.

    Returns:
        The signed value, or ``0.0`` for empty or unparseable input.
    """
    if not raw:
        return 0.0

    cleaned = _DECORATION_RE.sub("", raw)
    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned[1:-1]

    match = _LEADING_NUMBER_RE.match(cleaned)
    if match is None:
        return 0.0

    value = float(match.group(0))
    # e.g. "1e999" overflows to inf
    return value if math.isfinite(value) else 0.0
