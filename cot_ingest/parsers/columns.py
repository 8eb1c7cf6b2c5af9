"""
Column-role resolution for the snapshot (current positions) shape.

A snapshot export names the same seven concepts in many different ways
("Net Position", "Net Pos.", "Commercial Net", ...), in any order, and
frequently leaves the per-side change columns labelled only "Chg". The
resolver maps each semantic role to a physical column index in two
explicit passes:

1. **Alias pass**: each role takes the first header (left to right) whose
   normalised text contains any of that role's alias substrings.
2. **Adjacency pass**: long/short change columns that were not found, or
   that collided with another change role, are re-pointed at the column
   immediately to the right of their position column when that column is
   a change column ("chg" / "change" in its header).

The commodity role always resolves; it falls back to column 0.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum

logger = logging.getLogger(__name__)


class ColumnRole(str, Enum):
    """Semantic meaning of a snapshot column."""

    COMMODITY = "commodity"
    NET_POSITION = "net_position"
    NET_CHANGE = "net_change"
    LONG_POSITION = "long_position"
    LONG_CHANGE = "long_change"
    SHORT_POSITION = "short_position"
    SHORT_CHANGE = "short_change"


# Ordered role -> alias table. Aliases are matched against normalised
# headers (see parsers.base.normalize_header), so they contain no spaces.
DEFAULT_ALIASES: dict[ColumnRole, tuple[str, ...]] = {
    ColumnRole.COMMODITY: ("commodity", "asset", "market", "contract", "instrument", "symbol"),
    ColumnRole.NET_POSITION: ("netposition", "netpos", "totalnet", "commercialnet"),
    ColumnRole.NET_CHANGE: ("netchange", "netchg", "changeinnet"),
    ColumnRole.LONG_POSITION: ("longposition", "longs", "buypos", "long"),
    ColumnRole.LONG_CHANGE: ("longchange", "longchg", "chginlong", "changeinlong"),
    ColumnRole.SHORT_POSITION: ("shortposition", "shorts", "sellpos", "short"),
    ColumnRole.SHORT_CHANGE: ("shortchange", "shortchg", "chginshort", "changeinshort"),
}

_CHANGE_MARKERS = ("chg", "change")


@dataclass(frozen=True)
class ColumnRoleMap:
    """Resolved column index per role; ``None`` means unresolved.

    ``commodity`` is always an index: it defaults to 0.
    """

    commodity: int = 0
    net_position: int | None = None
    net_change: int | None = None
    long_position: int | None = None
    long_change: int | None = None
    short_position: int | None = None
    short_change: int | None = None


def find_column(headers: Sequence[str], aliases: Sequence[str]) -> int | None:
    """Return the first header index containing any alias, or ``None``."""
    for i, header in enumerate(headers):
        if any(alias in header for alias in aliases):
            return i
    return None


def change_columns(headers: Sequence[str]) -> set[int]:
    """Indices of headers that look like a change column."""
    return {
        i for i, header in enumerate(headers)
        if any(marker in header for marker in _CHANGE_MARKERS)
    }


def _adjacent_change(position: int | None, change_set: set[int]) -> int | None:
    """The column right of *position* if it is a change column."""
    if position is None:
        return None
    candidate = position + 1
    return candidate if candidate in change_set else None


def resolve_columns(
    headers: Sequence[str],
    aliases: Mapping[ColumnRole, Sequence[str]] | None = None,
) -> ColumnRoleMap:
    """Map every snapshot role to a column index.

    Args:
        headers: Header cells already passed through ``normalize_header()``.
        aliases: Role -> alias substrings. Defaults to ``DEFAULT_ALIASES``;
            roles missing from a custom mapping fall back to the defaults.

    Returns:
        A frozen ``ColumnRoleMap``.
    """
    table = dict(DEFAULT_ALIASES)
    if aliases:
        table.update(aliases)

    # -- Pass 1: alias matching --------------------------------------------
    found = {role: find_column(headers, table[role]) for role in ColumnRole}
    commodity = found.pop(ColumnRole.COMMODITY)
    roles = ColumnRoleMap(
        commodity=0 if commodity is None else commodity,
        **{role.value: idx for role, idx in found.items()},
    )

    # -- Pass 2: adjacency correction --------------------------------------
    change_set = change_columns(headers)

    if roles.long_position is not None and (
        roles.long_change is None or roles.long_change == roles.net_change
    ):
        adjacent = _adjacent_change(roles.long_position, change_set)
        if adjacent is not None:
            logger.debug("long_change -> column %d (adjacent to long)", adjacent)
            roles = replace(roles, long_change=adjacent)

    if roles.short_position is not None and (
        roles.short_change is None
        or roles.short_change == roles.net_change
        or roles.short_change == roles.long_change
    ):
        adjacent = _adjacent_change(roles.short_position, change_set)
        if adjacent is not None:
            logger.debug("short_change -> column %d (adjacent to short)", adjacent)
            roles = replace(roles, short_change=adjacent)

    logger.debug("Resolved columns: %s", roles)
    return roles
