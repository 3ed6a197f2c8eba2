"""
Board Topology - The fixed 24-position nine men's morris board.

Positions are numbered left to right, top to bottom:

    0 ----------- 1 ----------- 2
    |             |             |
    |    3 ------ 4 ------ 5    |
    |    |        |        |    |
    |    |    6 - 7 - 8    |    |
    |    |    |       |    |    |
    9 - 10 - 11      12 - 13 - 14
    |    |    |       |    |    |
    |    |   15 - 16 - 17  |    |
    |    |        |        |    |
    |   18 ----- 19 ----- 20    |
    |             |             |
    21 ---------- 22 ---------- 23

Each position has up to four named neighbors. The tables are constant;
None marks a missing neighbor.
"""

from __future__ import annotations


NUM_POSITIONS = 24

LEFT: tuple[int | None, ...] = (
    None, 0, 1, None, 3, 4, None, 6, 7, None, 9, 10,
    None, 12, 13, None, 15, 16, None, 18, 19, None, 21, 22,
)
RIGHT: tuple[int | None, ...] = (
    1, 2, None, 4, 5, None, 7, 8, None, 10, 11, None,
    13, 14, None, 16, 17, None, 19, 20, None, 22, 23, None,
)
TOP: tuple[int | None, ...] = (
    None, None, None, None, 1, None, None, 4, None, 0, 3, 6,
    8, 5, 2, 11, None, 12, 10, 16, 13, 9, 19, 14,
)
BOTTOM: tuple[int | None, ...] = (
    9, 4, 14, 10, 7, 13, 11, None, 12, 21, 18, 15,
    17, 20, 23, None, 19, None, None, 22, None, None, None, None,
)


def neighbors(pos: int) -> tuple[int, ...]:
    """Get all adjacent positions (left, right, top, bottom order)."""
    return NEIGHBORS[pos]


def _line_from(pos: int, before: tuple[int | None, ...], after: tuple[int | None, ...]) -> tuple[int, int, int] | None:
    # Only start lines at their first cell so every line is built once.
    if before[pos] is not None:
        return None
    middle = after[pos]
    if middle is None:
        return None
    last = after[middle]
    if last is None:
        return None
    return (pos, middle, last)


def _build_mill_lines() -> tuple[tuple[int, int, int], ...]:
    lines = []
    for pos in range(NUM_POSITIONS):
        horizontal = _line_from(pos, LEFT, RIGHT)
        if horizontal:
            lines.append(horizontal)
    for pos in range(NUM_POSITIONS):
        vertical = _line_from(pos, TOP, BOTTOM)
        if vertical:
            lines.append(vertical)
    return tuple(lines)


NEIGHBORS: tuple[tuple[int, ...], ...] = tuple(
    tuple(n for n in (LEFT[p], RIGHT[p], TOP[p], BOTTOM[p]) if n is not None)
    for p in range(NUM_POSITIONS)
)

# 8 horizontal lines followed by 8 vertical lines
MILL_LINES: tuple[tuple[int, int, int], ...] = _build_mill_lines()


def mill_lines_through(pos: int) -> list[tuple[int, int, int]]:
    """Get the (always two) mill lines a position belongs to."""
    return [line for line in MILL_LINES if pos in line]
