from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Set, Tuple

from .config import Challenge, ChallengeKind
from .grid import Cell, column, row


class LineAxis(str, Enum):
    COLUMN = 'col'
    ROW = 'row'


@dataclass(frozen=True)
class LineHit:
    """A full row or column holding one value."""
    axis: LineAxis
    index: int
    value: int


def find_column_of_value(grid: Sequence[Cell], target: int, n: int) -> Optional[int]:
    for c in range(n):
        if all(v == target for v in column(grid, c, n)):
            return c
    return None


def find_row_of_value(grid: Sequence[Cell], target: int, n: int) -> Optional[int]:
    for r in range(n):
        if all(v == target for v in row(grid, r, n)):
            return r
    return None


def _uniform(values: List[Cell]) -> Optional[int]:
    first = values[0]
    if first is None:
        return None
    return first if all(v == first for v in values) else None


def uniform_lines(grid: Sequence[Cell], n: int) -> List[LineHit]:
    """Lists every column, then every row, whose cells all hold one value."""
    hits: List[LineHit] = []
    for c in range(n):
        v = _uniform(column(grid, c, n))
        if v is not None:
            hits.append(LineHit(LineAxis.COLUMN, c, v))
    for r in range(n):
        v = _uniform(row(grid, r, n))
        if v is not None:
            hits.append(LineHit(LineAxis.ROW, r, v))
    return hits


def check_challenge(
    grid: Sequence[Cell],
    n: int,
    challenge: Optional[Challenge],
    completed: bool,
) -> Optional[LineHit]:
    """Returns the first line meeting the challenge, or None once already completed."""
    if challenge is None or completed:
        return None
    if challenge.kind is ChallengeKind.COLUMN_OF_VALUE:
        c = find_column_of_value(grid, challenge.value, n)
        return LineHit(LineAxis.COLUMN, c, challenge.value) if c is not None else None
    r = find_row_of_value(grid, challenge.value, n)
    return LineHit(LineAxis.ROW, r, challenge.value) if r is not None else None


def award_line_bonuses(
    grid: Sequence[Cell],
    n: int,
    awarded: Sequence[LineHit],
) -> Tuple[List[LineHit], Tuple[LineHit, ...]]:
    """Finds uniform lines not yet rewarded.

    Returns (new_hits, still_awarded). A line stays in the awarded set only while
    it keeps the same uniform value; once broken or changed it may pay out again.
    """
    seen: Set[LineHit] = set(awarded)
    current = uniform_lines(grid, n)
    fresh = [hit for hit in current if hit not in seen]
    return fresh, tuple(current)
