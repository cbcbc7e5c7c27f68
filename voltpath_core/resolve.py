from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple

from .grid import Cell, Grid, with_values
from .gravity import fall_distances, settle
from .scoring import base_points, final_points, is_valid_path, should_celebrate

logger = logging.getLogger(__name__)

NOOP = 'noop'
REJECTED = 'rejected'
RESOLVED = 'resolved'

PathValidator = Callable[[Sequence[int], int], bool]


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one released path against the grid."""
    kind: str
    grid: Grid
    score: int
    combo: int
    stock: int
    path: Tuple[int, ...] = ()
    new_value: Optional[int] = None
    destroyed: bool = False
    points: int = 0
    cells_used: int = 0
    celebrate: bool = False
    falls: Dict[int, int] = field(default_factory=dict)


def resolve(
    path: Sequence[int],
    path_value: Optional[int],
    grid: Sequence[Cell],
    max_value: int,
    score: int,
    stock: int,
    combo: int,
    n: int,
    rng: Optional[random.Random] = None,
    validator: Optional[PathValidator] = None,
) -> ResolutionResult:
    """Validates a released path and applies its transform.

    Valid paths turn every cell into the path length L. When L exceeds max_value
    the cells are destroyed, the combo grows and multiplies the points, and the
    board settles from stock. Otherwise the combo resets and no multiplier applies.
    """
    grid_t: Grid = tuple(grid)
    if not path or path_value is None:
        return ResolutionResult(NOOP, grid_t, score, combo, stock)
    check = validator or is_valid_path
    if not check(path, path_value):
        logger.debug("rejected path of %d cells valued %d", len(path), path_value)
        return ResolutionResult(REJECTED, grid_t, score, combo, stock)

    length = len(path)
    cells = tuple(path)
    base = base_points(length, length)

    if length <= max_value:
        merged = with_values(grid_t, cells, length)
        logger.debug("merged %d cells into %d (+%d)", length, length, base)
        return ResolutionResult(
            RESOLVED, merged, score + base, 0, stock,
            path=cells, new_value=length, points=base,
        )

    next_combo = combo + 1
    points = final_points(base, next_combo)
    cleared = with_values(grid_t, cells, None)
    settled, used = settle(cleared, stock, max_value, n, rng)
    logger.debug("destroyed %d cells, combo %d (+%d)", length, next_combo, points)
    return ResolutionResult(
        RESOLVED,
        settled,
        score + points,
        next_combo,
        stock - used,
        path=cells,
        new_value=length,
        destroyed=True,
        points=points,
        cells_used=used,
        celebrate=should_celebrate(length, next_combo, length),
        falls=fall_distances(cleared, settled, n),
    )
